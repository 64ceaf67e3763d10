"""Private key loading."""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..core.errors import ConfigLoadError


def load_private_keys(path: Path) -> List[str]:
    """Read one private key per line, dropping blank lines and surrounding whitespace."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Failed to load private keys: {exc}") from exc
    return [key.strip() for key in content.splitlines() if key.strip()]
