import pytest

from eth_bridge.core.errors import ConfigLoadError
from eth_bridge.services.keys import load_private_keys


def test_loads_trimmed_non_empty_lines(tmp_path):
    keys_file = tmp_path / "pk.txt"
    keys_file.write_text("  0xaaa  \n\n0xbbb\r\n   \n0xccc", encoding="utf-8")

    assert load_private_keys(keys_file) == ["0xaaa", "0xbbb", "0xccc"]


def test_empty_file_yields_no_keys(tmp_path):
    keys_file = tmp_path / "pk.txt"
    keys_file.write_text("\n\n", encoding="utf-8")

    assert load_private_keys(keys_file) == []


def test_missing_file_raises_config_error(tmp_path):
    with pytest.raises(ConfigLoadError, match="Failed to load private keys"):
        load_private_keys(tmp_path / "missing.txt")
