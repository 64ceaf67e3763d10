"""
Logging for the bridge CLI using structlog.

Every line is echoed to the console with a colored level and appended to a
dated log file (``<log_dir>/<YYYY-MM-DD>.log``) as ``timestamp | LEVEL | message``.
"""

from __future__ import annotations

import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, List, Optional

import structlog

TIMESTAMP_FORMAT = "%d/%m/%Y, %H:%M:%S"
SUCCESS = "success"


def _promote_success(logger: Any, method_name: str, event_dict: structlog.types.EventDict) -> structlog.types.EventDict:
    """Relabel records flagged with ``outcome="success"`` as their own level."""
    if event_dict.pop("outcome", None) == SUCCESS:
        event_dict["level"] = SUCCESS
    return event_dict


def render_log_line(logger: Any, method_name: str, event_dict: structlog.types.EventDict) -> str:
    level = str(event_dict.get("level", "info")).upper()
    if level == "WARNING":
        level = "WARN"
    line = f"{event_dict.get('timestamp', '')} | {level:<7} | {event_dict.get('event', '')}"
    exc = event_dict.get("exception")
    if exc:
        line = f"{line}\n{exc}"
    return line


def console_level_styles() -> dict[str, str]:
    styles = structlog.dev.ConsoleRenderer.get_default_level_styles(colors=True)
    styles.update(
        {
            "info": structlog.dev.BLUE,
            "debug": structlog.dev.YELLOW,
            "warning": structlog.dev.YELLOW,
            "warn": structlog.dev.YELLOW,
            "error": structlog.dev.RED,
            SUCCESS: structlog.dev.GREEN,
        }
    )
    return styles


def setup_logging(log_level: str = "INFO", log_file: Optional[Path] = None) -> List[logging.Handler]:
    """Configure structlog and attach console (and optional file) handlers.

    Args:
        log_level: Console log level name.
        log_file: Append plain log lines here when given, at every level.

    Returns:
        The handlers installed on the root logger.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    # Shared processors for both structlog and stdlib
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _promote_success,
        structlog.processors.TimeStamper(fmt=TIMESTAMP_FORMAT, utc=False),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.dev.ConsoleRenderer(level_styles=console_level_styles()),
            ],
        )
    )
    handlers: List[logging.Handler] = [console]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=shared_processors,
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.format_exc_info,
                    render_log_line,
                ],
            )
        )
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    # The dated file always keeps debug traces; the console honours log_level
    root.setLevel(logging.DEBUG)

    # Quiet noisy third-party loggers
    for name in ("httpcore", "httpx"):
        logging.getLogger(name).setLevel(logging.WARNING)

    return handlers


class BridgeLog:
    """Leveled logging service handed to every component of a bridge run.

    Usage:
        with BridgeLog(settings.log_dir, level=settings.log_level) as log:
            log.info("Loaded 3 private keys")
            log.success("Bridge transfer successful")
    """

    def __init__(
        self,
        log_dir: Path,
        *,
        level: str = "INFO",
        name: str = "eth_bridge",
    ) -> None:
        self.log_dir = Path(log_dir)
        self.level = level
        self._logger = structlog.stdlib.get_logger(name)
        self._handlers: List[logging.Handler] = []

    @property
    def log_file(self) -> Path:
        return self.log_dir / f"{date.today().isoformat()}.log"

    @property
    def is_open(self) -> bool:
        return bool(self._handlers)

    def open(self) -> "BridgeLog":
        if not self._handlers:
            self._handlers = setup_logging(self.level, self.log_file)
        return self

    def close(self) -> None:
        root = logging.getLogger()
        for handler in self._handlers:
            handler.flush()
            root.removeHandler(handler)
            handler.close()
        self._handlers = []

    def __enter__(self) -> "BridgeLog":
        return self.open()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def success(self, message: str, **kwargs: Any) -> None:
        self._logger.info(message, outcome=SUCCESS, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._logger.error(message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._logger.info(message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._logger.debug(message, **kwargs)

    def warn(self, message: str, **kwargs: Any) -> None:
        self._logger.warning(message, **kwargs)
