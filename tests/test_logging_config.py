import logging
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from eth_bridge.core.bridge.poller import StatusPoller
from eth_bridge.logging_config import BridgeLog, render_log_line


def read_log(log):
    return log.log_file.read_text(encoding="utf-8").splitlines()


def test_writes_dated_file_with_levels(tmp_path):
    with BridgeLog(tmp_path, level="INFO") as log:
        log.info("Loaded 2 private keys")
        log.success("Bridge transfer successful")
        log.warn("Low balance")
        log.error("Bridge failure")
        log.debug("Attempting connection to RPC: https://rpc.example")

    assert log.log_file == tmp_path / f"{date.today().isoformat()}.log"
    lines = read_log(log)
    assert len(lines) == 5
    assert lines[0].endswith("| INFO    | Loaded 2 private keys")
    assert lines[1].endswith("| SUCCESS | Bridge transfer successful")
    assert lines[2].endswith("| WARN    | Low balance")
    assert lines[3].endswith("| ERROR   | Bridge failure")
    assert lines[4].endswith("| DEBUG   | Attempting connection to RPC: https://rpc.example")


def test_console_honours_level_while_file_keeps_debug(tmp_path):
    with BridgeLog(tmp_path, level="INFO") as log:
        console, file_handler = logging.getLogger().handlers

        assert console.level == logging.INFO
        assert file_handler.level == logging.DEBUG
        assert logging.getLogger().level == logging.DEBUG


@pytest.mark.asyncio
async def test_status_poll_errors_reach_dated_file_at_default_level(tmp_path):
    relay = MagicMock()
    relay.get_status = AsyncMock(
        side_effect=[ConnectionError("connection reset"), {"status": "success", "txHashes": ["0x" + "ab" * 32]}]
    )

    with BridgeLog(tmp_path, level="INFO") as log:
        poller = StatusPoller(log, relay=relay, sleep=AsyncMock())
        await poller.poll("0xrequest")

    lines = read_log(log)
    assert any(line.endswith("| DEBUG   | Status check error: connection reset") for line in lines)
    assert any("| SUCCESS | Bridge transfer successful" in line for line in lines)


def test_close_detaches_handlers(tmp_path):
    log = BridgeLog(tmp_path).open()
    assert log.is_open

    log.close()

    assert not log.is_open


def test_render_log_line_format():
    line = render_log_line(
        None,
        "warning",
        {"timestamp": "01/02/2025, 10:11:12", "level": "warning", "event": "careful"},
    )

    assert line == "01/02/2025, 10:11:12 | WARN    | careful"
