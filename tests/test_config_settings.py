from pathlib import Path

from eth_bridge.config import Settings


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)

    settings = Settings()

    assert settings.keys_file == tmp_path / "config" / "pk.txt"
    assert settings.log_dir == tmp_path / "logs"
    assert settings.status_poll_interval_seconds == 3.0
    assert settings.status_poll_max_attempts == 100


def test_relay_base_url_follows_network():
    settings = Settings()

    assert settings.relay_base_url(True) == "https://api.testnets.relay.link"
    assert settings.relay_base_url(False) == "https://api.relay.link"


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("ETH_BRIDGE_STATUS_POLL_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("ETH_BRIDGE_RELAY_TESTNET_URL", "https://relay.test/")
    monkeypatch.setenv("ETH_BRIDGE_LOG_DIR", str(tmp_path / "out"))

    settings = Settings()

    assert settings.status_poll_max_attempts == 5
    assert settings.relay_base_url(True) == "https://relay.test"
    assert settings.log_dir == tmp_path / "out"


def test_keys_file_legacy_alias(monkeypatch, tmp_path):
    monkeypatch.delenv("ETH_BRIDGE_KEYS_FILE", raising=False)
    monkeypatch.setenv("PK_FILE", str(tmp_path / "keys.txt"))

    settings = Settings()

    assert settings.keys_file == tmp_path / "keys.txt"


def test_extra_rpcs_from_json_env(monkeypatch):
    monkeypatch.setenv("ETH_BRIDGE_EXTRA_RPCS", '{"84532": ["https://base-sepolia.example"]}')

    settings = Settings()

    assert settings.extra_rpcs == {84532: ["https://base-sepolia.example"]}


def test_relative_keys_path_resolves_against_cwd(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)

    settings = Settings(keys_file=Path("wallets.txt"))

    assert settings.keys_file == tmp_path / "wallets.txt"
