from txsender.config import Settings
from txsender.connection import Connection
from txsender.providers.jsonrpc import JsonRpcProvider


def test_defaults(monkeypatch):
    for name in ("NEAR_NO_LOGS", "NETWORK_ID", "TX_NONCE_RETRY_NUMBER"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.network_id == "testnet"
    assert settings.tx_nonce_retry_number == 12
    assert settings.tx_nonce_retry_wait_ms == 500
    assert settings.tx_nonce_retry_wait_backoff == 1.5
    assert settings.emit_logs is True


def test_near_no_logs_from_environment(monkeypatch):
    """NEAR_NO_LOGS disables receipt diagnostics."""

    monkeypatch.setenv("NEAR_NO_LOGS", "true")

    settings = Settings()

    assert settings.near_no_logs is True
    assert settings.emit_logs is False


def test_retry_overrides_from_environment(monkeypatch):
    monkeypatch.setenv("TX_NONCE_RETRY_NUMBER", "4")
    monkeypatch.setenv("TX_NONCE_RETRY_WAIT_MS", "250")

    settings = Settings()

    assert settings.tx_nonce_retry_number == 4
    assert settings.tx_nonce_retry_wait_ms == 250


def test_connection_from_settings():
    settings = Settings(network_id="mainnet", node_url="https://rpc.mainnet.example", request_retry_number=3)
    signer = object()

    connection = Connection.from_settings(signer, settings)

    assert connection.network_id == "mainnet"
    assert connection.signer is signer
    assert isinstance(connection.provider, JsonRpcProvider)
    assert connection.provider.url == "https://rpc.mainnet.example"
    assert connection.provider.retry_config.max_attempts == 3
