from __future__ import annotations

import pytest

from eventq_sdk.config import DEFAULT_SERVER_URL, ClientConfig


def test_defaults() -> None:
    cfg = ClientConfig()
    assert cfg.enabled
    assert cfg.server_url == DEFAULT_SERVER_URL
    assert cfg.submission_batch_size == 50
    assert cfg.processing_interval == 10.0
    assert cfg.user_agent.startswith("eventq-sdk-python")


@pytest.mark.parametrize("kwargs", [{"submission_batch_size": 0}, {"processing_interval": 0}])
def test_rejects_invalid_values(kwargs) -> None:
    with pytest.raises(ValueError):
        ClientConfig(**kwargs)


def test_from_env(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("EVENTQ_API_KEY", "0123456789abcdef")
    monkeypatch.setenv("EVENTQ_SERVER_URL", "http://localhost:5000")
    monkeypatch.setenv("EVENTQ_ENABLED", "false")
    monkeypatch.setenv("EVENTQ_BATCH_SIZE", "25")
    monkeypatch.setenv("EVENTQ_PROCESSING_INTERVAL", "2.5")
    monkeypatch.setenv("EVENTQ_STORAGE_PATH", str(tmp_path))

    cfg = ClientConfig.from_env()
    assert cfg.api_key == "0123456789abcdef"
    assert cfg.server_url == "http://localhost:5000"
    assert not cfg.enabled
    assert cfg.submission_batch_size == 25
    assert cfg.processing_interval == 2.5
    assert cfg.storage_path == str(tmp_path)


def test_from_env_defaults(monkeypatch) -> None:
    for name in (
        "EVENTQ_API_KEY",
        "EVENTQ_SERVER_URL",
        "EVENTQ_ENABLED",
        "EVENTQ_BATCH_SIZE",
        "EVENTQ_PROCESSING_INTERVAL",
        "EVENTQ_TIMEOUT",
        "EVENTQ_STORAGE_PATH",
    ):
        monkeypatch.delenv(name, raising=False)
    cfg = ClientConfig.from_env()
    assert cfg.api_key is None
    assert cfg.enabled
    assert cfg.storage_path is None
