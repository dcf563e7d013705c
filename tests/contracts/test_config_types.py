from __future__ import annotations

import pytest
from pydantic import ValidationError

from progresssync.contracts.config import EngineConfig, GatewayConfig, SyncConfig


def test_defaults() -> None:
    config = SyncConfig()

    assert config.engine.lock_window_seconds == 5.0
    assert config.engine.refetch_after_write is True
    assert config.engine.write_zero is False
    assert config.gateway.kind == "memory"
    assert config.gateway.max_retries == 3


def test_http_gateway_requires_base_url() -> None:
    with pytest.raises(ValidationError, match="base_url"):
        GatewayConfig(kind="http", base_url="  ")

    assert GatewayConfig(kind="http", base_url="https://lms.example").base_url == "https://lms.example"


@pytest.mark.parametrize("overrides", [{"lock_window_seconds": -1}, {"lock_window_seconds": "later"}])
def test_engine_config_rejects_invalid_lock_window(overrides: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        EngineConfig(**overrides)  # type: ignore[arg-type]


def test_gateway_config_bounds_retries() -> None:
    with pytest.raises(ValidationError):
        GatewayConfig(max_retries=11)


def test_configs_are_frozen() -> None:
    config = EngineConfig()

    with pytest.raises(ValidationError):
        config.write_zero = True  # type: ignore[misc]
