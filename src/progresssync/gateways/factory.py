"""Gateway factory."""

from __future__ import annotations

from typing import Any

from progresssync.contracts.config import GatewayConfig
from progresssync.contracts.exceptions import ConfigError
from progresssync.contracts.gateway import SyncGateway
from progresssync.gateways.http import HttpSyncGateway
from progresssync.gateways.memory import InMemorySyncGateway


def create_gateway(config: GatewayConfig, **kwargs: Any) -> SyncGateway:
    """Create the gateway described by *config*.

    The returned gateway is an async context manager; enter it before handing
    it to an engine.
    """
    if config.kind == "http":
        return HttpSyncGateway.from_config(config, **kwargs)
    if config.kind == "memory":
        return InMemorySyncGateway(**kwargs)
    raise ConfigError(f"Unknown gateway kind: {config.kind!r}")
