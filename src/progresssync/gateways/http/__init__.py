"""HTTP gateway implementation."""

from progresssync.gateways.http.gateway import HttpSyncGateway

__all__ = ["HttpSyncGateway"]
