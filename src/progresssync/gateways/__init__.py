"""Sync gateway implementations."""

from progresssync.gateways.factory import create_gateway
from progresssync.gateways.http import HttpSyncGateway
from progresssync.gateways.memory import GatewayOperation, InMemorySyncGateway

__all__ = ["GatewayOperation", "HttpSyncGateway", "InMemorySyncGateway", "create_gateway"]
