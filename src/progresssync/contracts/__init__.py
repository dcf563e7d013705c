"""Public contracts for progresssync."""

from progresssync.contracts.adapter import MetricAdapter, ratio_percentage
from progresssync.contracts.config import EngineConfig, GatewayConfig, SyncConfig
from progresssync.contracts.exceptions import (
    AuthenticationError,
    ConfigError,
    GatewayError,
    GatewayResponseError,
    ProgressSyncError,
    SessionClosedError,
    UnknownContentTypeError,
)
from progresssync.contracts.gateway import SyncGateway
from progresssync.contracts.identity import Identity, IdentityListener, IdentitySignal
from progresssync.contracts.observer import EngineState, SyncObserver
from progresssync.contracts.progress import InteractionEvent, Progress, QuizAnswer, QuizAttempt
from progresssync.contracts.scheduler import ScheduledTask, Scheduler

__all__ = [
    "AuthenticationError",
    "ConfigError",
    "EngineConfig",
    "EngineState",
    "GatewayConfig",
    "GatewayError",
    "GatewayResponseError",
    "Identity",
    "IdentityListener",
    "IdentitySignal",
    "InteractionEvent",
    "MetricAdapter",
    "Progress",
    "ProgressSyncError",
    "QuizAnswer",
    "QuizAttempt",
    "ScheduledTask",
    "Scheduler",
    "SessionClosedError",
    "SyncConfig",
    "SyncGateway",
    "SyncObserver",
    "UnknownContentTypeError",
    "ratio_percentage",
]
