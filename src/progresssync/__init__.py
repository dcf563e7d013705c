"""Public API surface for progresssync."""

__version__ = "1.0.0"

from progresssync.adapters import (
    BookAdapter,
    FlashcardAdapter,
    HotspotAdapter,
    InteractiveVideoAdapter,
    QuizAdapter,
    VideoAdapter,
    create_adapter,
)
from progresssync.config import load_config
from progresssync.contracts import (
    AuthenticationError,
    ConfigError,
    EngineConfig,
    EngineState,
    GatewayConfig,
    GatewayError,
    GatewayResponseError,
    Identity,
    IdentitySignal,
    InteractionEvent,
    MetricAdapter,
    Progress,
    ProgressSyncError,
    QuizAnswer,
    QuizAttempt,
    SessionClosedError,
    SyncConfig,
    SyncGateway,
    SyncObserver,
    UnknownContentTypeError,
)
from progresssync.engine import ProgressStore, ReconciliationEngine, ReconciliationState
from progresssync.gateways import HttpSyncGateway, InMemorySyncGateway, create_gateway
from progresssync.identity import IdentityChannel
from progresssync.session import ContentSession

__all__ = [
    "AuthenticationError",
    "BookAdapter",
    "ConfigError",
    "ContentSession",
    "EngineConfig",
    "EngineState",
    "FlashcardAdapter",
    "GatewayConfig",
    "GatewayError",
    "GatewayResponseError",
    "HotspotAdapter",
    "HttpSyncGateway",
    "Identity",
    "IdentityChannel",
    "IdentitySignal",
    "InMemorySyncGateway",
    "InteractionEvent",
    "InteractiveVideoAdapter",
    "MetricAdapter",
    "Progress",
    "ProgressStore",
    "ProgressSyncError",
    "QuizAdapter",
    "QuizAnswer",
    "QuizAttempt",
    "ReconciliationEngine",
    "ReconciliationState",
    "SessionClosedError",
    "SyncConfig",
    "SyncGateway",
    "SyncObserver",
    "UnknownContentTypeError",
    "VideoAdapter",
    "__version__",
    "create_adapter",
    "create_gateway",
    "load_config",
]
