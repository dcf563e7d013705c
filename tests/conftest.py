"""Shared test fixtures for progresssync tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from progresssync.contracts.config import EngineConfig
from progresssync.contracts.identity import Identity
from progresssync.engine.engine import ReconciliationEngine
from progresssync.engine.store import ProgressStore
from progresssync.identity import IdentityChannel
from tests.fakes.gateway import FakeGateway
from tests.fakes.observer import RecordingObserver
from tests.fakes.scheduler import ManualScheduler

CONTENT_ID = "content-1"


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def store(scheduler: ManualScheduler) -> ProgressStore:
    return ProgressStore(scheduler=scheduler)


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def authenticated() -> IdentityChannel:
    return IdentityChannel(Identity.AUTHENTICATED)


@pytest.fixture
def anonymous() -> IdentityChannel:
    return IdentityChannel(Identity.ANONYMOUS)


@pytest.fixture
def make_engine(
    gateway: FakeGateway, store: ProgressStore, observer: RecordingObserver
) -> Callable[..., ReconciliationEngine]:
    def _make(identity: IdentityChannel, **config: Any) -> ReconciliationEngine:
        return ReconciliationEngine(
            CONTENT_ID,
            gateway,
            identity,
            config=EngineConfig(**config),
            store=store,
            observer=observer,
        )

    return _make
