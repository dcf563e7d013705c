"""Event-loop helpers for tests."""

from __future__ import annotations

import asyncio


async def settle(rounds: int = 10) -> None:
    """Let spawned gateway tasks run without waiting on held fetches."""
    for _ in range(rounds):
        await asyncio.sleep(0)
