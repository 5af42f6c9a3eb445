"""Awaitable wrapper around `EGreedy` for asyncio callers.

The estimator itself never blocks; the wrapper only gives async code the same
call shape as its other awaitables and serializes access per instance.
"""
from __future__ import annotations

import asyncio
import random
from typing import Any, Mapping, Optional

from egreedy import EGreedy, EGreedySerialized


class AsyncEGreedy:
    def __init__(self, estimator: EGreedy):
        self._estimator = estimator
        self._lock = asyncio.Lock()

    @classmethod
    def create(cls, options: Optional[Mapping[str, Any]] = None, *,
               rng: Optional[random.Random] = None) -> "AsyncEGreedy":
        return cls(EGreedy(options, rng=rng))

    @property
    def estimator(self) -> EGreedy:
        return self._estimator

    async def select(self) -> int:
        async with self._lock:
            return self._estimator.select()

    async def reward(self, arm: Any, value: Any) -> "AsyncEGreedy":
        # InvalidArgument propagates out of the awaited coroutine
        async with self._lock:
            self._estimator.reward(arm, value)
        return self

    async def serialize(self) -> EGreedySerialized:
        async with self._lock:
            return self._estimator.serialize()
