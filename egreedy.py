"""ε-Greedy bandit over a fixed number of indexed arms.

State is four fields (arms, epsilon, counts, values) and round-trips through
`serialize()` / `EGreedy(snapshot)`. Randomness comes from an injected
`random.Random`, so a seeded generator makes `select()` reproducible.
"""
from __future__ import annotations

import math
import numbers
import random
from collections.abc import Mapping, Sequence
from typing import Any, List, Optional, TypedDict

DEFAULT_ARMS = 2
DEFAULT_EPSILON = 0.5


class EGreedySerialized(TypedDict):
    arms: int
    epsilon: float
    counts: List[int]
    values: List[float]


class EGreedyError(Exception):
    """Base class for estimator errors."""


class InvalidConfiguration(EGreedyError, ValueError):
    """Raised when construction options are out of range or malformed."""


class InvalidArgument(EGreedyError, ValueError):
    """Raised when `reward` gets a missing, mistyped or out-of-range argument."""


def _is_number(x: Any) -> bool:
    return isinstance(x, numbers.Real) and not isinstance(x, bool)


def _parse_arms(raw: Any) -> int:
    if raw is None:
        return DEFAULT_ARMS
    if isinstance(raw, str):
        try:
            return int(raw.strip(), 10)
        except ValueError:
            raise InvalidConfiguration("invalid arms: must be an integer") from None
    if _is_number(raw) and float(raw).is_integer():
        return int(raw)
    raise InvalidConfiguration("invalid arms: must be an integer")


def _parse_epsilon(raw: Any) -> float:
    if raw is None:
        return DEFAULT_EPSILON
    if isinstance(raw, str):
        try:
            eps = float(raw.strip())
        except ValueError:
            raise InvalidConfiguration("invalid epsilon: must be a number") from None
    elif _is_number(raw):
        eps = float(raw)
    else:
        raise InvalidConfiguration("invalid epsilon: must be a number")
    if math.isnan(eps):
        raise InvalidConfiguration("invalid epsilon: must be a number")
    return eps


def _is_array(x: Any) -> bool:
    # strings are sequences too, but never a valid counts/values payload
    return isinstance(x, Sequence) and not isinstance(x, (str, bytes, bytearray))


class EGreedy:
    """Epsilon-greedy estimator.

    With probability `epsilon` (and always while no reward has been recorded)
    `select()` returns a uniformly random arm; otherwise it returns the arm
    with the highest running-average reward, lowest index on ties.
    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None, *,
                 rng: Optional[random.Random] = None):
        options = options or {}
        self.arms = _parse_arms(options.get("arms"))
        self.epsilon = _parse_epsilon(options.get("epsilon"))

        if self.arms < 1:
            raise InvalidConfiguration("invalid arms: cannot be less than 1")
        if self.epsilon < 0:
            raise InvalidConfiguration("invalid epsilon: cannot be less than 0")
        if self.epsilon > 1:
            raise InvalidConfiguration("invalid epsilon: cannot be greater than 1")

        counts = options.get("counts")
        values = options.get("values")
        if counts is not None and values is not None:
            if not _is_array(counts):
                raise InvalidConfiguration("counts must be an array")
            if not _is_array(values):
                raise InvalidConfiguration("values must be an array")
            if len(counts) != self.arms:
                raise InvalidConfiguration("arms and counts.length must be identical")
            if len(values) != self.arms:
                raise InvalidConfiguration("arms and values.length must be identical")
            self.counts: List[int] = list(counts)
            self.values: List[float] = list(values)
        else:
            # a half-supplied snapshot is ignored
            self.counts = [0] * self.arms
            self.values = [0.0] * self.arms

        self._rng = rng if rng is not None else random.Random()

    @classmethod
    def from_options(cls, *, rng: Optional[random.Random] = None, **options: Any) -> "EGreedy":
        return cls(options, rng=rng)

    def select(self) -> int:
        r = self._rng.random()
        n = sum(self.counts)
        if self.epsilon > r or n == 0:
            return self._rng.randint(0, self.arms - 1)
        return self.values.index(max(self.values))

    def reward(self, arm: Any, reward: Any) -> "EGreedy":
        if not _is_number(arm):
            raise InvalidArgument("missing or invalid required parameter: arm")
        if arm >= self.arms or arm < 0 or not float(arm).is_integer():
            raise InvalidArgument("arm index out of bounds")
        if not _is_number(reward):
            raise InvalidArgument("missing or invalid required parameter: reward")

        arm = int(arm)
        count = self.counts[arm] + 1
        prior = self.values[arm]
        self.counts[arm] = count
        self.values[arm] = ((count - 1) / count) * prior + (1 / count) * reward
        return self

    def serialize(self) -> EGreedySerialized:
        return {
            "arms": self.arms,
            "epsilon": self.epsilon,
            "counts": list(self.counts),
            "values": list(self.values),
        }

    def __repr__(self) -> str:
        return f"EGreedy(arms={self.arms}, epsilon={self.epsilon}, counts={self.counts})"
