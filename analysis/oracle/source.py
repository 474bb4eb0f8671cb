"""
ORACLE - Price Source Adapter

Turns a (window, lookback) request into the two "seconds ago" offsets a
Uniswap V3 style pool understands and returns the tick accumulator readings
at both ends of the window.
"""

import time
from abc import ABC, abstractmethod
from bisect import bisect_right
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from shared import ComponentLogger, CumulativeTickPair
from shared.types import INT56_MAX, INT56_MIN, UINT32_MAX

from .errors import InsufficientHistory, OracleMathError


class PoolClient(Protocol):
    """Anything exposing the pool's observe() view."""

    def observe(self, seconds_agos: Sequence[int]) -> tuple[list[int], list[int]]:
        """Return (tick_cumulatives, seconds_per_liquidity_cumulatives)."""
        ...


class PriceSource(ABC):
    """Capability the oracle reads tick accumulators from."""

    @abstractmethod
    def observe(self, window_seconds: int, lookback_seconds: int) -> CumulativeTickPair:
        """
        Return accumulator readings for the window
        [now - window - lookback, now - lookback].

        Raises InsufficientHistory when the window predates recorded history.
        """
        ...


def _check_int56(value: int) -> int:
    if value < INT56_MIN or value > INT56_MAX:
        raise OracleMathError(f"tick cumulative exceeds int56: {value}")
    return value


class PoolPriceSource(PriceSource):
    """Price source backed by a pool client."""

    def __init__(self, pool: PoolClient):
        self.logger = ComponentLogger("ORACLE-SOURCE")
        self.pool = pool

    def observe(self, window_seconds: int, lookback_seconds: int) -> CumulativeTickPair:
        start_ago = window_seconds + lookback_seconds
        if start_ago > UINT32_MAX:
            raise OracleMathError(f"window start exceeds uint32: {start_ago}")

        tick_cumulatives, _ = self.pool.observe([start_ago, lookback_seconds])
        older, newer = tick_cumulatives[0], tick_cumulatives[1]

        self.logger.debug(
            "Observed tick cumulatives",
            seconds_agos=[start_ago, lookback_seconds],
            older=older,
            newer=newer,
        )
        return CumulativeTickPair(older=_check_int56(older), newer=_check_int56(newer))


@dataclass(frozen=True)
class Observation:
    """Accumulator checkpoint; tick is the tick in force from timestamp on."""
    timestamp: int
    tick_cumulative: int
    tick: int


class RecordedPool:
    """
    In-memory pool oracle.

    Records tick changes and answers observe() the way the on-chain pool
    does: readings between checkpoints are interpolated, readings after the
    last checkpoint are extrapolated at the current tick, and readings before
    the first checkpoint fail with InsufficientHistory. With a
    max_observations limit the oldest checkpoint is evicted on overflow, so
    history older than the buffer also fails. Liquidity is not modelled, so
    seconds-per-liquidity readings are always zero.
    """

    def __init__(
        self,
        initial_tick: int = 0,
        start_time: int | None = None,
        clock: Callable[[], float] = time.time,
        max_observations: int | None = None,
    ):
        if max_observations is not None and max_observations < 1:
            raise ValueError(f"max_observations must be positive: {max_observations}")
        self.clock = clock
        self.max_observations = max_observations
        start = int(clock()) if start_time is None else start_time
        self.observations: list[Observation] = [Observation(start, 0, initial_tick)]
        self._timestamps: list[int] = [start]

    @property
    def current_tick(self) -> int:
        return self.observations[-1].tick

    def write(self, tick: int, timestamp: int | None = None) -> Observation:
        """Move the pool to tick at timestamp (defaults to now)."""
        ts = int(self.clock()) if timestamp is None else timestamp
        last = self.observations[-1]
        if ts < last.timestamp:
            raise ValueError(f"timestamp {ts} precedes last observation {last.timestamp}")

        cumulative = last.tick_cumulative + last.tick * (ts - last.timestamp)
        observation = Observation(ts, cumulative, tick)
        if ts == last.timestamp:
            # Same second: the later tick wins
            self.observations[-1] = observation
        else:
            self.observations.append(observation)
            self._timestamps.append(ts)
            if self.max_observations is not None and len(self.observations) > self.max_observations:
                del self.observations[0]
                del self._timestamps[0]
        return observation

    def observe_single(self, seconds_ago: int, now: int) -> int:
        """Tick cumulative at now - seconds_ago."""
        if seconds_ago < 0:
            raise ValueError(f"seconds_ago must be non-negative: {seconds_ago}")
        target = now - seconds_ago
        if target < self._timestamps[0]:
            raise InsufficientHistory(
                f"target {target} predates oldest observation {self._timestamps[0]}"
            )
        checkpoint = self.observations[bisect_right(self._timestamps, target) - 1]
        return checkpoint.tick_cumulative + checkpoint.tick * (target - checkpoint.timestamp)

    def observe(self, seconds_agos: Sequence[int]) -> tuple[list[int], list[int]]:
        now = int(self.clock())
        tick_cumulatives = [self.observe_single(s, now) for s in seconds_agos]
        return tick_cumulatives, [0] * len(seconds_agos)
