"""Tests for the price source adapter and the in-memory pool."""

import pytest

from oracle.errors import InsufficientHistory, OracleMathError
from oracle.source import PoolPriceSource, RecordedPool
from shared import CumulativeTickPair
from shared.types import INT56_MAX, UINT32_MAX


class FakePool:
    """Pool client returning canned readings and recording requests."""

    def __init__(self, tick_cumulatives):
        self.tick_cumulatives = tick_cumulatives
        self.requests = []

    def observe(self, seconds_agos):
        self.requests.append(list(seconds_agos))
        return list(self.tick_cumulatives), [0, 0]


class Clock:
    """Settable clock."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


class TestPoolPriceSource:
    """Test suite for PoolPriceSource."""

    def test_requests_window_offsets(self):
        """Test the window is translated to [window + lookback, lookback]."""
        pool = FakePool([10, 20])
        source = PoolPriceSource(pool)

        pair = source.observe(1800, 600)
        assert pool.requests == [[2400, 600]]
        assert pair == CumulativeTickPair(older=10, newer=20)

    def test_zero_lookback(self):
        """Test a zero lookback ends the window now."""
        pool = FakePool([0, 180000])
        source = PoolPriceSource(pool)

        pair = source.observe(1800, 0)
        assert pool.requests == [[1800, 0]]
        assert pair.newer - pair.older == 180000

    def test_ignores_liquidity_readings(self):
        """Test only the tick half of the pool response is used."""
        pool = FakePool([-5, 5])
        pair = PoolPriceSource(pool).observe(10, 0)
        assert (pair.older, pair.newer) == (-5, 5)

    def test_rejects_values_beyond_int56(self):
        """Test readings wider than int56 fail."""
        pool = FakePool([0, INT56_MAX + 1])
        with pytest.raises(OracleMathError):
            PoolPriceSource(pool).observe(1800, 0)

    def test_rejects_window_start_beyond_uint32(self):
        """Test the pool is not queried when the window start overflows uint32."""
        pool = FakePool([0, 0])
        with pytest.raises(OracleMathError):
            PoolPriceSource(pool).observe(UINT32_MAX, 1)
        assert pool.requests == []

    def test_propagates_insufficient_history(self):
        """Test pool history errors reach the caller untouched."""
        pool = RecordedPool(initial_tick=0, start_time=1000, clock=Clock(1500))
        with pytest.raises(InsufficientHistory):
            PoolPriceSource(pool).observe(1800, 0)


class TestRecordedPool:
    """Test suite for RecordedPool."""

    def test_constant_tick(self):
        """Test a constant tick accumulates linearly."""
        pool = RecordedPool(initial_tick=100, start_time=1000, clock=Clock(2800))

        tick_cumulatives, seconds_per_liquidity = pool.observe([1800, 0])
        assert tick_cumulatives == [0, 180000]
        assert seconds_per_liquidity == [0, 0]

    def test_tick_change(self):
        """Test readings across a tick change."""
        pool = RecordedPool(initial_tick=10, start_time=0, clock=Clock(200))
        pool.write(20, timestamp=100)

        tick_cumulatives, _ = pool.observe([200, 100, 50, 0])
        assert tick_cumulatives == [0, 1000, 2000, 3000]
        assert pool.current_tick == 20

    def test_interpolates_between_checkpoints(self):
        """Test readings between checkpoints use the earlier checkpoint's tick."""
        pool = RecordedPool(initial_tick=10, start_time=0, clock=Clock(400))
        pool.write(20, timestamp=100)
        pool.write(30, timestamp=300)

        # t=250 sits between the checkpoints at 100 and 300
        assert pool.observe_single(150, now=400) == 1000 + 20 * 150
        assert pool.observe_single(0, now=400) == 1000 + 20 * 200 + 30 * 100

    def test_same_timestamp_write_replaces_tick(self):
        """Test two writes in one second keep a single checkpoint."""
        pool = RecordedPool(initial_tick=10, start_time=0, clock=Clock(100))
        pool.write(20, timestamp=50)
        pool.write(30, timestamp=50)

        assert len(pool.observations) == 2
        assert pool.observe_single(0, now=100) == 10 * 50 + 30 * 50

    def test_write_defaults_to_clock(self):
        """Test writes without a timestamp use the clock."""
        clock = Clock(0)
        pool = RecordedPool(initial_tick=1, clock=clock)
        clock.now = 60
        observation = pool.write(5)
        assert observation.timestamp == 60
        assert observation.tick_cumulative == 60

    def test_rejects_out_of_order_write(self):
        """Test writes cannot go back in time."""
        pool = RecordedPool(initial_tick=0, start_time=100, clock=Clock(100))
        with pytest.raises(ValueError):
            pool.write(1, timestamp=99)

    def test_insufficient_history(self):
        """Test targets before the first checkpoint fail."""
        pool = RecordedPool(initial_tick=0, start_time=0, clock=Clock(200))
        with pytest.raises(InsufficientHistory):
            pool.observe([201, 0])

    def test_oldest_checkpoint_is_observable(self):
        """Test the first checkpoint itself can be read."""
        pool = RecordedPool(initial_tick=7, start_time=0, clock=Clock(200))
        assert pool.observe([200, 0])[0] == [0, 1400]

    def test_negative_seconds_ago_rejected(self):
        """Test future targets are rejected."""
        pool = RecordedPool(initial_tick=0, start_time=0, clock=Clock(10))
        with pytest.raises(ValueError):
            pool.observe([-1])

    def test_max_observations_evicts_oldest(self):
        """Test a bounded pool drops its oldest checkpoint and forgets that history."""
        pool = RecordedPool(initial_tick=10, start_time=0, clock=Clock(300), max_observations=2)
        pool.write(20, timestamp=100)
        pool.write(30, timestamp=200)

        assert len(pool.observations) == 2
        assert pool.observations[0].timestamp == 100
        with pytest.raises(InsufficientHistory):
            pool.observe([250])
        assert pool.observe_single(200, now=300) == 1000
        assert pool.observe_single(100, now=300) == 1000 + 20 * 100

    def test_max_observations_must_be_positive(self):
        """Test a bound below one checkpoint is refused."""
        with pytest.raises(ValueError):
            RecordedPool(initial_tick=0, start_time=0, max_observations=0)
