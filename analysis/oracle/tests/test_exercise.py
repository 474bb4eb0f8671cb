"""Tests for the exercise quoter."""

import pytest

from oracle.errors import BelowFloor, PastDeadline, SlippageTooHigh
from oracle.exercise import ExerciseQuote, ExerciseQuoter
from oracle.full_math import WAD
from oracle.source import PriceSource
from oracle.twap import TwapPriceOracle
from shared import CumulativeTickPair, OracleParams

ADMIN = "0x00000000000000000000000000000000000000A1"
DISCOUNTED_PRICE = 959547178988232740  # tick 100 at a 5% discount


class StaticSource(PriceSource):
    """Price source returning a fixed reading."""

    def __init__(self, older: int, newer: int):
        self.pair = CumulativeTickPair(older=older, newer=newer)

    def observe(self, window_seconds, lookback_seconds):
        return self.pair


def make_quoter(min_price: int = 0) -> ExerciseQuoter:
    """Quoter over tick 100 at a 5% discount."""
    params = OracleParams(
        base_is_token0=True,
        multiplier=9500,
        window_seconds=1800,
        lookback_seconds=0,
        min_price=min_price,
    )
    oracle = TwapPriceOracle(StaticSource(0, 180_000), params, ADMIN)
    return ExerciseQuoter(oracle)


class TestExerciseQuoter:
    """Test suite for ExerciseQuoter."""

    def test_quote_whole_tokens(self):
        """Test payment for 100 options."""
        quote = make_quoter().quote(100 * WAD)
        assert quote == ExerciseQuote(
            amount=100 * WAD,
            price=DISCOUNTED_PRICE,
            payment_amount=100 * DISCOUNTED_PRICE,
        )

    def test_payment_rounds_up(self):
        """Test dust amounts never round the payment down to zero."""
        quote = make_quoter().quote(1)
        assert quote.payment_amount == 1

        quote = make_quoter().quote(3)
        assert quote.payment_amount == 3

    def test_zero_amount(self):
        """Test exercising nothing costs nothing."""
        assert make_quoter().quote(0).payment_amount == 0

    def test_negative_amount_rejected(self):
        """Test negative amounts are rejected."""
        with pytest.raises(ValueError):
            make_quoter().quote(-1)

    def test_max_payment_respected(self):
        """Test a payment equal to the maximum is accepted."""
        quote = make_quoter().quote(WAD, max_payment_amount=DISCOUNTED_PRICE)
        assert quote.payment_amount == DISCOUNTED_PRICE

    def test_slippage_too_high(self):
        """Test payments above the maximum are refused."""
        with pytest.raises(SlippageTooHigh) as exc_info:
            make_quoter().quote(WAD, max_payment_amount=DISCOUNTED_PRICE - 1)
        assert exc_info.value.payment_amount == DISCOUNTED_PRICE

    def test_past_deadline(self):
        """Test quotes after the deadline are refused."""
        with pytest.raises(PastDeadline):
            make_quoter().quote(WAD, deadline=100, now=101)

    def test_deadline_inclusive(self):
        """Test a quote exactly at the deadline is allowed."""
        quote = make_quoter().quote(WAD, deadline=100, now=100)
        assert quote.price == DISCOUNTED_PRICE

    def test_floor_failure_propagates(self):
        """Test the quoter does not substitute a price when the oracle refuses."""
        with pytest.raises(BelowFloor):
            make_quoter(min_price=2 * WAD).quote(WAD)
