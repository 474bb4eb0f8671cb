"""
ORACLE - Exercise Quoter

Converts the oracle price into the payment owed for exercising an amount of
options. Minting the resulting stream is left to the caller.
"""

import time
from dataclasses import dataclass

from shared import ComponentLogger

from .errors import PastDeadline, SlippageTooHigh
from .full_math import mul_wad_up
from .twap import TwapPriceOracle


@dataclass(frozen=True)
class ExerciseQuote:
    """Payment owed for an exercise."""
    amount: int  # Options exercised, 18 decimals
    price: int  # Oracle price, 18 decimals
    payment_amount: int  # Payment token units


class ExerciseQuoter:
    """Prices option exercises against a TWAP oracle."""

    def __init__(self, oracle: TwapPriceOracle):
        self.logger = ComponentLogger("ORACLE-EXERCISE")
        self.oracle = oracle

    def quote(
        self,
        amount: int,
        max_payment_amount: int | None = None,
        deadline: int | None = None,
        now: int | None = None,
    ) -> ExerciseQuote:
        """
        Quote the payment for amount options.

        The payment rounds up so the exerciser never underpays. Raises
        PastDeadline if now is after deadline and SlippageTooHigh if the
        payment exceeds max_payment_amount.
        """
        if amount < 0:
            raise ValueError(f"amount must be non-negative: {amount}")

        if deadline is not None:
            current = int(time.time()) if now is None else now
            if current > deadline:
                raise PastDeadline(f"now {current} is past deadline {deadline}")

        price = self.oracle.get_price()
        payment_amount = mul_wad_up(amount, price)

        if max_payment_amount is not None and payment_amount > max_payment_amount:
            raise SlippageTooHigh(payment_amount, max_payment_amount)

        self.logger.debug(
            "Exercise quoted",
            amount=amount,
            price=price,
            payment_amount=payment_amount,
        )
        return ExerciseQuote(amount=amount, price=price, payment_amount=payment_amount)
