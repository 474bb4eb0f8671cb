"""Exception types for the TWAP price oracle.

Every error is terminal for the call that raised it; nothing in this package
retries or substitutes a fallback price.
"""


class OracleError(Exception):
    """Base class for oracle failures."""


class InsufficientHistory(OracleError):
    """The pool has no observations covering the requested window."""


class BelowFloor(OracleError):
    """The TWAP price fell under the configured minimum."""

    def __init__(self, price: int, min_price: int) -> None:
        self.price = price
        self.min_price = min_price
        super().__init__(f"price {price} below floor {min_price}")


class Unauthorized(OracleError):
    """A non-administrator tried to reconfigure the oracle."""

    def __init__(self, caller: str) -> None:
        self.caller = caller
        super().__init__(f"caller {caller!r} is not the oracle admin")


class OracleMathError(OracleError, ArithmeticError):
    """Fixed-point arithmetic left its integer domain."""


class MulDivOverflow(OracleMathError):
    """A mul-div result does not fit in 256 bits."""


class DivisionByZero(OracleMathError, ZeroDivisionError):
    """Division by a zero denominator (including a zero-length window)."""


class TickOutOfRange(OracleMathError):
    """Tick outside [MIN_TICK, MAX_TICK]."""

    def __init__(self, tick: int) -> None:
        self.tick = tick
        super().__init__(f"tick out of range: {tick}")


class ExerciseError(OracleError):
    """Base class for exercise quoting failures."""


class SlippageTooHigh(ExerciseError):
    """The payment exceeds the caller's maximum."""

    def __init__(self, payment_amount: int, max_payment_amount: int) -> None:
        self.payment_amount = payment_amount
        self.max_payment_amount = max_payment_amount
        super().__init__(
            f"payment {payment_amount} exceeds maximum {max_payment_amount}"
        )


class PastDeadline(ExerciseError):
    """The quote was requested after the caller's deadline."""
