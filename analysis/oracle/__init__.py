"""
ORACLE - TWAP Price Oracle

Derives a manipulation-resistant price from a pool's time-weighted average
tick, applies a governance-set multiplier and refuses to quote below a floor.
"""

from .errors import (
    BelowFloor,
    InsufficientHistory,
    OracleError,
    OracleMathError,
    Unauthorized,
)
from .exercise import ExerciseQuote, ExerciseQuoter
from .source import PoolPriceSource, PriceSource, RecordedPool
from .twap import TwapPriceOracle

__all__ = [
    "TwapPriceOracle",
    "PriceSource",
    "PoolPriceSource",
    "RecordedPool",
    "ExerciseQuoter",
    "ExerciseQuote",
    "OracleError",
    "InsufficientHistory",
    "BelowFloor",
    "Unauthorized",
    "OracleMathError",
]
