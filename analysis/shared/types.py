"""
Shared types for the TWAP price oracle.
"""

from dataclasses import dataclass
from enum import Enum

UINT16_MAX = 2**16 - 1
UINT32_MAX = 2**32 - 1
UINT128_MAX = 2**128 - 1
INT56_MIN = -(2**55)
INT56_MAX = 2**55 - 1

MULTIPLIER_DENOM = 10_000


class ChainId(str, Enum):
    """Supported blockchain networks."""
    ETHEREUM = "ethereum"
    ARBITRUM = "arbitrum"
    OPTIMISM = "optimism"
    BASE = "base"
    BSC = "bsc"

    @property
    def chain_id(self) -> int:
        """Get numeric chain ID."""
        chain_ids = {
            ChainId.ETHEREUM: 1,
            ChainId.ARBITRUM: 42161,
            ChainId.OPTIMISM: 10,
            ChainId.BASE: 8453,
            ChainId.BSC: 56,
        }
        return chain_ids[self]


def _check_uint(name: str, value: int, max_value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer: {value!r}")
    if value < 0 or value > max_value:
        raise ValueError(f"{name} out of range [0, {max_value}]: {value}")


@dataclass(frozen=True)
class OracleParams:
    """
    Governance-tunable oracle parameters.

    Always replaced as a whole; there is no way to change one field of a
    live configuration.
    """
    base_is_token0: bool
    multiplier: int  # Scaled by MULTIPLIER_DENOM
    window_seconds: int
    lookback_seconds: int
    min_price: int  # 18 decimals

    def __post_init__(self) -> None:
        if not isinstance(self.base_is_token0, bool):
            raise ValueError(f"base_is_token0 must be a bool: {self.base_is_token0!r}")
        _check_uint("multiplier", self.multiplier, UINT16_MAX)
        _check_uint("window_seconds", self.window_seconds, UINT32_MAX)
        _check_uint("lookback_seconds", self.lookback_seconds, UINT32_MAX)
        _check_uint("min_price", self.min_price, UINT128_MAX)


@dataclass(frozen=True)
class CumulativeTickPair:
    """Tick accumulator readings at the start and end of a window."""
    older: int  # int56
    newer: int  # int56


@dataclass(frozen=True)
class ParamsUpdated:
    """Notification emitted after a successful parameter update."""
    caller: str
    base_is_token0: bool
    multiplier: int
    window_seconds: int
    lookback_seconds: int
    min_price: int

    @classmethod
    def from_params(cls, caller: str, params: OracleParams) -> "ParamsUpdated":
        return cls(
            caller=caller,
            base_is_token0=params.base_is_token0,
            multiplier=params.multiplier,
            window_seconds=params.window_seconds,
            lookback_seconds=params.lookback_seconds,
            min_price=params.min_price,
        )
