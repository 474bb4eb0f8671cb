"""
Shared - Common types, configuration and logging for the TWAP price oracle.
"""

from .config import OracleSettings, get_config
from .logger import ComponentLogger, configure_logging
from .types import (
    MULTIPLIER_DENOM,
    ChainId,
    CumulativeTickPair,
    OracleParams,
    ParamsUpdated,
)

__all__ = [
    # Types
    "ChainId",
    "OracleParams",
    "CumulativeTickPair",
    "ParamsUpdated",
    "MULTIPLIER_DENOM",
    # Config
    "get_config",
    "OracleSettings",
    # Logger
    "configure_logging",
    "ComponentLogger",
]
