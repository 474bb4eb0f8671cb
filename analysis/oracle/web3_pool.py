"""
ORACLE - Live Pool Client

Reads tick accumulators from a deployed Uniswap V3 style pool over JSON-RPC.
"""

from collections.abc import Sequence
from typing import Any

from web3 import Web3
from web3.exceptions import ContractLogicError

from shared import ComponentLogger, OracleSettings, configure_logging, get_config

from .errors import InsufficientHistory
from .source import PoolPriceSource
from .twap import TwapPriceOracle

UNISWAP_V3_POOL_OBSERVE_ABI = [
    {
        "inputs": [
            {"internalType": "uint32[]", "name": "secondsAgos", "type": "uint32[]"},
        ],
        "name": "observe",
        "outputs": [
            {"internalType": "int56[]", "name": "tickCumulatives", "type": "int56[]"},
            {
                "internalType": "uint160[]",
                "name": "secondsPerLiquidityCumulativeX128s",
                "type": "uint160[]",
            },
        ],
        "stateMutability": "view",
        "type": "function",
    },
]

# Revert reason the pool uses when a target predates its oldest observation
_OLD_OBSERVATION_REASON = "OLD"
_REVERT_PREFIX = "execution reverted"


def _revert_reason(error: ContractLogicError) -> str:
    """Bare revert reason, e.g. "OLD" from "execution reverted: OLD"."""
    message = getattr(error, "message", None)
    if not isinstance(message, str):
        message = str(error.args[0]) if error.args else ""
    reason = message.strip()
    if reason.startswith(_REVERT_PREFIX):
        reason = reason[len(_REVERT_PREFIX):].lstrip(":").strip()
    return reason


class Web3PoolClient:
    """Pool client calling observe() on a live contract."""

    def __init__(self, contract: Any):
        self.logger = ComponentLogger("ORACLE-WEB3-POOL")
        self.contract = contract

    @classmethod
    def from_rpc(cls, rpc_url: str, pool_address: str) -> "Web3PoolClient":
        """Connect to pool_address through an HTTP provider."""
        w3 = Web3(Web3.HTTPProvider(rpc_url))
        contract = w3.eth.contract(
            address=Web3.to_checksum_address(pool_address),
            abi=UNISWAP_V3_POOL_OBSERVE_ABI,
        )
        return cls(contract)

    @classmethod
    def from_settings(cls, settings: OracleSettings) -> "Web3PoolClient":
        """Connect to the pool named in settings on its configured chain."""
        if not settings.pool.address:
            raise ValueError("Missing pool address in settings")
        return cls.from_rpc(settings.get_rpc_url(settings.pool.chain), settings.pool.address)

    def observe(self, seconds_agos: Sequence[int]) -> tuple[list[int], list[int]]:
        try:
            tick_cumulatives, seconds_per_liquidity = self.contract.functions.observe(
                list(seconds_agos)
            ).call()
        except ContractLogicError as e:
            if _revert_reason(e) == _OLD_OBSERVATION_REASON:
                self.logger.warning(
                    "Pool history too short",
                    seconds_agos=list(seconds_agos),
                )
                raise InsufficientHistory(str(e)) from e
            raise
        return list(tick_cumulatives), list(seconds_per_liquidity)


def build_live_oracle(settings: OracleSettings | None = None) -> TwapPriceOracle:
    """Wire a TWAP oracle to the configured on-chain pool."""
    settings = settings or get_config()
    configure_logging(settings.monitoring.log_level, settings.monitoring.json_logs)

    client = Web3PoolClient.from_settings(settings)
    return TwapPriceOracle.from_settings(settings, PoolPriceSource(client))
