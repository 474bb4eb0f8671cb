"""
Configuration management for the TWAP price oracle.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from .types import ChainId, OracleParams


class ParamsConfig(BaseSettings):
    """Initial oracle parameters."""
    base_is_token0: bool = True
    multiplier: int = 10_000
    window_seconds: int = 1800
    lookback_seconds: int = 0
    min_price: int = 0

    def to_params(self) -> OracleParams:
        """Build the validated parameter object."""
        return OracleParams(
            base_is_token0=self.base_is_token0,
            multiplier=self.multiplier,
            window_seconds=self.window_seconds,
            lookback_seconds=self.lookback_seconds,
            min_price=self.min_price,
        )


class PoolConfig(BaseSettings):
    """Liquidity pool the oracle reads from."""
    chain: ChainId = ChainId.ETHEREUM
    address: str = ""
    token0_decimals: int = Field(default=18, ge=0, le=255)
    token1_decimals: int = Field(default=18, ge=0, le=255)


class MonitoringConfig(BaseSettings):
    """Monitoring configuration."""
    log_level: str = "INFO"
    json_logs: bool = False


class OracleSettings(BaseSettings):
    """Main oracle configuration."""

    model_config = {"env_prefix": "TWAP_", "env_nested_delimiter": "__"}

    # Environment
    environment: str = Field(default="development")

    # Identity allowed to call set_params
    admin: str = Field(default="")

    params: ParamsConfig = Field(default_factory=ParamsConfig)
    pool: PoolConfig = Field(default_factory=PoolConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    # Chain RPC URLs
    eth_rpc_url: str = Field(default="https://eth.llamarpc.com")
    arb_rpc_url: str = Field(default="https://arb1.arbitrum.io/rpc")
    op_rpc_url: str = Field(default="https://mainnet.optimism.io")
    base_rpc_url: str = Field(default="https://mainnet.base.org")
    bsc_rpc_url: str = Field(default="https://bsc-dataseed.binance.org")

    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    def get_rpc_url(self, chain: ChainId | str) -> str:
        """Get RPC URL for a chain."""
        urls = {
            "ethereum": self.eth_rpc_url,
            "arbitrum": self.arb_rpc_url,
            "optimism": self.op_rpc_url,
            "base": self.base_rpc_url,
            "bsc": self.bsc_rpc_url,
        }
        key = chain.value if isinstance(chain, ChainId) else chain
        return urls.get(key, "")


@lru_cache
def get_config() -> OracleSettings:
    """Get cached configuration instance."""
    # Load .env file if present
    from dotenv import load_dotenv
    load_dotenv()

    return OracleSettings()
