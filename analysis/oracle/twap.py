"""
ORACLE - TWAP Price Oracle

Prices the base token in quote tokens from a pool's time-weighted average
tick, with a governance-set discount multiplier and a hard price floor.
"""

from collections.abc import Callable

from shared import (
    MULTIPLIER_DENOM,
    ComponentLogger,
    OracleParams,
    OracleSettings,
    ParamsUpdated,
)
from shared.types import INT56_MAX, INT56_MIN

from .errors import BelowFloor, DivisionByZero, OracleMathError, Unauthorized
from .full_math import WAD, check_uint256, div_toward_zero, mul_div, mul_div_up
from .source import PriceSource
from .tick_math import get_quote_at_tick


MAX_DECIMALS = 255


def _check_decimals(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer: {value!r}")
    if value < 0 or value > MAX_DECIMALS:
        raise ValueError(f"{name} out of range [0, {MAX_DECIMALS}]: {value}")


class TwapPriceOracle:
    """
    TWAP oracle over a single pool.

    get_price() is a pure read: it re-queries the source every call and
    never touches the parameters; only the stats counters move.
    set_params() is the only mutation and is restricted to the admin
    identity fixed at construction.

    Pricing steps:
    1. average tick over [now - window - lookback, now - lookback],
       truncated toward zero
    2. quote of one whole base token at that tick, normalized to 18 decimals
    3. reject prices strictly below min_price
    4. scale by multiplier / 10000, rounding up
    """

    def __init__(
        self,
        source: PriceSource,
        params: OracleParams,
        admin: str,
        token0_decimals: int = 18,
        token1_decimals: int = 18,
    ):
        if not admin:
            raise ValueError("admin identity is required")
        _check_decimals("token0_decimals", token0_decimals)
        _check_decimals("token1_decimals", token1_decimals)

        self.logger = ComponentLogger("ORACLE-TWAP")
        self.source = source
        self.admin = admin
        self.token0_decimals = token0_decimals
        self.token1_decimals = token1_decimals

        # Replaced as a whole by set_params; readers take one reference
        self._params = params

        self.params_handlers: list[Callable[[ParamsUpdated], None]] = []

        # Statistics
        self.prices_served = 0
        self.floor_rejections = 0
        self.params_updates = 0

        self.logger.info(
            "TWAP oracle initialized",
            admin=admin,
            window_seconds=params.window_seconds,
            lookback_seconds=params.lookback_seconds,
            multiplier=params.multiplier,
        )

    @classmethod
    def from_settings(cls, settings: OracleSettings, source: PriceSource) -> "TwapPriceOracle":
        """Build an oracle from loaded settings."""
        return cls(
            source=source,
            params=settings.params.to_params(),
            admin=settings.admin,
            token0_decimals=settings.pool.token0_decimals,
            token1_decimals=settings.pool.token1_decimals,
        )

    @property
    def params(self) -> OracleParams:
        """Current parameters."""
        return self._params

    def on_params_updated(self, handler: Callable[[ParamsUpdated], None]) -> None:
        """Register parameter update handler."""
        self.params_handlers.append(handler)

    def get_price(self) -> int:
        """Return the discounted TWAP price with 18 decimals."""
        params = self._params

        average_tick = self._average_tick(params)
        raw_price = self._quote(average_tick, params.base_is_token0)

        if raw_price < params.min_price:
            self.floor_rejections += 1
            self.logger.warning(
                "Price below floor",
                price=raw_price,
                min_price=params.min_price,
                tick=average_tick,
            )
            raise BelowFloor(raw_price, params.min_price)

        price = mul_div_up(raw_price, params.multiplier, MULTIPLIER_DENOM)
        self.prices_served += 1

        self.logger.debug(
            "Price computed",
            tick=average_tick,
            raw_price=raw_price,
            price=price,
        )
        return price

    def set_params(self, caller: str, params: OracleParams) -> None:
        """Replace all parameters. Only the admin may call this."""
        if caller != self.admin:
            self.logger.warning("Unauthorized parameter update", caller=caller)
            raise Unauthorized(caller)

        self._params = params
        self.params_updates += 1

        event = ParamsUpdated.from_params(caller, params)
        self.logger.info(
            "Oracle parameters updated",
            base_is_token0=params.base_is_token0,
            multiplier=params.multiplier,
            window_seconds=params.window_seconds,
            lookback_seconds=params.lookback_seconds,
            min_price=params.min_price,
        )

        # Notify handlers
        for handler in self.params_handlers:
            try:
                handler(event)
            except Exception as e:
                self.logger.error("Handler error", error=str(e))

    def get_stats(self) -> dict:
        """Get oracle statistics."""
        return {
            "prices_served": self.prices_served,
            "floor_rejections": self.floor_rejections,
            "params_updates": self.params_updates,
        }

    def _average_tick(self, params: OracleParams) -> int:
        """Mean tick over the configured window, truncated toward zero."""
        if params.window_seconds == 0:
            raise DivisionByZero("window_seconds is zero")

        pair = self.source.observe(params.window_seconds, params.lookback_seconds)
        delta = pair.newer - pair.older
        if delta < INT56_MIN or delta > INT56_MAX:
            raise OracleMathError(f"tick cumulative delta exceeds int56: {delta}")

        return div_toward_zero(delta, params.window_seconds)

    def _quote(self, tick: int, base_is_token0: bool) -> int:
        """Price of one whole base token in quote tokens, scaled to 18 decimals."""
        if base_is_token0:
            base_decimals, quote_decimals = self.token0_decimals, self.token1_decimals
        else:
            base_decimals, quote_decimals = self.token1_decimals, self.token0_decimals

        quote = get_quote_at_tick(tick, 10**base_decimals, base_is_token0)
        if quote_decimals == 18:
            return check_uint256(quote)
        return mul_div(quote, WAD, 10**quote_decimals)
