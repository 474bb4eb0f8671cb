"""
ORACLE - Tick Math

Bit-exact port of the Uniswap V3 tick/price mapping. Prices computed here
match on-chain quotes to the last wei, so the magic constants below must not
be replaced with a floating-point 1.0001 ** tick.
"""

from .errors import TickOutOfRange
from .full_math import check_uint256, mul_div

MIN_TICK = -887272
MAX_TICK = 887272

# get_sqrt_ratio_at_tick(MIN_TICK) and get_sqrt_ratio_at_tick(MAX_TICK)
MIN_SQRT_RATIO = 4295128739
MAX_SQRT_RATIO = 1461446703485210103287273052203988822378723970342

Q64 = 1 << 64
Q96 = 1 << 96
Q128 = 1 << 128
Q192 = 1 << 192
UINT128_MAX = Q128 - 1

# 1 / sqrt(1.0001) ** (2 ** i) as Q128.128, for i = 1..19
_TICK_FACTORS = (
    (0x2, 0xFFF97272373D413259A46990580E213A),
    (0x4, 0xFFF2E50F5F656932EF12357CF3C7FDCC),
    (0x8, 0xFFE5CACA7E10E4E61C3624EAA0941CD0),
    (0x10, 0xFFCB9843D60F6159C9DB58835C926644),
    (0x20, 0xFF973B41FA98C081472E6896DFB254C0),
    (0x40, 0xFF2EA16466C96A3843EC78B326B52861),
    (0x80, 0xFE5DEE046A99A2A811C461F1969C3053),
    (0x100, 0xFCBE86C7900A88AEDCFFC83B479AA3A4),
    (0x200, 0xF987A7253AC413176F2B074CF7815E54),
    (0x400, 0xF3392B0822B70005940C7A398E4B70F3),
    (0x800, 0xE7159475A2C29B7443B29C7FA6E889D9),
    (0x1000, 0xD097F3BDFD2022B8845AD8F792AA5825),
    (0x2000, 0xA9F746462D870FDF8A65DC1F90E061E5),
    (0x4000, 0x70D869A156D2A1B890BB3DF62BAF32F7),
    (0x8000, 0x31BE135F97D08FD981231505542FCFA6),
    (0x10000, 0x9AA508B5B7A84E1C677DE54F3E99BC9),
    (0x20000, 0x5D6AF8DEDB81196699C329225EE604),
    (0x40000, 0x2216E584F5FA1EA926041BEDFE98),
    (0x80000, 0x48A170391F7DC42444E8FA2),
)

_UINT256_MAX = (1 << 256) - 1


def get_sqrt_ratio_at_tick(tick: int) -> int:
    """
    Return sqrt(1.0001 ** tick) as a Q64.96 fixed-point number.

    Raises TickOutOfRange outside [MIN_TICK, MAX_TICK].
    """
    abs_tick = -tick if tick < 0 else tick
    if abs_tick > MAX_TICK:
        raise TickOutOfRange(tick)

    if abs_tick & 0x1:
        ratio = 0xFFFCB933BD6FAD37AA2D162D1A594001
    else:
        ratio = 0x100000000000000000000000000000000
    for bit, factor in _TICK_FACTORS:
        if abs_tick & bit:
            ratio = (ratio * factor) >> 128

    if tick > 0:
        ratio = _UINT256_MAX // ratio

    # Q128.128 -> Q64.96, rounding up
    return (ratio >> 32) + (0 if ratio % (1 << 32) == 0 else 1)


def quote_from_ratio_x192(sqrt_ratio_x96: int, base_amount: int, base_is_token0: bool) -> int:
    """Quote by squaring the sqrt ratio directly. Requires sqrt_ratio_x96 <= 2**128 - 1."""
    ratio_x192 = check_uint256(sqrt_ratio_x96 * sqrt_ratio_x96)
    if base_is_token0:
        return mul_div(ratio_x192, base_amount, Q192)
    return mul_div(Q192, base_amount, ratio_x192)


def quote_from_ratio_x128(sqrt_ratio_x96: int, base_amount: int, base_is_token0: bool) -> int:
    """Quote by squaring after a 2**64 pre-division, for sqrt ratios above 128 bits."""
    ratio_x128 = mul_div(sqrt_ratio_x96, sqrt_ratio_x96, Q64)
    if base_is_token0:
        return mul_div(ratio_x128, base_amount, Q128)
    return mul_div(Q128, base_amount, ratio_x128)


def get_quote_at_sqrt_ratio(sqrt_ratio_x96: int, base_amount: int, base_is_token0: bool) -> int:
    """
    Amount of the quote token received for base_amount of the base token.

    When base_is_token0 the ratio token1/token0 is applied, otherwise its
    reciprocal.
    """
    if sqrt_ratio_x96 <= UINT128_MAX:
        return quote_from_ratio_x192(sqrt_ratio_x96, base_amount, base_is_token0)
    return quote_from_ratio_x128(sqrt_ratio_x96, base_amount, base_is_token0)


def get_quote_at_tick(tick: int, base_amount: int, base_is_token0: bool) -> int:
    """Quote base_amount at the price implied by tick."""
    return get_quote_at_sqrt_ratio(get_sqrt_ratio_at_tick(tick), base_amount, base_is_token0)
