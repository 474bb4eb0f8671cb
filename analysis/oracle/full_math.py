"""
ORACLE - Wide Fixed-Point Arithmetic

Multiply-then-divide on unbounded Python ints, checked against the 256-bit
domain the on-chain oracle works in. Results that do not fit raise instead
of wrapping.
"""

from .errors import DivisionByZero, MulDivOverflow, OracleMathError

UINT256_MAX = 2**256 - 1
WAD = 10**18


def check_uint256(value: int) -> int:
    """Return value if it is a valid uint256, else raise."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise OracleMathError(f"non-integer value in integer domain: {value!r}")
    if value < 0:
        raise OracleMathError(f"negative value in unsigned domain: {value}")
    if value > UINT256_MAX:
        raise MulDivOverflow(f"value exceeds uint256: {value}")
    return value


def mul_div(a: int, b: int, denominator: int, round_up: bool = False) -> int:
    """
    Compute a * b / denominator with a full-width intermediate.

    Rounds toward zero unless round_up is set, in which case any remainder
    bumps the result by one. Operands must be uint256 and so must the result.
    """
    check_uint256(a)
    check_uint256(b)
    check_uint256(denominator)
    if denominator == 0:
        raise DivisionByZero("mul_div denominator is zero")

    result, remainder = divmod(a * b, denominator)
    if round_up and remainder:
        result += 1
    return check_uint256(result)


def mul_div_up(a: int, b: int, denominator: int) -> int:
    """mul_div rounding up."""
    return mul_div(a, b, denominator, round_up=True)


def mul_wad_up(a: int, b: int) -> int:
    """a * b / 1e18, rounding up."""
    return mul_div_up(a, b, WAD)


def div_toward_zero(numerator: int, denominator: int) -> int:
    """
    Signed division truncating toward zero.

    Python's // floors, so -7 // 2 == -4; this returns -3, matching
    two's-complement integer division.
    """
    if denominator == 0:
        raise DivisionByZero("division by zero")
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient
