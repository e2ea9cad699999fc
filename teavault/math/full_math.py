"""
Full Math - 범위 검사가 있는 정수 곱셈/나눗셈

Python 정수는 오버플로우가 없으므로, 온체인 uint256 연산과 동일한 결과 범위를
직접 검사합니다. 범위를 벗어나면 랩어라운드하지 않고 예외를 발생시킵니다.

References:
- Uniswap V3 Core: contracts/libraries/FullMath.sol
"""

from ..constants import UINT256_MAX
from ..errors import ArithmeticOverflow, InvalidDenominator


def check_uint256(value: int) -> int:
    """값이 uint256 범위 [0, 2^256 - 1]인지 검사

    Raises:
        ArithmeticOverflow: 음수 또는 2^256 이상
    """
    if value < 0 or value > UINT256_MAX:
        raise ArithmeticOverflow(f"uint256 범위 초과: {value}")
    return value


def mul_div(a: int, b: int, denominator: int) -> int:
    """floor(a * b / denominator)

    Args:
        a: 피승수 (uint256)
        b: 승수 (uint256)
        denominator: 분모 (양수)

    Returns:
        내림한 결과

    Raises:
        InvalidDenominator: 분모가 0 이하
        ArithmeticOverflow: 입력 또는 결과가 uint256 범위 초과
    """
    if denominator <= 0:
        raise InvalidDenominator(f"분모는 양수여야 합니다: {denominator}")
    check_uint256(a)
    check_uint256(b)
    return check_uint256(a * b // denominator)


def mul_div_rounding_up(a: int, b: int, denominator: int) -> int:
    """ceil(a * b / denominator)"""
    if denominator <= 0:
        raise InvalidDenominator(f"분모는 양수여야 합니다: {denominator}")
    check_uint256(a)
    check_uint256(b)
    result = (a * b) // denominator
    if (a * b) % denominator > 0:
        result += 1
    return check_uint256(result)


def div_rounding_up(numerator: int, denominator: int) -> int:
    """ceil(numerator / denominator)"""
    if denominator <= 0:
        raise InvalidDenominator(f"분모는 양수여야 합니다: {denominator}")
    check_uint256(numerator)
    result = numerator // denominator
    if numerator % denominator > 0:
        result += 1
    return result
