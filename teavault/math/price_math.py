"""
Price Math - sqrtPriceX64 관련 계산

Ambient의 가격은 sqrtPriceX64 형식으로 저장됩니다.
sqrtPriceX64 = sqrt(price) * 2^64,  price = token1 / token0 (quote / base)

단일 자산 평가:
    value_in_token1 = amount1 + amount0 * sqrtP^2 / 2^128
    value_in_token0 = amount0 + amount1 * 2^128 / sqrtP^2
"""

from ..constants import Q64, Q128
from .full_math import mul_div


def sqrt_price_x64_to_price(
    sqrt_price_x64: int,
    decimal0: int = 18,
    decimal1: int = 18
) -> float:
    """sqrtPriceX64를 human-readable 가격으로 변환

    가격 = (sqrtPriceX64 / 2^64)^2 / 10^(decimal1 - decimal0)

    Args:
        sqrt_price_x64: sqrtPriceX64 값
        decimal0: token0 소수점 자릿수
        decimal1: token1 소수점 자릿수

    Returns:
        가격 (token1/token0 기준, human-readable)
    """
    sqrt_price = sqrt_price_x64 / Q64
    return sqrt_price ** 2 / (10 ** (decimal1 - decimal0))


def price_x128(sqrt_price_x64: int) -> int:
    """sqrtPriceX64^2 (Q128.128 가격)"""
    if sqrt_price_x64 <= 0:
        raise ValueError("sqrtPriceX64는 양수여야 합니다")
    return sqrt_price_x64 * sqrt_price_x64


def token0_to_token1(amount0: int, sqrt_price_x64: int) -> int:
    """token0 수량을 현재 가격으로 token1 가치로 환산 (내림)"""
    return mul_div(amount0, price_x128(sqrt_price_x64), Q128)


def token1_to_token0(amount1: int, sqrt_price_x64: int) -> int:
    """token1 수량을 현재 가격으로 token0 가치로 환산 (내림)"""
    return mul_div(amount1, Q128, price_x128(sqrt_price_x64))


def value_in_token0(amount0: int, amount1: int, sqrt_price_x64: int) -> int:
    """(amount0, amount1)의 token0 기준 가치"""
    return amount0 + token1_to_token0(amount1, sqrt_price_x64)


def value_in_token1(amount0: int, amount1: int, sqrt_price_x64: int) -> int:
    """(amount0, amount1)의 token1 기준 가치"""
    return amount1 + token0_to_token1(amount0, sqrt_price_x64)
