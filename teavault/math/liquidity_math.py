"""
Liquidity Math - 유동성 계산

Ambient 집중화된 유동성(Concentrated Liquidity) 계산.
특정 가격 범위에서의 토큰 수량과 유동성 간의 변환 (Q64.64 sqrt price).

반올림 규칙 (venue 회계와 일치):
- 유동성 → 수량: venue가 받을 때(mint)는 올림, 볼트가 평가/수령할 때는 내림
- 수량 → 유동성: 볼트 뷰(get_liquidity_for_amounts)는 올림

References:
- Uniswap V3 Periphery: contracts/libraries/LiquidityAmounts.sol
- CrocSwap-protocol: contracts/libraries/LiquidityMath.sol

핵심 공식:
    L = Δy / (√P_upper - √P_lower)  # token1 기준
    L = Δx / (1/√P_lower - 1/√P_upper)  # token0 기준
"""

from typing import Tuple

from ..constants import Q64
from .full_math import div_rounding_up, mul_div, mul_div_rounding_up


def get_amount0_delta(
    sqrt_ratio_a_x64: int,
    sqrt_ratio_b_x64: int,
    liquidity: int,
    round_up: bool = True
) -> int:
    """유동성에서 amount0 변화량 계산

    공식: Δx = L * (√P_b - √P_a) / (√P_a * √P_b)

    Args:
        sqrt_ratio_a_x64: 하한 sqrtPriceX64
        sqrt_ratio_b_x64: 상한 sqrtPriceX64
        liquidity: 유동성
        round_up: True면 올림, False면 내림

    Returns:
        amount0 (token0 수량, 최소 단위)
    """
    if sqrt_ratio_a_x64 > sqrt_ratio_b_x64:
        sqrt_ratio_a_x64, sqrt_ratio_b_x64 = sqrt_ratio_b_x64, sqrt_ratio_a_x64

    numerator1 = liquidity << 64
    numerator2 = sqrt_ratio_b_x64 - sqrt_ratio_a_x64

    if round_up:
        return div_rounding_up(
            mul_div_rounding_up(numerator1, numerator2, sqrt_ratio_b_x64),
            sqrt_ratio_a_x64
        )
    return mul_div(numerator1, numerator2, sqrt_ratio_b_x64) // sqrt_ratio_a_x64


def get_amount1_delta(
    sqrt_ratio_a_x64: int,
    sqrt_ratio_b_x64: int,
    liquidity: int,
    round_up: bool = True
) -> int:
    """유동성에서 amount1 변화량 계산

    공식: Δy = L * (√P_b - √P_a)

    Args:
        sqrt_ratio_a_x64: 하한 sqrtPriceX64
        sqrt_ratio_b_x64: 상한 sqrtPriceX64
        liquidity: 유동성
        round_up: True면 올림, False면 내림

    Returns:
        amount1 (token1 수량, 최소 단위)
    """
    if sqrt_ratio_a_x64 > sqrt_ratio_b_x64:
        sqrt_ratio_a_x64, sqrt_ratio_b_x64 = sqrt_ratio_b_x64, sqrt_ratio_a_x64

    if round_up:
        return mul_div_rounding_up(liquidity, sqrt_ratio_b_x64 - sqrt_ratio_a_x64, Q64)
    return mul_div(liquidity, sqrt_ratio_b_x64 - sqrt_ratio_a_x64, Q64)


def get_liquidity_for_amount0(
    sqrt_ratio_a_x64: int,
    sqrt_ratio_b_x64: int,
    amount0: int,
    round_up: bool = False
) -> int:
    """amount0에서 유동성 계산

    공식: L = Δx * √P_a * √P_b / (√P_b - √P_a)
    """
    if sqrt_ratio_a_x64 > sqrt_ratio_b_x64:
        sqrt_ratio_a_x64, sqrt_ratio_b_x64 = sqrt_ratio_b_x64, sqrt_ratio_a_x64
    # Guard against division by zero (identical sqrt prices)
    if sqrt_ratio_b_x64 <= sqrt_ratio_a_x64:
        return 0

    if round_up:
        intermediate = mul_div_rounding_up(sqrt_ratio_a_x64, sqrt_ratio_b_x64, Q64)
        return mul_div_rounding_up(amount0, intermediate, sqrt_ratio_b_x64 - sqrt_ratio_a_x64)
    intermediate = mul_div(sqrt_ratio_a_x64, sqrt_ratio_b_x64, Q64)
    return mul_div(amount0, intermediate, sqrt_ratio_b_x64 - sqrt_ratio_a_x64)


def get_liquidity_for_amount1(
    sqrt_ratio_a_x64: int,
    sqrt_ratio_b_x64: int,
    amount1: int,
    round_up: bool = False
) -> int:
    """amount1에서 유동성 계산

    공식: L = Δy / (√P_b - √P_a)
    """
    if sqrt_ratio_a_x64 > sqrt_ratio_b_x64:
        sqrt_ratio_a_x64, sqrt_ratio_b_x64 = sqrt_ratio_b_x64, sqrt_ratio_a_x64
    # Guard against division by zero (identical sqrt prices)
    if sqrt_ratio_b_x64 <= sqrt_ratio_a_x64:
        return 0

    if round_up:
        return mul_div_rounding_up(amount1, Q64, sqrt_ratio_b_x64 - sqrt_ratio_a_x64)
    return mul_div(amount1, Q64, sqrt_ratio_b_x64 - sqrt_ratio_a_x64)


def get_liquidity_for_amounts(
    sqrt_ratio_x64: int,
    sqrt_ratio_a_x64: int,
    sqrt_ratio_b_x64: int,
    amount0: int,
    amount1: int,
    round_up: bool = False
) -> int:
    """토큰 수량에서 유동성 계산

    현재 가격과 범위, 두 토큰 수량이 주어졌을 때 유동성을 계산합니다.
    가격이 범위 안이면 두 제약 조건 중 작은 값을 사용합니다.

    Args:
        sqrt_ratio_x64: 현재 sqrtPriceX64
        sqrt_ratio_a_x64: 하한 sqrtPriceX64
        sqrt_ratio_b_x64: 상한 sqrtPriceX64
        amount0: token0 수량
        amount1: token1 수량
        round_up: True면 각 제약의 유동성을 올림

    Returns:
        유동성
    """
    if sqrt_ratio_a_x64 > sqrt_ratio_b_x64:
        sqrt_ratio_a_x64, sqrt_ratio_b_x64 = sqrt_ratio_b_x64, sqrt_ratio_a_x64

    if sqrt_ratio_x64 <= sqrt_ratio_a_x64:
        # 가격이 범위 아래: token0만 사용
        return get_liquidity_for_amount0(sqrt_ratio_a_x64, sqrt_ratio_b_x64, amount0, round_up)

    elif sqrt_ratio_x64 < sqrt_ratio_b_x64:
        # 가격이 범위 내: 양쪽 토큰 사용, 작은 값 반환
        liquidity0 = get_liquidity_for_amount0(sqrt_ratio_x64, sqrt_ratio_b_x64, amount0, round_up)
        liquidity1 = get_liquidity_for_amount1(sqrt_ratio_a_x64, sqrt_ratio_x64, amount1, round_up)
        return min(liquidity0, liquidity1)

    else:
        # 가격이 범위 위: token1만 사용
        return get_liquidity_for_amount1(sqrt_ratio_a_x64, sqrt_ratio_b_x64, amount1, round_up)


def get_amounts_for_liquidity(
    sqrt_ratio_x64: int,
    sqrt_ratio_a_x64: int,
    sqrt_ratio_b_x64: int,
    liquidity: int,
    round_up: bool = False
) -> Tuple[int, int]:
    """유동성에서 토큰 수량 계산

    현재 가격과 범위, 유동성이 주어졌을 때 포지션이 보유한 토큰 수량.

    Args:
        sqrt_ratio_x64: 현재 sqrtPriceX64
        sqrt_ratio_a_x64: 하한 sqrtPriceX64
        sqrt_ratio_b_x64: 상한 sqrtPriceX64
        liquidity: 유동성
        round_up: True면 올림 (venue가 받는 수량), False면 내림 (평가/수령 수량)

    Returns:
        (amount0, amount1) 튜플
    """
    if sqrt_ratio_a_x64 > sqrt_ratio_b_x64:
        sqrt_ratio_a_x64, sqrt_ratio_b_x64 = sqrt_ratio_b_x64, sqrt_ratio_a_x64

    if sqrt_ratio_x64 <= sqrt_ratio_a_x64:
        # 가격이 범위 아래: token0만 보유
        amount0 = get_amount0_delta(sqrt_ratio_a_x64, sqrt_ratio_b_x64, liquidity, round_up)
        amount1 = 0

    elif sqrt_ratio_x64 < sqrt_ratio_b_x64:
        # 가격이 범위 내: 양쪽 토큰 보유
        amount0 = get_amount0_delta(sqrt_ratio_x64, sqrt_ratio_b_x64, liquidity, round_up)
        amount1 = get_amount1_delta(sqrt_ratio_a_x64, sqrt_ratio_x64, liquidity, round_up)

    else:
        # 가격이 범위 위: token1만 보유
        amount0 = 0
        amount1 = get_amount1_delta(sqrt_ratio_a_x64, sqrt_ratio_b_x64, liquidity, round_up)

    return amount0, amount1
