"""
Math layer for TeaVault

온체인 수준 정밀도의 수학 함수들:
- full_math: 범위 검사 곱셈/나눗셈
- tick_math: Tick ↔ sqrtPriceX64 변환
- price_math: sqrtPriceX64 가격 변환 및 단일 자산 평가
- liquidity_math: 유동성 ↔ 토큰 수량
"""

from .full_math import (
    check_uint256,
    mul_div,
    mul_div_rounding_up,
    div_rounding_up,
)
from .tick_math import (
    get_tick_at_sqrt_ratio,
    get_sqrt_ratio_at_tick,
    tick_to_price,
    is_valid_tick_range,
    MIN_SQRT_RATIO,
    MAX_SQRT_RATIO,
)
from .price_math import (
    sqrt_price_x64_to_price,
    value_in_token0,
    value_in_token1,
)
from .liquidity_math import (
    get_amount0_delta,
    get_amount1_delta,
    get_liquidity_for_amounts,
    get_amounts_for_liquidity,
)
