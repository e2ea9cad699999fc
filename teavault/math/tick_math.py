"""
Tick Math - Tick ↔ sqrtPrice 변환

Ambient(CrocSwap) 풀의 틱 수학 함수들. 온체인 컨트랙트와 동일한 정밀도로 구현.
Ambient는 Uniswap V3와 같은 1.0001 틱 격자를 쓰지만, sqrt price를
Q64.64 고정소수점으로 저장하고 틱 범위가 더 좁습니다.

References:
- CrocSwap-protocol: contracts/libraries/TickMath.sol
- Uniswap V3 Core: contracts/libraries/TickMath.sol

핵심 공식:
    price = 1.0001^tick
    sqrtPriceX64 = sqrt(price) * 2^64
"""

from ..constants import MIN_TICK, MAX_TICK


# Ambient TickMath 상수
MIN_SQRT_RATIO: int = 65538
MAX_SQRT_RATIO: int = 21267430153580247136652501917186561138


def get_sqrt_ratio_at_tick(tick: int) -> int:
    """틱에서 sqrtPriceX64 계산

    Solidity TickMath.getSqrtRatioAtTick()과 동일한 구현.
    Q128.128 비율을 계산한 뒤 64비트 시프트(올림)로 Q64.64로 변환합니다.

    Args:
        tick: 틱 인덱스 (-665454 ~ 831818)

    Returns:
        sqrtPriceX64 (Q64.64 형식)

    Raises:
        ValueError: 틱이 유효 범위를 벗어난 경우
    """
    if tick < MIN_TICK or tick > MAX_TICK:
        raise ValueError(f"틱이 유효 범위를 벗어났습니다: {tick} (범위: {MIN_TICK} ~ {MAX_TICK})")

    abs_tick = abs(tick)

    # 매직 넘버를 사용한 비트 연산 (Solidity 구현과 동일)
    ratio = 0x100000000000000000000000000000000 if abs_tick & 0x1 == 0 \
        else 0xfffcb933bd6fad37aa2d162d1a594001

    if abs_tick & 0x2:
        ratio = (ratio * 0xfff97272373d413259a46990580e213a) >> 128
    if abs_tick & 0x4:
        ratio = (ratio * 0xfff2e50f5f656932ef12357cf3c7fdcc) >> 128
    if abs_tick & 0x8:
        ratio = (ratio * 0xffe5caca7e10e4e61c3624eaa0941cd0) >> 128
    if abs_tick & 0x10:
        ratio = (ratio * 0xffcb9843d60f6159c9db58835c926644) >> 128
    if abs_tick & 0x20:
        ratio = (ratio * 0xff973b41fa98c081472e6896dfb254c0) >> 128
    if abs_tick & 0x40:
        ratio = (ratio * 0xff2ea16466c96a3843ec78b326b52861) >> 128
    if abs_tick & 0x80:
        ratio = (ratio * 0xfe5dee046a99a2a811c461f1969c3053) >> 128
    if abs_tick & 0x100:
        ratio = (ratio * 0xfcbe86c7900a88aedcffc83b479aa3a4) >> 128
    if abs_tick & 0x200:
        ratio = (ratio * 0xf987a7253ac413176f2b074cf7815e54) >> 128
    if abs_tick & 0x400:
        ratio = (ratio * 0xf3392b0822b70005940c7a398e4b70f3) >> 128
    if abs_tick & 0x800:
        ratio = (ratio * 0xe7159475a2c29b7443b29c7fa6e889d9) >> 128
    if abs_tick & 0x1000:
        ratio = (ratio * 0xd097f3bdfd2022b8845ad8f792aa5825) >> 128
    if abs_tick & 0x2000:
        ratio = (ratio * 0xa9f746462d870fdf8a65dc1f90e061e5) >> 128
    if abs_tick & 0x4000:
        ratio = (ratio * 0x70d869a156d2a1b890bb3df62baf32f7) >> 128
    if abs_tick & 0x8000:
        ratio = (ratio * 0x31be135f97d08fd981231505542fcfa6) >> 128
    if abs_tick & 0x10000:
        ratio = (ratio * 0x9aa508b5b7a84e1c677de54f3e99bc9) >> 128
    if abs_tick & 0x20000:
        ratio = (ratio * 0x5d6af8dedb81196699c329225ee604) >> 128
    if abs_tick & 0x40000:
        ratio = (ratio * 0x2216e584f5fa1ea926041bedfe98) >> 128
    if abs_tick & 0x80000:
        ratio = (ratio * 0x48a170391f7dc42444e8fa2) >> 128

    if tick > 0:
        ratio = (2**256 - 1) // ratio

    # Q128.128 -> Q64.64
    return (ratio >> 64) + (1 if ratio % (1 << 64) != 0 else 0)


def get_tick_at_sqrt_ratio(sqrt_price_x64: int) -> int:
    """sqrtPriceX64에서 틱 계산

    get_sqrt_ratio_at_tick(tick) <= sqrt_price_x64를 만족하는 최대 틱.

    Args:
        sqrt_price_x64: sqrtPriceX64 (Q64.64 형식)

    Returns:
        틱 인덱스

    Raises:
        ValueError: sqrtPriceX64가 유효 범위를 벗어난 경우
    """
    if sqrt_price_x64 < MIN_SQRT_RATIO or sqrt_price_x64 >= MAX_SQRT_RATIO:
        raise ValueError(
            f"sqrtPriceX64가 유효 범위를 벗어났습니다: {sqrt_price_x64}"
        )

    # Q64.64 -> Q128.128
    ratio = sqrt_price_x64 << 64

    r = ratio
    msb = 0

    # 최상위 비트 찾기
    for shift, threshold in (
        (7, 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF),
        (6, 0xFFFFFFFFFFFFFFFF),
        (5, 0xFFFFFFFF),
        (4, 0xFFFF),
        (3, 0xFF),
        (2, 0xF),
        (1, 0x3),
    ):
        f = (1 if r > threshold else 0) << shift
        msb |= f
        r >>= f
    msb |= 1 if r > 0x1 else 0

    if msb >= 128:
        r = ratio >> (msb - 127)
    else:
        r = ratio << (127 - msb)

    log_2 = (msb - 128) << 64

    # 로그 계산
    for i in range(14):
        r = (r * r) >> 127
        f = r >> 128
        log_2 |= f << (63 - i)
        r >>= f

    log_sqrt10001 = log_2 * 255738958999603826347141

    tick_low = (log_sqrt10001 - 3402992956809132418596140100660247210) >> 128
    tick_high = (log_sqrt10001 + 291339464771989622907027621153398088495) >> 128

    if tick_low == tick_high:
        return tick_low

    if get_sqrt_ratio_at_tick(tick_high) <= sqrt_price_x64:
        return tick_high
    return tick_low


def tick_to_price(tick: int, token0_decimals: int = 18, token1_decimals: int = 18) -> float:
    """틱을 human-readable 가격으로 변환 (token1/token0)

    price = 1.0001^tick × 10^(token0_decimals - token1_decimals)
    """
    return 1.0001 ** tick * (10 ** (token0_decimals - token1_decimals))


def is_valid_tick_range(tick_lower: int, tick_upper: int, tick_size: int) -> bool:
    """틱 범위 유효성 검사

    - tick_lower < tick_upper
    - 두 틱 모두 [MIN_TICK, MAX_TICK] 범위
    - 두 틱 모두 tick_size의 배수
    """
    if tick_size <= 0:
        return False
    if tick_lower >= tick_upper:
        return False
    if tick_lower < MIN_TICK or tick_upper > MAX_TICK:
        return False
    return tick_lower % tick_size == 0 and tick_upper % tick_size == 0
