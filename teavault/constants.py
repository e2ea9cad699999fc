"""
TeaVault 상수 정의

볼트 회계와 Ambient 풀 수학에 사용하는 상수들:
- Q64: Ambient sqrt price 인코딩 (Q64.64, 2^64)
- Q128: 가격(sqrtPrice^2) 디코딩 (2^128)
- FEE_MULTIPLIER: 수수료율 단위 (parts-per-million)
- SECONDS_PER_YEAR: 관리 수수료 연율 환산
"""

# Fixed-point 인코딩 상수
Q64: int = 2 ** 64
Q128: int = 2 ** 128

# uint 최대값
UINT256_MAX: int = 2 ** 256 - 1

# Ambient 틱 범위 (TickMath.sol)
MIN_TICK: int = -665454
MAX_TICK: int = 831818

# 수수료 단위: 1_000_000 = 100%
FEE_MULTIPLIER: int = 1_000_000
SECONDS_PER_YEAR: int = 365 * 24 * 60 * 60

# entry/exit 수수료 기본 상한 (50%)
DEFAULT_FEE_CAP: int = 500_000

# 볼트가 동시에 보유할 수 있는 최대 포지션 수
MAX_POSITION_LENGTH: int = 5

# JIT 보호: 유동성 추가 후 제거까지 최소 경과 시간 (초)
JIT_PROTECTION_SECONDS: int = 60

# 네이티브 통화 자리표시 주소
NATIVE_ASSET: str = "0x" + "0" * 40
NATIVE_DECIMALS: int = 18

# Ambient CrocSwapDex 기본 call path / command code
DEFAULT_SWAP_CALL_PATH: int = 1
DEFAULT_LP_CALL_PATH: int = 2
DEFAULT_MINT_CODE: int = 1    # mint concentrated, fixed in liquidity units
DEFAULT_BURN_CODE: int = 2    # burn concentrated, fixed in liquidity units
DEFAULT_HARVEST_CODE: int = 5  # harvest accumulated rewards
