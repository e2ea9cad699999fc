"""
TeaVault Ambient

Ambient 형태 AMM의 집중 유동성 포지션을 운용하는 단일 풀 볼트.

- math: tick / 가격 / 유동성 수학
- chain: 자산 원장, 시계, 이벤트, 트랜잭션
- venue: AMM venue 인터페이스와 참조 구현
- vault: 볼트, 팩토리, 수수료/포지션/평가 구성 요소
"""

__version__ = "0.1.0"

from .chain import Environment, TokenLedger
from .config import settings, configure_logging
from .constants import FEE_MULTIPLIER, NATIVE_ASSET
from .errors import TeaVaultError
from .venue import SimulatedAmbientDex, VenueCallPaths
from .vault import (
    FeeConfig,
    TeaVaultAmbient,
    VaultFactory,
    VaultLogic,
    VaultParams,
    default_logic,
)
