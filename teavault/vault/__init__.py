"""
Vault layer for TeaVault

- vault: TeaVaultAmbient 공개 연산
- factory: 볼트 생성과 로직 업그레이드
- fee_engine / position_book / shares / valuation / swap_executor: 볼트 구성 요소
"""

from .types import FeeConfig, PoolInfo, Position, PositionInfo, VaultParams
from .fee_engine import FeeEngine
from .position_book import PositionBook
from .shares import ShareToken
from .logic import VaultLogic, default_logic
from .swap_executor import RelayRequest, SwapExecutor, SwapRelayer
from .valuation import ValuationEngine
from .vault import TeaVaultAmbient, VaultState
from .factory import VaultFactory
