"""
Vault Logic

여러 볼트가 공유하는 버전 있는 전략 객체. 팩토리가 upgrade_logic()으로
새 버전을 배포하면 각 볼트에 migrate()가 명시적으로 적용됩니다.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..config import settings
from ..errors import InvalidLogicMigration
from .fee_engine import FeeEngine

if TYPE_CHECKING:
    from .vault import TeaVaultAmbient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VaultLogic:
    """볼트 로직 버전

    - version: 업그레이드마다 증가
    - max_positions: 볼트당 최대 포지션 수
    - jit_protection_seconds: 유동성 추가 후 제거까지 최소 경과 시간
    - fee_engine: 수수료 계산기
    """
    version: int = 1
    max_positions: int = settings.MAX_POSITIONS
    jit_protection_seconds: int = settings.JIT_PROTECTION_SECONDS
    fee_engine: FeeEngine = field(default_factory=FeeEngine, compare=False)

    def migrate(self, vault: "TeaVaultAmbient") -> None:
        """볼트 상태를 이 버전에 맞게 변환

        Raises:
            InvalidLogicMigration: 볼트 포지션 수가 새 max_positions를 초과
        """
        if len(vault.positions_book) > self.max_positions:
            raise InvalidLogicMigration(
                f"{vault.address}: 포지션 {len(vault.positions_book)}개 > max_positions {self.max_positions}"
            )
        vault.positions_book.max_positions = self.max_positions
        logger.debug("vault %s migrated to logic v%d", vault.address, self.version)


def default_logic() -> VaultLogic:
    return VaultLogic(
        version=1,
        max_positions=settings.MAX_POSITIONS,
        jit_protection_seconds=settings.JIT_PROTECTION_SECONDS,
    )
