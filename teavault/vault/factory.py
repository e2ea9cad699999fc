"""
Vault Factory

하나의 공유 VaultLogic으로 볼트를 생성하고, 로직 업그레이드를 모든
볼트에 원자적으로 적용합니다.
"""

import logging
from typing import Any, List

from ..chain.environment import Contract, Environment, transactional
from ..errors import InvalidLogicMigration
from ..events import LogicUpgraded, VaultDeployed
from ..venue.base import AmbientVenue, VenueCallPaths
from .access import only_owner
from .logic import VaultLogic
from .swap_executor import SwapRelayer
from .types import VaultParams
from .vault import TeaVaultAmbient

logger = logging.getLogger(__name__)


class VaultFactory(Contract):
    """TeaVaultAmbient 배포자

    사용법:
        factory = VaultFactory(env, owner, default_logic(), dex, settings.call_paths())
        vault = factory.create_vault(owner, VaultParams(...))
    """

    def __init__(
        self,
        env: Environment,
        owner: str,
        logic: VaultLogic,
        venue: AmbientVenue,
        call_paths: VenueCallPaths
    ):
        self.env = env
        self.owner = owner
        self.logic = logic
        self.venue = venue
        self.call_paths = call_paths
        self.relayer = SwapRelayer(env)
        self._vaults: List[str] = []
        env.register(self)

    @property
    def vaults(self) -> List[str]:
        return list(self._vaults)

    def vault_at(self, address: str) -> TeaVaultAmbient:
        return self.env.contract_at(address)

    @transactional
    @only_owner
    def create_vault(self, caller: str, params: VaultParams) -> TeaVaultAmbient:
        """볼트 생성 후 VaultDeployed 이벤트 발생"""
        vault = TeaVaultAmbient(
            self.env,
            self.venue,
            self.call_paths,
            self.relayer.address,
            self.logic,
            params,
            factory=self.address,
        )
        self._vaults.append(vault.address)
        self.env.emit(self.address, VaultDeployed(vault.address))
        logger.info("vault deployed: %s (%s)", vault.address, params.symbol)
        return vault

    @transactional
    @only_owner
    def upgrade_logic(self, caller: str, logic: VaultLogic) -> None:
        """로직 버전 업그레이드

        모든 볼트에 migrate()를 적용하며, 하나라도 실패하면 전체를 되돌립니다.
        """
        if logic.version <= self.logic.version:
            raise InvalidLogicMigration(
                f"버전은 증가해야 합니다: {logic.version} <= {self.logic.version}"
            )
        for address in self._vaults:
            self.vault_at(address).migrate_logic(self.address, logic)
        self.logic = logic
        self.env.emit(self.address, LogicUpgraded(logic.version))
        logger.info("logic upgraded to v%d (%d vaults)", logic.version, len(self._vaults))

    def snapshot(self) -> Any:
        return self.logic, list(self._vaults)

    def restore(self, state: Any) -> None:
        self.logic, vaults = state
        self._vaults = list(vaults)
