"""
Event records

Vault/factory 연산이 커밋될 때 Environment 이벤트 로그에 기록되는 레코드.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NamedTuple

if TYPE_CHECKING:
    from .vault.types import FeeConfig


class LogEntry(NamedTuple):
    """이벤트 로그 항목"""
    emitter: str  # 이벤트를 발생시킨 컨트랙트 주소
    timestamp: int
    event: Any


@dataclass(frozen=True)
class VaultDeployed:
    vault: str


@dataclass(frozen=True)
class LogicUpgraded:
    version: int


@dataclass(frozen=True)
class DepositShares:
    holder: str
    shares: int
    amount0: int
    amount1: int
    fee_amount0: int
    fee_amount1: int


@dataclass(frozen=True)
class WithdrawShares:
    holder: str
    shares: int
    amount0: int
    amount1: int
    exit_fee_shares: int


@dataclass(frozen=True)
class AddLiquidity:
    tick_lower: int
    tick_upper: int
    liquidity: int
    amount0: int
    amount1: int


@dataclass(frozen=True)
class RemoveLiquidity:
    tick_lower: int
    tick_upper: int
    liquidity: int
    amount0: int
    amount1: int


@dataclass(frozen=True)
class CollectSwapFees:
    tick_lower: int
    tick_upper: int
    amount0: int
    amount1: int


@dataclass(frozen=True)
class Swap:
    zero_for_one: bool
    amount_in: int
    amount_out: int
    target: str  # 스왑 대상 주소 (venue 스왑이면 venue 주소)


@dataclass(frozen=True)
class ManagementFeeCollected:
    shares: int


@dataclass(frozen=True)
class FeeConfigChanged:
    sender: str
    config: "FeeConfig"


@dataclass(frozen=True)
class ManagerChanged:
    sender: str
    new_manager: str


@dataclass(frozen=True)
class OwnershipTransferred:
    previous_owner: str
    new_owner: str
