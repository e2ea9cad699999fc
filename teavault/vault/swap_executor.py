"""
Swap Executor

manager가 지정한 임의 대상(target)으로의 스왑을 잔고 변화량으로 검증합니다.

흐름:
    1. 볼트 잔고 기록
    2. amount_in을 SwapRelayer로 전송
    3. relayer가 target에 정확히 amount_in만 승인(또는 value로 전송)하고
       불투명 호출 invoke(target, call_data) 실행
    4. relayer가 남은 입력 자산과 받은 출력 자산을 모두 볼트로 반환
    5. 볼트 잔고를 다시 읽어 검증
       - 소비된 입력 > amount_in  → ExcessiveSwapInput
       - 받은 출력 < amount_out_min → InvalidPriceSlippage

target의 반환값은 신뢰하지 않고 무시합니다. 볼트 자체는 target에 어떤
승인도 하지 않으므로, target이 볼트 잔고를 추가로 가져갈 수 없습니다.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Tuple

from ..chain.environment import Contract, Environment
from ..constants import NATIVE_ASSET
from ..errors import ExcessiveSwapInput, ExternalCallFailed, InvalidPriceSlippage
from ..venue.base import SwapCommand, UserCommand

if TYPE_CHECKING:
    from .vault import TeaVaultAmbient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelayRequest:
    """SwapRelayer 호출 데이터"""
    src: str
    dst: str
    amount_in: int
    target: str
    call_data: Any


class SwapRelayer(Contract):
    """볼트와 스왑 대상 사이의 중계 컨트랙트

    호출이 끝나면 relayer의 src/dst 잔고는 항상 0이고 target 승인도 0으로
    되돌립니다. 여러 볼트가 하나의 relayer를 공유합니다.
    """

    def __init__(self, env: Environment):
        self.env = env
        env.register(self)

    def on_call(self, sender: str, data: Any, value: int) -> None:
        if not isinstance(data, RelayRequest):
            raise ExternalCallFailed(self.address, f"알 수 없는 relay 요청: {data!r}")
        env = self.env
        ledger = env.ledger

        if ledger.is_native(data.src):
            env.invoke(self.address, data.target, data.call_data, value=data.amount_in)
        else:
            ledger.approve(data.src, self.address, data.target, data.amount_in)
            env.invoke(self.address, data.target, data.call_data)
            ledger.approve(data.src, self.address, data.target, 0)

        for asset in (data.src, data.dst):
            balance = ledger.balance_of(asset, self.address)
            if balance:
                ledger.transfer(asset, self.address, sender, balance)


class SwapExecutor:
    """볼트 스왑 실행과 잔고 변화량 검증"""

    def __init__(self, vault: "TeaVaultAmbient"):
        self.vault = vault

    def _assets(self, zero_for_one: bool) -> Tuple[str, str]:
        v = self.vault
        return (v.asset0, v.asset1) if zero_for_one else (v.asset1, v.asset0)

    def _balances(self, src: str, dst: str) -> Tuple[int, int]:
        v = self.vault
        ledger = v.env.ledger
        return ledger.balance_of(src, v.address), ledger.balance_of(dst, v.address)

    def execute(
        self,
        zero_for_one: bool,
        amount_in: int,
        amount_out_min: int,
        target: str,
        call_data: Any
    ) -> Tuple[int, int]:
        """임의 대상 스왑

        Returns:
            (소비된 입력, 받은 출력)
        """
        v = self.vault
        src, dst = self._assets(zero_for_one)
        before = self._balances(src, dst)

        v.env.ledger.transfer(src, v.address, v.relayer, amount_in)
        v.env.invoke(v.address, v.relayer, RelayRequest(src, dst, amount_in, target, call_data))

        return self._check(src, dst, before, amount_in, amount_out_min)

    def swap_in_pool(self, zero_for_one: bool, amount_in: int, amount_out_min: int) -> Tuple[int, int]:
        """venue 풀에서 직접 스왑 (swap call path)"""
        v = self.vault
        src, dst = self._assets(zero_for_one)
        before = self._balances(src, dst)

        command = SwapCommand(
            base=v.asset0,
            quote=v.asset1,
            pool_idx=v.pool_idx,
            is_buy=zero_for_one,
            qty=amount_in,
            min_out=amount_out_min,
        )
        value = amount_in if src == NATIVE_ASSET else 0
        v.env.invoke(v.address, v.venue.address, UserCommand(v.call_paths.swap_call_path, command), value)

        return self._check(src, dst, before, amount_in, amount_out_min)

    def _check(
        self,
        src: str,
        dst: str,
        before: Tuple[int, int],
        amount_in: int,
        amount_out_min: int
    ) -> Tuple[int, int]:
        after = self._balances(src, dst)
        consumed = before[0] - after[0]
        received = after[1] - before[1]
        logger.debug("swap settle: consumed=%d received=%d", consumed, received)

        if consumed > amount_in:
            raise ExcessiveSwapInput(f"입력 초과 소비: {consumed} > {amount_in}")
        if received < amount_out_min:
            raise InvalidPriceSlippage(f"출력 부족: {received} < {amount_out_min}")
        return consumed, received
