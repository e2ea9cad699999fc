"""
Token Ledger - 자산 잔고/허용량 원장

ERC20 토큰과 네이티브 통화 자리표시(NATIVE_ASSET)의 잔고를 관리합니다.
모든 수량은 최소 단위 정수입니다.
"""

import copy
import logging
from typing import Any, Dict, Tuple

from ..constants import NATIVE_ASSET, NATIVE_DECIMALS
from ..errors import InsufficientAllowance, InsufficientBalance, InvalidAddress

logger = logging.getLogger(__name__)


class TokenLedger:
    """자산별 잔고 원장

    사용법:
        ledger = TokenLedger()
        ledger.register_token("0x...01", "USDC", 6)
        ledger.mint("0x...01", alice, 10**6)
        ledger.transfer("0x...01", alice, bob, 500_000)
    """

    def __init__(self):
        self._tokens: Dict[str, Tuple[str, int]] = {NATIVE_ASSET: ("ETH", NATIVE_DECIMALS)}
        self._balances: Dict[str, Dict[str, int]] = {NATIVE_ASSET: {}}
        self._allowances: Dict[Tuple[str, str, str], int] = {}

    # ==========================================================================
    # 토큰 메타데이터
    # ==========================================================================

    def register_token(self, address: str, symbol: str, decimals: int) -> str:
        """토큰 등록"""
        if not address or address == NATIVE_ASSET:
            raise InvalidAddress(f"토큰 주소로 사용할 수 없습니다: {address!r}")
        if decimals < 0:
            raise ValueError(f"decimals는 0 이상이어야 합니다: {decimals}")
        self._tokens[address] = (symbol, decimals)
        self._balances.setdefault(address, {})
        return address

    @staticmethod
    def is_native(asset: str) -> bool:
        return asset == NATIVE_ASSET

    def decimals(self, asset: str) -> int:
        return self._token(asset)[1]

    def symbol(self, asset: str) -> str:
        return self._token(asset)[0]

    def _token(self, asset: str) -> Tuple[str, int]:
        try:
            return self._tokens[asset]
        except KeyError:
            raise InvalidAddress(f"등록되지 않은 자산: {asset}") from None

    # ==========================================================================
    # 잔고
    # ==========================================================================

    def balance_of(self, asset: str, holder: str) -> int:
        self._token(asset)
        return self._balances[asset].get(holder, 0)

    def total_supply(self, asset: str) -> int:
        self._token(asset)
        return sum(self._balances[asset].values())

    def mint(self, asset: str, to: str, amount: int) -> None:
        """자산 발행 (테스트/시뮬레이션 자금 공급용)"""
        self._token(asset)
        if amount < 0:
            raise ValueError(f"발행 수량은 0 이상이어야 합니다: {amount}")
        balances = self._balances[asset]
        balances[to] = balances.get(to, 0) + amount

    def transfer(self, asset: str, sender: str, to: str, amount: int) -> None:
        """sender → to 전송

        Raises:
            InsufficientBalance: sender 잔고 부족
        """
        self._token(asset)
        if amount < 0:
            raise ValueError(f"전송 수량은 0 이상이어야 합니다: {amount}")
        if amount == 0:
            return
        balances = self._balances[asset]
        available = balances.get(sender, 0)
        if available < amount:
            raise InsufficientBalance(
                f"{self.symbol(asset)} 잔고 부족: {sender} 보유 {available}, 요청 {amount}"
            )
        balances[sender] = available - amount
        balances[to] = balances.get(to, 0) + amount

    # ==========================================================================
    # 허용량 (ERC20 approve / transferFrom)
    # ==========================================================================

    def approve(self, asset: str, owner: str, spender: str, amount: int) -> None:
        self._token(asset)
        if amount < 0:
            raise ValueError(f"허용량은 0 이상이어야 합니다: {amount}")
        self._allowances[(asset, owner, spender)] = amount

    def allowance(self, asset: str, owner: str, spender: str) -> int:
        return self._allowances.get((asset, owner, spender), 0)

    def transfer_from(self, asset: str, spender: str, owner: str, to: str, amount: int) -> None:
        """spender가 owner의 허용량을 사용하여 owner → to 전송

        네이티브 통화는 허용량으로 옮길 수 없습니다 (value로 전달).
        """
        if self.is_native(asset):
            raise InsufficientAllowance("네이티브 통화는 transfer_from을 사용할 수 없습니다")
        allowed = self.allowance(asset, owner, spender)
        if allowed < amount:
            raise InsufficientAllowance(
                f"{self.symbol(asset)} 허용량 부족: {owner} → {spender} 허용 {allowed}, 요청 {amount}"
            )
        self.transfer(asset, owner, to, amount)
        self._allowances[(asset, owner, spender)] = allowed - amount

    # ==========================================================================
    # 트랜잭션 스냅샷
    # ==========================================================================

    def snapshot(self) -> Any:
        return copy.deepcopy((self._tokens, self._balances, self._allowances))

    def restore(self, state: Any) -> None:
        self._tokens, self._balances, self._allowances = state
