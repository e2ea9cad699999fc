"""
Share Token

볼트 지분 토큰의 잔고/허용량 저장소. 총 공급량은 항상 잔고 합계와
같습니다. mint/burn은 볼트 내부에서만 호출합니다.
"""

import logging
from typing import Dict, Tuple

from ..errors import InsufficientShares, InvalidShareAmount

logger = logging.getLogger(__name__)


class ShareToken:
    """볼트 share (ERC20 형태의 최소 구현)"""

    def __init__(self, name: str, symbol: str, decimals: int):
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self._total_supply = 0
        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, holder: str) -> int:
        return self._balances.get(holder, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def mint(self, to: str, amount: int) -> None:
        if amount < 0:
            raise InvalidShareAmount(f"음수 share: {amount}")
        self._balances[to] = self.balance_of(to) + amount
        self._total_supply += amount

    def burn(self, holder: str, amount: int) -> None:
        balance = self.balance_of(holder)
        if amount < 0:
            raise InvalidShareAmount(f"음수 share: {amount}")
        if balance < amount:
            raise InsufficientShares(f"share 잔고 부족: {balance} < {amount}")
        self._balances[holder] = balance - amount
        self._total_supply -= amount

    def transfer(self, sender: str, to: str, amount: int) -> None:
        balance = self.balance_of(sender)
        if amount < 0:
            raise InvalidShareAmount(f"음수 share: {amount}")
        if balance < amount:
            raise InsufficientShares(f"share 잔고 부족: {balance} < {amount}")
        self._balances[sender] = balance - amount
        self._balances[to] = self.balance_of(to) + amount

    def approve(self, owner: str, spender: str, amount: int) -> None:
        if amount < 0:
            raise InvalidShareAmount(f"음수 허용량: {amount}")
        self._allowances[(owner, spender)] = amount

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None:
        allowed = self.allowance(owner, spender)
        if allowed < amount:
            raise InsufficientShares(f"share 허용량 부족: {allowed} < {amount}")
        self.transfer(owner, to, amount)
        self._allowances[(owner, spender)] = allowed - amount
