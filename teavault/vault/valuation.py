"""
Valuation Engine

볼트 자산 평가 (읽기 전용):
- 유휴 잔고 + 포지션 수량(현재 가격, 내림) + venue 미수령 보상
- 단일 자산 환산 추정치

    value_in_token0 = amount0 + amount1 * 2^128 / sqrtP^2
    value_in_token1 = amount1 + amount0 * sqrtP^2 / 2^128
"""

from typing import TYPE_CHECKING, Tuple

from ..math.liquidity_math import get_amounts_for_liquidity, get_liquidity_for_amounts
from ..math.price_math import value_in_token0, value_in_token1
from ..math.tick_math import get_sqrt_ratio_at_tick
from .types import Position, PositionInfo

if TYPE_CHECKING:
    from .vault import TeaVaultAmbient


class ValuationEngine:
    """볼트 상태를 변경하지 않는 평가 함수 모음"""

    def __init__(self, vault: "TeaVaultAmbient"):
        self.vault = vault

    def sqrt_price(self) -> int:
        v = self.vault
        return v.venue.query_price(v.asset0, v.asset1, v.pool_idx)

    def idle_balances(self) -> Tuple[int, int]:
        v = self.vault
        ledger = v.env.ledger
        return ledger.balance_of(v.asset0, v.address), ledger.balance_of(v.asset1, v.address)

    def position_amounts(self, position: Position, sqrt_price_x64: int) -> Tuple[int, int]:
        return get_amounts_for_liquidity(
            sqrt_price_x64,
            get_sqrt_ratio_at_tick(position.tick_lower),
            get_sqrt_ratio_at_tick(position.tick_upper),
            position.liquidity,
        )

    def position_fees(self, position: Position) -> Tuple[int, int]:
        v = self.vault
        return v.venue.query_conc_rewards(
            v.address, v.asset0, v.asset1, v.pool_idx, position.tick_lower, position.tick_upper
        )

    def position_info(self, position: Position) -> PositionInfo:
        amount0, amount1 = self.position_amounts(position, self.sqrt_price())
        fee0, fee1 = self.position_fees(position)
        return PositionInfo(amount0, amount1, fee0, fee1)

    def all_position_info(self) -> Tuple[int, int, int, int]:
        """모든 포지션 합계 (amount0, amount1, fee0, fee1)"""
        sqrt_price = self.sqrt_price()
        total0 = total1 = fees0 = fees1 = 0
        for position in self.vault.positions_book:
            amount0, amount1 = self.position_amounts(position, sqrt_price)
            fee0, fee1 = self.position_fees(position)
            total0 += amount0
            total1 += amount1
            fees0 += fee0
            fees1 += fee1
        return total0, total1, fees0, fees1

    def vault_all_underlying_assets(self) -> Tuple[int, int]:
        idle0, idle1 = self.idle_balances()
        amount0, amount1, fee0, fee1 = self.all_position_info()
        return idle0 + amount0 + fee0, idle1 + amount1 + fee1

    def estimated_value_in_token0(self) -> int:
        amount0, amount1 = self.vault_all_underlying_assets()
        return value_in_token0(amount0, amount1, self.sqrt_price())

    def estimated_value_in_token1(self) -> int:
        amount0, amount1 = self.vault_all_underlying_assets()
        return value_in_token1(amount0, amount1, self.sqrt_price())

    def get_liquidity_for_amounts(self, tick_lower: int, tick_upper: int, amount0: int, amount1: int) -> int:
        """수량으로 얻을 수 있는 유동성 (올림)"""
        return get_liquidity_for_amounts(
            self.sqrt_price(),
            get_sqrt_ratio_at_tick(tick_lower),
            get_sqrt_ratio_at_tick(tick_upper),
            amount0,
            amount1,
            round_up=True,
        )

    def get_amounts_for_liquidity(self, tick_lower: int, tick_upper: int, liquidity: int) -> Tuple[int, int]:
        """유동성에 해당하는 수량 (내림)"""
        return get_amounts_for_liquidity(
            self.sqrt_price(),
            get_sqrt_ratio_at_tick(tick_lower),
            get_sqrt_ratio_at_tick(tick_upper),
            liquidity,
        )
