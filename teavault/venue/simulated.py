"""
Simulated Ambient Dex - in-process 참조 venue

AmbientVenue 인터페이스의 단순한 구현. 테스트와 시뮬레이션에서 볼트를
실행하기 위한 것으로, 실제 AMM의 가격 이동은 재현하지 않습니다:

- 가격은 set_price()로만 바뀌며 스왑은 현재 가격에 고정 수수료로 체결
- mint는 필요한 수량을 올림으로 받고, burn은 내림으로 지급
- 스왑 수수료 보상은 accrue_rewards()로 직접 적립
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from ..chain.environment import Environment
from ..constants import FEE_MULTIPLIER, NATIVE_ASSET
from ..errors import VenueError
from ..math.full_math import mul_div_rounding_up
from ..math.liquidity_math import get_amounts_for_liquidity
from ..math.price_math import token0_to_token1, token1_to_token0
from ..math.tick_math import (
    MAX_SQRT_RATIO,
    MIN_SQRT_RATIO,
    get_sqrt_ratio_at_tick,
    is_valid_tick_range,
)
from .base import AmbientVenue, PoolParams, RangeCommand, SwapCommand, VenueCallPaths

logger = logging.getLogger(__name__)

PoolKey = Tuple[str, str, int]
PositionKey = Tuple[str, str, str, int, int, int]


@dataclass
class _PoolState:
    sqrt_price: int
    tick_size: int
    fee_rate: int


@dataclass
class _RangePosition:
    liquidity: int = 0
    rewards0: int = 0
    rewards1: int = 0


class SimulatedAmbientDex(AmbientVenue):
    """고정 가격 참조 venue

    사용법:
        dex = SimulatedAmbientDex(env, call_paths)
        dex.init_pool(token0, token1, 420, sqrt_price_x64=2**64, tick_size=10)
    """

    def __init__(self, env: Environment, call_paths: VenueCallPaths):
        self.env = env
        self.call_paths = call_paths
        self._pools: Dict[PoolKey, _PoolState] = {}
        self._positions: Dict[PositionKey, _RangePosition] = {}
        env.register(self)

    # ==========================================================================
    # 풀 관리 (시뮬레이션 제어)
    # ==========================================================================

    def init_pool(
        self,
        base: str,
        quote: str,
        pool_idx: int,
        sqrt_price_x64: int,
        tick_size: int = 1,
        fee_rate: int = 0
    ) -> None:
        if base >= quote:
            raise VenueError(f"base < quote 순서여야 합니다: {base}, {quote}")
        if (base, quote, pool_idx) in self._pools:
            raise VenueError(f"이미 존재하는 풀: {(base, quote, pool_idx)}")
        if tick_size <= 0 or not 0 <= fee_rate < FEE_MULTIPLIER:
            raise VenueError(f"잘못된 풀 파라미터: tick_size={tick_size}, fee_rate={fee_rate}")
        self._check_price(sqrt_price_x64)
        self._pools[(base, quote, pool_idx)] = _PoolState(sqrt_price_x64, tick_size, fee_rate)
        logger.info("pool initialized %s/%s#%d sqrt_price=%d", base, quote, pool_idx, sqrt_price_x64)

    def set_price(self, base: str, quote: str, pool_idx: int, sqrt_price_x64: int) -> None:
        self._check_price(sqrt_price_x64)
        self._pool(base, quote, pool_idx).sqrt_price = sqrt_price_x64

    def accrue_rewards(
        self,
        owner: str,
        base: str,
        quote: str,
        pool_idx: int,
        bid_tick: int,
        ask_tick: int,
        amount0: int,
        amount1: int
    ) -> None:
        """포지션에 스왑 수수료 보상 적립 (트레이더가 낸 수수료를 venue에 입금)"""
        position = self._positions.get((owner, base, quote, pool_idx, bid_tick, ask_tick))
        if position is None or position.liquidity == 0:
            raise VenueError("보상을 적립할 포지션이 없습니다")
        self.env.ledger.mint(base, self.address, amount0)
        self.env.ledger.mint(quote, self.address, amount1)
        position.rewards0 += amount0
        position.rewards1 += amount1

    # ==========================================================================
    # 명령
    # ==========================================================================

    def user_cmd(self, caller: str, call_path: int, command: Any, value: int = 0) -> Tuple[int, int]:
        paths = self.call_paths
        if call_path == paths.swap_call_path and isinstance(command, SwapCommand):
            flows = self._swap(caller, command)
            base = command.base
        elif call_path == paths.lp_call_path and isinstance(command, RangeCommand):
            if command.code == paths.mint_code:
                flows = self._mint(caller, command)
            elif command.code == paths.burn_code:
                flows = self._burn(caller, command)
            elif command.code == paths.harvest_code:
                flows = self._harvest(caller, command)
            else:
                raise VenueError(f"알 수 없는 lp 코드: {command.code}")
            base = command.base
        else:
            raise VenueError(f"알 수 없는 call path: {call_path} ({type(command).__name__})")

        self._settle(caller, base, command.quote, flows, value)
        return flows

    def _swap(self, caller: str, cmd: SwapCommand) -> Tuple[int, int]:
        pool = self._pool(cmd.base, cmd.quote, cmd.pool_idx)
        if cmd.qty <= 0:
            raise VenueError("스왑 수량은 양수여야 합니다")
        fee = mul_div_rounding_up(cmd.qty, pool.fee_rate, FEE_MULTIPLIER)
        net_in = cmd.qty - fee
        if cmd.is_buy:
            out = token0_to_token1(net_in, pool.sqrt_price)
            flows = (cmd.qty, -out)
        else:
            out = token1_to_token0(net_in, pool.sqrt_price)
            flows = (-out, cmd.qty)
        if out < cmd.min_out:
            raise VenueError(f"스왑 출력 부족: {out} < {cmd.min_out}")
        logger.debug("swap %s is_buy=%s qty=%d out=%d", caller, cmd.is_buy, cmd.qty, out)
        return flows

    def _mint(self, caller: str, cmd: RangeCommand) -> Tuple[int, int]:
        pool = self._pool(cmd.base, cmd.quote, cmd.pool_idx)
        if not is_valid_tick_range(cmd.bid_tick, cmd.ask_tick, pool.tick_size):
            raise VenueError(f"잘못된 틱 범위: [{cmd.bid_tick}, {cmd.ask_tick})")
        if cmd.liquidity <= 0:
            raise VenueError("유동성은 양수여야 합니다")
        amount0, amount1 = self._amounts(pool, cmd, round_up=True)
        key = (caller, cmd.base, cmd.quote, cmd.pool_idx, cmd.bid_tick, cmd.ask_tick)
        position = self._positions.setdefault(key, _RangePosition())
        position.liquidity += cmd.liquidity
        return amount0, amount1

    def _burn(self, caller: str, cmd: RangeCommand) -> Tuple[int, int]:
        pool = self._pool(cmd.base, cmd.quote, cmd.pool_idx)
        key = (caller, cmd.base, cmd.quote, cmd.pool_idx, cmd.bid_tick, cmd.ask_tick)
        position = self._positions.get(key)
        if position is None or position.liquidity < cmd.liquidity or cmd.liquidity <= 0:
            raise VenueError("burn할 유동성이 부족합니다")
        amount0, amount1 = self._amounts(pool, cmd, round_up=False)
        position.liquidity -= cmd.liquidity
        if position.liquidity == 0 and position.rewards0 == 0 and position.rewards1 == 0:
            del self._positions[key]
        return -amount0, -amount1

    def _harvest(self, caller: str, cmd: RangeCommand) -> Tuple[int, int]:
        self._pool(cmd.base, cmd.quote, cmd.pool_idx)
        key = (caller, cmd.base, cmd.quote, cmd.pool_idx, cmd.bid_tick, cmd.ask_tick)
        position = self._positions.get(key)
        if position is None:
            return 0, 0
        rewards0, rewards1 = position.rewards0, position.rewards1
        position.rewards0 = position.rewards1 = 0
        if position.liquidity == 0:
            del self._positions[key]
        return -rewards0, -rewards1

    def _settle(self, caller: str, base: str, quote: str, flows: Tuple[int, int], value: int) -> None:
        """flow 정산 후 남은 네이티브 value 환불"""
        ledger = self.env.ledger
        remaining = value
        for asset, flow in ((base, flows[0]), (quote, flows[1])):
            if flow > 0:
                if asset == NATIVE_ASSET:
                    if remaining < flow:
                        raise VenueError(f"네이티브 value 부족: {remaining} < {flow}")
                    remaining -= flow
                else:
                    ledger.transfer_from(asset, self.address, caller, self.address, flow)
            elif flow < 0:
                ledger.transfer(asset, self.address, caller, -flow)
        if remaining:
            ledger.transfer(NATIVE_ASSET, self.address, caller, remaining)

    # ==========================================================================
    # 조회
    # ==========================================================================

    def query_price(self, base: str, quote: str, pool_idx: int) -> int:
        return self._pool(base, quote, pool_idx).sqrt_price

    def query_pool_params(self, base: str, quote: str, pool_idx: int) -> PoolParams:
        pool = self._pool(base, quote, pool_idx)
        return PoolParams(tick_size=pool.tick_size, fee_rate=pool.fee_rate)

    def query_range_position(
        self, owner: str, base: str, quote: str, pool_idx: int, bid_tick: int, ask_tick: int
    ) -> int:
        position = self._positions.get((owner, base, quote, pool_idx, bid_tick, ask_tick))
        return position.liquidity if position else 0

    def query_conc_rewards(
        self, owner: str, base: str, quote: str, pool_idx: int, bid_tick: int, ask_tick: int
    ) -> Tuple[int, int]:
        position = self._positions.get((owner, base, quote, pool_idx, bid_tick, ask_tick))
        if position is None:
            return 0, 0
        return position.rewards0, position.rewards1

    # ==========================================================================
    # 내부 헬퍼
    # ==========================================================================

    def _pool(self, base: str, quote: str, pool_idx: int) -> _PoolState:
        try:
            return self._pools[(base, quote, pool_idx)]
        except KeyError:
            raise VenueError(f"존재하지 않는 풀: {(base, quote, pool_idx)}") from None

    @staticmethod
    def _check_price(sqrt_price_x64: int) -> None:
        if not MIN_SQRT_RATIO <= sqrt_price_x64 < MAX_SQRT_RATIO:
            raise VenueError(f"sqrtPriceX64 범위 초과: {sqrt_price_x64}")

    @staticmethod
    def _amounts(pool: _PoolState, cmd: RangeCommand, round_up: bool) -> Tuple[int, int]:
        return get_amounts_for_liquidity(
            pool.sqrt_price,
            get_sqrt_ratio_at_tick(cmd.bid_tick),
            get_sqrt_ratio_at_tick(cmd.ask_tick),
            cmd.liquidity,
            round_up=round_up,
        )

    def snapshot(self) -> Any:
        return copy.deepcopy((self._pools, self._positions))

    def restore(self, state: Any) -> None:
        self._pools, self._positions = state
