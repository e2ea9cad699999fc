"""
TeaVault Ambient - 집중 유동성 볼트

예치자의 자산을 모아 Ambient 형태 venue의 레인지 포지션으로 운용하고
지분(share)을 발행합니다.

역할:
- owner: 수수료 설정, manager 지정, 소유권 이전
- manager: 포지션 추가/제거, 스왑, 수수료 수확
- 누구나: 입금/출금, 관리 수수료 정산

모든 공개 변경 연산은 Environment.atomic() 안에서 실행되며, 외부 호출을
포함하는 연산은 볼트별 재진입 가드로 보호됩니다.

사용법:
    vault = factory.create_vault(owner, VaultParams(...))
    vault.deposit(alice, shares=10**18, amount0_max=..., amount1_max=...)
    vault.add_liquidity(manager, -600, 600, liquidity, 0, 0, deadline)
"""

import copy
import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from ..chain.environment import Contract, Environment, transactional
from ..constants import NATIVE_ASSET, UINT256_MAX
from ..errors import (
    CallerIsNotOwner,
    InsufficientLiquidity,
    InsufficientShares,
    InsufficientValue,
    InvalidAddress,
    InvalidLiquidity,
    InvalidPriceSlippage,
    InvalidShareAmount,
    InvalidTickRange,
    InvalidTokenOrder,
    TransactionExpired,
)
from ..events import (
    AddLiquidity,
    CollectSwapFees,
    DepositShares,
    FeeConfigChanged,
    ManagementFeeCollected,
    ManagerChanged,
    OwnershipTransferred,
    RemoveLiquidity,
    Swap,
    WithdrawShares,
)
from ..math.full_math import div_rounding_up, mul_div, mul_div_rounding_up
from ..math.liquidity_math import get_amounts_for_liquidity
from ..math.tick_math import get_sqrt_ratio_at_tick, is_valid_tick_range
from ..venue.base import AmbientVenue, RangeCommand, UserCommand, VenueCallPaths
from .access import nonreentrant, only_manager, only_owner
from .fee_engine import FeeEngine
from .logic import VaultLogic
from .position_book import PositionBook
from .shares import ShareToken
from .swap_executor import SwapExecutor
from .types import FeeConfig, PoolInfo, Position, PositionInfo, VaultParams
from .valuation import ValuationEngine

logger = logging.getLogger(__name__)


@dataclass
class VaultState:
    """트랜잭션 롤백 대상이 되는 볼트 상태 전체"""
    asset0: str
    asset1: str
    decimal_offset: int
    pool_idx: int
    owner: str
    manager: str
    fee_cap: int
    fee_config: FeeConfig
    last_collect_management_fee: int
    logic: VaultLogic
    shares: ShareToken
    positions: PositionBook


class TeaVaultAmbient(Contract):
    """단일 풀 집중 유동성 볼트"""

    def __init__(
        self,
        env: Environment,
        venue: AmbientVenue,
        call_paths: VenueCallPaths,
        relayer: str,
        logic: VaultLogic,
        params: VaultParams,
        factory: str = ""
    ):
        if params.asset0 >= params.asset1:
            raise InvalidTokenOrder(f"asset0 < asset1 이어야 합니다: {params.asset0}, {params.asset1}")
        for name in ("owner", "manager"):
            if not getattr(params, name):
                raise InvalidAddress(f"{name} 주소가 비어 있습니다")

        fee_cap = FeeEngine.validate_fee_cap(params.fee_cap)
        logic.fee_engine.validate(params.fee_config, fee_cap)
        # 풀이 존재하지 않으면 VenueError
        venue.query_pool_params(params.asset0, params.asset1, params.pool_idx)

        self.env = env
        self.venue = venue
        self.call_paths = call_paths
        self.relayer = relayer
        self.factory = factory
        self._entered = False

        decimals = env.ledger.decimals(params.asset0) + params.decimal_offset
        env.ledger.decimals(params.asset1)
        self._state = VaultState(
            asset0=params.asset0,
            asset1=params.asset1,
            decimal_offset=params.decimal_offset,
            pool_idx=params.pool_idx,
            owner=params.owner,
            manager=params.manager,
            fee_cap=fee_cap,
            fee_config=params.fee_config,
            last_collect_management_fee=env.timestamp,
            logic=logic,
            shares=ShareToken(params.name, params.symbol, decimals),
            positions=PositionBook(logic.max_positions),
        )
        self.valuation = ValuationEngine(self)
        self.swap_executor = SwapExecutor(self)

        env.register(self)
        for asset in (self.asset0, self.asset1):
            if not env.ledger.is_native(asset):
                env.ledger.approve(asset, self.address, venue.address, UINT256_MAX)

        env.emit(self.address, ManagerChanged(params.owner, params.manager))
        env.emit(self.address, FeeConfigChanged(params.owner, params.fee_config))
        logger.info("vault %s initialized: %s/%s pool_idx=%d decimals=%d",
                    self.address, self.asset0, self.asset1, self.pool_idx, decimals)

    # ==========================================================================
    # 상태 접근
    # ==========================================================================

    @property
    def asset0(self) -> str:
        return self._state.asset0

    @property
    def asset1(self) -> str:
        return self._state.asset1

    @property
    def pool_idx(self) -> int:
        return self._state.pool_idx

    @property
    def owner(self) -> str:
        return self._state.owner

    @property
    def manager(self) -> str:
        return self._state.manager

    @property
    def fee_cap(self) -> int:
        return self._state.fee_cap

    @property
    def decimal_offset(self) -> int:
        return self._state.decimal_offset

    @property
    def logic(self) -> VaultLogic:
        return self._state.logic

    @property
    def positions_book(self) -> PositionBook:
        return self._state.positions

    @property
    def fee_engine(self) -> FeeEngine:
        return self._state.logic.fee_engine

    def snapshot(self) -> Any:
        return copy.deepcopy(self._state)

    def restore(self, state: Any) -> None:
        self._state = state

    # ==========================================================================
    # 관리 수수료
    # ==========================================================================

    @transactional
    @nonreentrant
    def collect_management_fee(self) -> int:
        """관리 수수료 정산 (누구나 호출 가능)

        Returns:
            treasury에 mint된 share
        """
        return self._collect_management_fee()

    def _collect_management_fee(self) -> int:
        state = self._state
        now = self.env.timestamp
        shares = self.fee_engine.management_fee_shares(
            state.shares.total_supply,
            state.fee_config.management_fee,
            now - state.last_collect_management_fee,
        )
        state.last_collect_management_fee = now
        if shares:
            state.shares.mint(state.fee_config.treasury, shares)
            self.env.emit(self.address, ManagementFeeCollected(shares))
            logger.info("management fee collected: %d shares to %s", shares, state.fee_config.treasury)
        return shares

    # ==========================================================================
    # 입금 / 출금
    # ==========================================================================

    @transactional
    @nonreentrant
    def deposit(
        self,
        caller: str,
        shares: int,
        amount0_max: int,
        amount1_max: int,
        value: int = 0
    ) -> Tuple[int, int]:
        """share 발행 입금

        필요 수량은 볼트에 유리하게 올림하고, 입금 수수료는 그 위에
        부과됩니다. 네이티브 자산은 value로 전달하며 초과분은 환불됩니다.

        Args:
            caller: 입금자
            shares: 발행할 share
            amount0_max / amount1_max: 수수료 포함 최대 지불 수량
            value: 전달한 네이티브 통화

        Returns:
            수수료 포함 지불 수량 (amount0, amount1)
        """
        if shares <= 0:
            raise InvalidShareAmount(f"share는 양수여야 합니다: {shares}")
        ledger = self.env.ledger
        if value:
            ledger.transfer(NATIVE_ASSET, caller, self.address, value)

        self._collect_management_fee()
        state = self._state
        total_supply = state.shares.total_supply

        if total_supply == 0:
            amount0 = div_rounding_up(shares, 10 ** state.decimal_offset)
            amount1 = 0
        else:
            underlying0, underlying1 = self.valuation.vault_all_underlying_assets()
            # 이번 호출로 받은 value는 평가에서 제외
            if ledger.is_native(self.asset0):
                underlying0 -= value
            amount0 = mul_div_rounding_up(underlying0, shares, total_supply)
            amount1 = mul_div_rounding_up(underlying1, shares, total_supply)
        if amount0 == 0 and amount1 == 0:
            raise InvalidShareAmount(f"share {shares}에 대응하는 자산이 없습니다")

        entry_fee = state.fee_config.entry_fee
        fee0 = self.fee_engine.entry_fee_amount(amount0, entry_fee)
        fee1 = self.fee_engine.entry_fee_amount(amount1, entry_fee)
        if amount0 + fee0 > amount0_max or amount1 + fee1 > amount1_max:
            raise InvalidPriceSlippage(
                f"입금 수량 초과: ({amount0 + fee0}, {amount1 + fee1}) > ({amount0_max}, {amount1_max})"
            )

        native_used = 0
        treasury = state.fee_config.treasury
        for asset, amount, fee in ((self.asset0, amount0, fee0), (self.asset1, amount1, fee1)):
            if ledger.is_native(asset):
                native_used = amount + fee
                if native_used > value:
                    raise InsufficientValue(f"네이티브 value 부족: {value} < {native_used}")
                ledger.transfer(asset, self.address, treasury, fee)
            else:
                ledger.transfer_from(asset, self.address, caller, self.address, amount)
                if fee:
                    ledger.transfer_from(asset, self.address, caller, treasury, fee)
        if value > native_used:
            ledger.transfer(NATIVE_ASSET, self.address, caller, value - native_used)

        state.shares.mint(caller, shares)
        self.env.emit(self.address, DepositShares(caller, shares, amount0, amount1, fee0, fee1))
        logger.info("deposit %s: shares=%d amounts=(%d, %d) fees=(%d, %d)",
                    caller, shares, amount0, amount1, fee0, fee1)
        return amount0 + fee0, amount1 + fee1

    @transactional
    @nonreentrant
    def withdraw(self, caller: str, shares: int, amount0_min: int, amount1_min: int) -> Tuple[int, int]:
        """share 소각 출금

        순서:
            1. 관리 수수료 정산, 총 공급량 기록
            2. 출금 수수료 share를 treasury로 전송, 나머지 소각
            3. 모든 포지션 수수료 수확
            4. 유휴 잔고에서 floor(idle * net / supply)
            5. 포지션 인덱스 순서로 floor(liquidity * net / supply) 제거
               (비게 된 포지션은 목록에서 제거)

        JIT 보호는 출금에 적용되지 않습니다.

        Returns:
            받은 수량 (amount0, amount1)
        """
        state = self._state
        if shares <= 0:
            raise InvalidShareAmount(f"share는 양수여야 합니다: {shares}")
        balance = state.shares.balance_of(caller)
        if balance < shares:
            raise InsufficientShares(f"share 잔고 부족: {balance} < {shares}")

        self._collect_management_fee()
        total_supply = state.shares.total_supply

        exit_fee_shares = self.fee_engine.exit_fee_shares(shares, state.fee_config.exit_fee)
        net_shares = shares - exit_fee_shares
        if exit_fee_shares:
            state.shares.transfer(caller, state.fee_config.treasury, exit_fee_shares)
        state.shares.burn(caller, net_shares)

        for position in list(state.positions):
            self._harvest(position.tick_lower, position.tick_upper)

        idle0, idle1 = self.valuation.idle_balances()
        amount0 = mul_div(idle0, net_shares, total_supply)
        amount1 = mul_div(idle1, net_shares, total_supply)

        for position in list(state.positions):
            liquidity = mul_div(position.liquidity, net_shares, total_supply)
            if liquidity == 0:
                continue
            burned0, burned1 = self._burn(position.tick_lower, position.tick_upper, liquidity)
            amount0 += burned0
            amount1 += burned1
            state.positions.reduce(position.tick_lower, position.tick_upper, liquidity)

        if amount0 < amount0_min or amount1 < amount1_min:
            raise InvalidPriceSlippage(
                f"출금 수량 부족: ({amount0}, {amount1}) < ({amount0_min}, {amount1_min})"
            )

        ledger = self.env.ledger
        ledger.transfer(self.asset0, self.address, caller, amount0)
        ledger.transfer(self.asset1, self.address, caller, amount1)
        self.env.emit(self.address, WithdrawShares(caller, shares, amount0, amount1, exit_fee_shares))
        logger.info("withdraw %s: shares=%d (exit fee %d) amounts=(%d, %d)",
                    caller, shares, exit_fee_shares, amount0, amount1)
        return amount0, amount1

    # ==========================================================================
    # 유동성
    # ==========================================================================

    @transactional
    @nonreentrant
    @only_manager
    def add_liquidity(
        self,
        caller: str,
        tick_lower: int,
        tick_upper: int,
        liquidity: int,
        amount0_min: int,
        amount1_min: int,
        deadline: int
    ) -> Tuple[int, int]:
        """레인지 포지션에 유동성 추가

        Returns:
            venue에 지불한 수량 (amount0, amount1)
        """
        self._check_deadline(deadline)
        self._check_tick_range(tick_lower, tick_upper)
        if liquidity <= 0:
            raise InvalidLiquidity(f"유동성은 양수여야 합니다: {liquidity}")
        book = self._state.positions
        book.ensure_capacity(tick_lower, tick_upper)

        value = 0
        if self.env.ledger.is_native(self.asset0):
            value, _ = get_amounts_for_liquidity(
                self.valuation.sqrt_price(),
                get_sqrt_ratio_at_tick(tick_lower),
                get_sqrt_ratio_at_tick(tick_upper),
                liquidity,
                round_up=True,
            )
        command = self._range_command(self.call_paths.mint_code, tick_lower, tick_upper, liquidity)
        amount0, amount1 = self._venue_lp(command, value)
        if amount0 < amount0_min or amount1 < amount1_min:
            raise InvalidPriceSlippage(
                f"유동성 추가 수량 부족: ({amount0}, {amount1}) < ({amount0_min}, {amount1_min})"
            )

        book.add(tick_lower, tick_upper, liquidity, self.env.timestamp)
        self.env.emit(self.address, AddLiquidity(tick_lower, tick_upper, liquidity, amount0, amount1))
        logger.info("add liquidity [%d, %d) L=%d amounts=(%d, %d)",
                    tick_lower, tick_upper, liquidity, amount0, amount1)
        return amount0, amount1

    @transactional
    @nonreentrant
    @only_manager
    def remove_liquidity(
        self,
        caller: str,
        tick_lower: int,
        tick_upper: int,
        liquidity: int,
        amount0_min: int,
        amount1_min: int,
        deadline: int
    ) -> Tuple[int, int]:
        """레인지 포지션에서 유동성 제거

        포지션 수수료를 먼저 수확합니다. 마지막으로 비어 있다가 유동성이
        추가된 시점부터 jit_protection_seconds 이내면 LiquidityLocked.

        Returns:
            venue에서 받은 수량 (수수료 제외)
        """
        self._check_deadline(deadline)
        book = self._state.positions
        position = book.get(tick_lower, tick_upper)
        if liquidity <= 0:
            raise InvalidLiquidity(f"유동성은 양수여야 합니다: {liquidity}")
        if liquidity > position.liquidity:
            raise InsufficientLiquidity(f"유동성 부족: {liquidity} > {position.liquidity}")
        book.check_unlocked(position, self.env.timestamp, self.logic.jit_protection_seconds)

        self._harvest(tick_lower, tick_upper)
        amount0, amount1 = self._burn(tick_lower, tick_upper, liquidity)
        if amount0 < amount0_min or amount1 < amount1_min:
            raise InvalidPriceSlippage(
                f"유동성 제거 수량 부족: ({amount0}, {amount1}) < ({amount0_min}, {amount1_min})"
            )

        book.reduce(tick_lower, tick_upper, liquidity)
        self.env.emit(self.address, RemoveLiquidity(tick_lower, tick_upper, liquidity, amount0, amount1))
        logger.info("remove liquidity [%d, %d) L=%d amounts=(%d, %d)",
                    tick_lower, tick_upper, liquidity, amount0, amount1)
        return amount0, amount1

    @transactional
    @nonreentrant
    @only_manager
    def collect_position_swap_fee(self, caller: str, tick_lower: int, tick_upper: int) -> Tuple[int, int]:
        """포지션 하나의 스왑 수수료 수확"""
        self._state.positions.get(tick_lower, tick_upper)
        return self._harvest(tick_lower, tick_upper)

    @transactional
    @nonreentrant
    @only_manager
    def collect_all_swap_fee(self, caller: str) -> Tuple[int, int]:
        """모든 포지션의 스왑 수수료 수확"""
        total0 = total1 = 0
        for position in list(self._state.positions):
            amount0, amount1 = self._harvest(position.tick_lower, position.tick_upper)
            total0 += amount0
            total1 += amount1
        return total0, total1

    # ==========================================================================
    # 스왑
    # ==========================================================================

    @transactional
    @nonreentrant
    @only_manager
    def execute_swap(
        self,
        caller: str,
        zero_for_one: bool,
        amount_in: int,
        amount_out_min: int,
        target: str,
        call_data: Any
    ) -> int:
        """임의 대상 스왑 (잔고 변화량 검증)

        Returns:
            받은 출력 수량
        """
        consumed, received = self.swap_executor.execute(
            zero_for_one, amount_in, amount_out_min, target, call_data
        )
        self.env.emit(self.address, Swap(zero_for_one, consumed, received, target))
        logger.info("swap via %s: zero_for_one=%s in=%d out=%d", target, zero_for_one, consumed, received)
        return received

    @transactional
    @nonreentrant
    @only_manager
    def swap_in_pool(
        self,
        caller: str,
        zero_for_one: bool,
        amount_in: int,
        amount_out_min: int,
        deadline: int
    ) -> int:
        """venue 풀에서 직접 스왑

        Returns:
            받은 출력 수량
        """
        self._check_deadline(deadline)
        consumed, received = self.swap_executor.swap_in_pool(zero_for_one, amount_in, amount_out_min)
        self.env.emit(self.address, Swap(zero_for_one, consumed, received, self.venue.address))
        logger.info("swap in pool: zero_for_one=%s in=%d out=%d", zero_for_one, consumed, received)
        return received

    # ==========================================================================
    # 관리자 설정
    # ==========================================================================

    @transactional
    @nonreentrant
    @only_owner
    def set_fee_config(self, caller: str, config: FeeConfig) -> None:
        """수수료 설정 변경 (이전 요율로 관리 수수료를 먼저 정산)"""
        self._collect_management_fee()
        self.fee_engine.validate(config, self._state.fee_cap)
        self._state.fee_config = config
        self.env.emit(self.address, FeeConfigChanged(caller, config))
        logger.info("fee config changed by %s: %s", caller, config)

    @transactional
    @only_owner
    def assign_manager(self, caller: str, manager: str) -> None:
        if not manager:
            raise InvalidAddress("manager 주소가 비어 있습니다")
        self._state.manager = manager
        self.env.emit(self.address, ManagerChanged(caller, manager))

    @transactional
    @only_owner
    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        if not new_owner:
            raise InvalidAddress("owner 주소가 비어 있습니다")
        self._state.owner = new_owner
        self.env.emit(self.address, OwnershipTransferred(caller, new_owner))

    @transactional
    def migrate_logic(self, caller: str, logic: VaultLogic) -> None:
        """새 로직 버전 적용 (팩토리 전용)"""
        if not self.factory or caller != self.factory:
            raise CallerIsNotOwner(f"factory 전용 연산입니다: {caller}")
        logic.migrate(self)
        self._state.logic = logic

    # ==========================================================================
    # share 토큰
    # ==========================================================================

    @transactional
    def transfer(self, caller: str, to: str, amount: int) -> None:
        self._state.shares.transfer(caller, to, amount)

    @transactional
    def approve(self, caller: str, spender: str, amount: int) -> None:
        self._state.shares.approve(caller, spender, amount)

    @transactional
    def transfer_from(self, caller: str, owner: str, to: str, amount: int) -> None:
        self._state.shares.transfer_from(caller, owner, to, amount)

    def balance_of(self, holder: str) -> int:
        return self._state.shares.balance_of(holder)

    def allowance(self, owner: str, spender: str) -> int:
        return self._state.shares.allowance(owner, spender)

    def total_supply(self) -> int:
        return self._state.shares.total_supply

    def decimals(self) -> int:
        return self._state.shares.decimals

    @property
    def name(self) -> str:
        return self._state.shares.name

    @property
    def symbol(self) -> str:
        return self._state.shares.symbol

    # ==========================================================================
    # 조회
    # ==========================================================================

    def get_pool_info(self) -> PoolInfo:
        ledger = self.env.ledger
        sqrt_price = self.valuation.sqrt_price()
        return PoolInfo(
            token0=self.asset0,
            token1=self.asset1,
            decimals0=ledger.decimals(self.asset0),
            decimals1=ledger.decimals(self.asset1),
            pool_idx=self.pool_idx,
            sqrt_price_x64=sqrt_price,
            tick=self.venue.query_curve_tick(self.asset0, self.asset1, self.pool_idx),
        )

    def fee_config(self) -> FeeConfig:
        return self._state.fee_config

    def last_collect_management_fee(self) -> int:
        return self._state.last_collect_management_fee

    def position_length(self) -> int:
        return len(self._state.positions)

    def positions(self, index: int) -> Position:
        return dataclasses.replace(self._state.positions[index])

    def get_all_positions(self) -> List[Position]:
        return [dataclasses.replace(p) for p in self._state.positions]

    def position_info(self, index: int) -> PositionInfo:
        return self.valuation.position_info(self._state.positions[index])

    def all_position_info(self) -> Tuple[int, int, int, int]:
        return self.valuation.all_position_info()

    def vault_all_underlying_assets(self) -> Tuple[int, int]:
        return self.valuation.vault_all_underlying_assets()

    def estimated_value_in_token0(self) -> int:
        return self.valuation.estimated_value_in_token0()

    def estimated_value_in_token1(self) -> int:
        return self.valuation.estimated_value_in_token1()

    def get_liquidity_for_amounts(self, tick_lower: int, tick_upper: int, amount0: int, amount1: int) -> int:
        return self.valuation.get_liquidity_for_amounts(tick_lower, tick_upper, amount0, amount1)

    def get_amounts_for_liquidity(self, tick_lower: int, tick_upper: int, liquidity: int) -> Tuple[int, int]:
        return self.valuation.get_amounts_for_liquidity(tick_lower, tick_upper, liquidity)

    # ==========================================================================
    # 내부 헬퍼
    # ==========================================================================

    def _check_deadline(self, deadline: Optional[int]) -> None:
        if deadline is not None and self.env.timestamp > deadline:
            raise TransactionExpired(f"deadline 경과: {self.env.timestamp} > {deadline}")

    def _check_tick_range(self, tick_lower: int, tick_upper: int) -> None:
        params = self.venue.query_pool_params(self.asset0, self.asset1, self.pool_idx)
        if not is_valid_tick_range(tick_lower, tick_upper, params.tick_size):
            raise InvalidTickRange(
                f"잘못된 틱 범위: [{tick_lower}, {tick_upper}) tick_size={params.tick_size}"
            )

    def _range_command(self, code: int, tick_lower: int, tick_upper: int, liquidity: int = 0) -> RangeCommand:
        return RangeCommand(
            code=code,
            base=self.asset0,
            quote=self.asset1,
            pool_idx=self.pool_idx,
            bid_tick=tick_lower,
            ask_tick=tick_upper,
            liquidity=liquidity,
        )

    def _venue_lp(self, command: RangeCommand, value: int = 0) -> Tuple[int, int]:
        """venue lp 명령 실행

        Returns:
            볼트 잔고 감소량 (양수 = 지불, 음수 = 수령)
        """
        ledger = self.env.ledger
        before0 = ledger.balance_of(self.asset0, self.address)
        before1 = ledger.balance_of(self.asset1, self.address)
        self.env.invoke(
            self.address,
            self.venue.address,
            UserCommand(self.call_paths.lp_call_path, command),
            value,
        )
        return (
            before0 - ledger.balance_of(self.asset0, self.address),
            before1 - ledger.balance_of(self.asset1, self.address),
        )

    def _burn(self, tick_lower: int, tick_upper: int, liquidity: int) -> Tuple[int, int]:
        command = self._range_command(self.call_paths.burn_code, tick_lower, tick_upper, liquidity)
        paid0, paid1 = self._venue_lp(command)
        return -paid0, -paid1

    def _harvest(self, tick_lower: int, tick_upper: int) -> Tuple[int, int]:
        command = self._range_command(self.call_paths.harvest_code, tick_lower, tick_upper)
        paid0, paid1 = self._venue_lp(command)
        amount0, amount1 = -paid0, -paid1
        if amount0 or amount1:
            self.env.emit(self.address, CollectSwapFees(tick_lower, tick_upper, amount0, amount1))
        logger.debug("harvest [%d, %d): (%d, %d)", tick_lower, tick_upper, amount0, amount1)
        return amount0, amount1
