"""
TeaVaultAmbient 유동성 테스트

add/remove liquidity, JIT 보호, 포지션 한도, 수수료 수확, 포지션이 있는
상태의 출금과 평가를 검증합니다.
"""

import pytest

from ..constants import Q64
from ..errors import (
    CallerIsNotManager,
    InsufficientLiquidity,
    InvalidLiquidity,
    InvalidPriceSlippage,
    InvalidTickRange,
    LiquidityLocked,
    PositionDoesNotExist,
    PositionLengthExceedsLimit,
    TransactionExpired,
)
from ..events import AddLiquidity, CollectSwapFees, RemoveLiquidity
from ..math.liquidity_math import get_amounts_for_liquidity
from ..math.tick_math import get_sqrt_ratio_at_tick
from .conftest import DEADLINE, POOL_IDX, balances, fund

E18 = 10 ** 18
HALF = E18 // 2
L = E18
SQRT_LOWER = get_sqrt_ratio_at_tick(-600)
SQRT_UPPER = get_sqrt_ratio_at_tick(600)


def amounts_at_price_one(liquidity, round_up=False):
    return get_amounts_for_liquidity(Q64, SQRT_LOWER, SQRT_UPPER, liquidity, round_up=round_up)


@pytest.fixture
def funded_vault(env, vault, accounts):
    """alice가 1e18 입금 후 절반을 token1로 스왑한 볼트"""
    fund(env, vault, accounts.alice, E18)
    vault.deposit(accounts.alice, E18, E18, 0)
    vault.swap_in_pool(accounts.manager, True, HALF, HALF, DEADLINE)
    assert balances(env, vault, vault.address) == (HALF, HALF)
    return vault


class TestAddLiquidity:
    """add_liquidity 테스트"""

    def test_add(self, env, funded_vault, dex, accounts):
        vault = funded_vault
        paid = vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)

        assert paid == amounts_at_price_one(L, round_up=True)
        assert balances(env, vault, vault.address) == (HALF - paid[0], HALF - paid[1])
        assert vault.position_length() == 1
        position = vault.positions(0)
        assert (position.tick_lower, position.tick_upper, position.liquidity) == (-600, 600, L)
        assert position.timestamp == env.timestamp
        assert dex.query_range_position(vault.address, vault.asset0, vault.asset1, POOL_IDX, -600, 600) == L
        assert env.events_of(AddLiquidity, vault.address) == [AddLiquidity(-600, 600, L, *paid)]

    def test_merge(self, env, funded_vault, accounts):
        vault = funded_vault
        vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        assert vault.position_length() == 1
        assert vault.positions(0).liquidity == 2 * L

    def test_manager_only(self, funded_vault, accounts):
        with pytest.raises(CallerIsNotManager):
            funded_vault.add_liquidity(accounts.alice, -600, 600, L, 0, 0, DEADLINE)

    def test_invalid_tick_range(self, funded_vault, accounts):
        with pytest.raises(InvalidTickRange):
            funded_vault.add_liquidity(accounts.manager, -605, 600, L, 0, 0, DEADLINE)
        with pytest.raises(InvalidTickRange):
            funded_vault.add_liquidity(accounts.manager, 600, -600, L, 0, 0, DEADLINE)

    def test_zero_liquidity(self, funded_vault, accounts):
        with pytest.raises(InvalidLiquidity):
            funded_vault.add_liquidity(accounts.manager, -600, 600, 0, 0, 0, DEADLINE)

    def test_expired(self, env, funded_vault, accounts):
        with pytest.raises(TransactionExpired):
            funded_vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, env.timestamp - 1)

    def test_slippage(self, env, funded_vault, dex, accounts):
        vault = funded_vault
        with pytest.raises(InvalidPriceSlippage):
            vault.add_liquidity(accounts.manager, -600, 600, L, HALF, 0, DEADLINE)
        assert vault.position_length() == 0
        assert dex.query_range_position(vault.address, vault.asset0, vault.asset1, POOL_IDX, -600, 600) == 0
        assert balances(env, vault, vault.address) == (HALF, HALF)

    def test_position_limit(self, env, funded_vault, dex, accounts):
        """한도 초과 시 venue 호출 전에 실패"""
        vault = funded_vault
        for k in range(1, 6):
            vault.add_liquidity(accounts.manager, -10 * k, 10 * k, 10 ** 12, 0, 0, DEADLINE)
        with pytest.raises(PositionLengthExceedsLimit):
            vault.add_liquidity(accounts.manager, -60, 60, 10 ** 12, 0, 0, DEADLINE)
        assert dex.query_range_position(vault.address, vault.asset0, vault.asset1, POOL_IDX, -60, 60) == 0
        # 기존 범위에는 추가 가능
        vault.add_liquidity(accounts.manager, -10, 10, 10 ** 12, 0, 0, DEADLINE)
        assert vault.position_length() == 5


class TestRemoveLiquidity:
    """remove_liquidity / JIT 보호 테스트"""

    def test_locked(self, env, funded_vault, accounts):
        vault = funded_vault
        vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        env.advance_time(59)
        with pytest.raises(LiquidityLocked):
            vault.remove_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)

    def test_remove(self, env, funded_vault, accounts):
        vault = funded_vault
        vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        env.advance_time(60)
        before = balances(env, vault, vault.address)

        received = vault.remove_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        assert received == amounts_at_price_one(L)
        assert balances(env, vault, vault.address) == (before[0] + received[0], before[1] + received[1])
        assert vault.position_length() == 0
        assert env.events_of(RemoveLiquidity, vault.address) == [RemoveLiquidity(-600, 600, L, *received)]

    def test_merge_keeps_lock_start(self, env, funded_vault, accounts):
        """기존 포지션에 추가해도 JIT 기준 시각은 유지"""
        vault = funded_vault
        vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        env.advance_time(30)
        vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        env.advance_time(30)
        vault.remove_liquidity(accounts.manager, -600, 600, 2 * L, 0, 0, DEADLINE)

    def test_partial(self, env, funded_vault, accounts):
        vault = funded_vault
        vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        env.advance_time(60)
        vault.remove_liquidity(accounts.manager, -600, 600, L // 4, 0, 0, DEADLINE)
        assert vault.positions(0).liquidity == L - L // 4

    def test_compaction(self, env, funded_vault, accounts):
        vault = funded_vault
        for tick in (100, 200, 300):
            vault.add_liquidity(accounts.manager, -tick, tick, 10 ** 12, 0, 0, DEADLINE)
        env.advance_time(60)
        vault.remove_liquidity(accounts.manager, -200, 200, 10 ** 12, 0, 0, DEADLINE)
        assert [(p.tick_lower, p.tick_upper) for p in vault.get_all_positions()] == [(-100, 100), (-300, 300)]

    def test_errors(self, env, funded_vault, accounts):
        vault = funded_vault
        vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        env.advance_time(60)
        with pytest.raises(PositionDoesNotExist):
            vault.remove_liquidity(accounts.manager, -1200, 1200, 1, 0, 0, DEADLINE)
        with pytest.raises(InsufficientLiquidity):
            vault.remove_liquidity(accounts.manager, -600, 600, L + 1, 0, 0, DEADLINE)
        with pytest.raises(InvalidLiquidity):
            vault.remove_liquidity(accounts.manager, -600, 600, 0, 0, 0, DEADLINE)
        with pytest.raises(InvalidPriceSlippage):
            vault.remove_liquidity(accounts.manager, -600, 600, L, HALF, 0, DEADLINE)
        with pytest.raises(CallerIsNotManager):
            vault.remove_liquidity(accounts.alice, -600, 600, L, 0, 0, DEADLINE)
        assert vault.positions(0).liquidity == L


class TestSwapFees:
    """스왑 수수료 수확 테스트"""

    def test_collect_position_swap_fee(self, env, funded_vault, dex, accounts):
        vault = funded_vault
        vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        dex.accrue_rewards(vault.address, vault.asset0, vault.asset1, POOL_IDX, -600, 600, 1000, 2000)
        assert vault.position_info(0).fee0 == 1000
        assert vault.position_info(0).fee1 == 2000

        before = balances(env, vault, vault.address)
        assert vault.collect_position_swap_fee(accounts.manager, -600, 600) == (1000, 2000)
        assert balances(env, vault, vault.address) == (before[0] + 1000, before[1] + 2000)
        assert vault.position_info(0)[2:] == (0, 0)
        assert env.events_of(CollectSwapFees, vault.address)[-1] == CollectSwapFees(-600, 600, 1000, 2000)

    def test_collect_all(self, env, funded_vault, dex, accounts):
        vault = funded_vault
        vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        vault.add_liquidity(accounts.manager, -1200, 1200, L, 0, 0, DEADLINE)
        dex.accrue_rewards(vault.address, vault.asset0, vault.asset1, POOL_IDX, -600, 600, 10, 20)
        dex.accrue_rewards(vault.address, vault.asset0, vault.asset1, POOL_IDX, -1200, 1200, 1, 2)
        assert vault.collect_all_swap_fee(accounts.manager) == (11, 22)
        assert vault.collect_all_swap_fee(accounts.manager) == (0, 0)

    def test_missing_position(self, funded_vault, accounts):
        with pytest.raises(PositionDoesNotExist):
            funded_vault.collect_position_swap_fee(accounts.manager, -600, 600)

    def test_manager_only(self, funded_vault, accounts):
        with pytest.raises(CallerIsNotManager):
            funded_vault.collect_all_swap_fee(accounts.alice)


class TestWithdrawWithPositions:
    """포지션이 있는 상태의 출금"""

    def test_half(self, env, funded_vault, accounts):
        """idle 먼저, 이후 포지션별 floor(L * net / supply)"""
        vault = funded_vault
        paid = vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        idle0, idle1 = HALF - paid[0], HALF - paid[1]
        burned = amounts_at_price_one(L // 2)

        received = vault.withdraw(accounts.alice, HALF, 0, 0)
        assert received == (idle0 // 2 + burned[0], idle1 // 2 + burned[1])
        assert vault.positions(0).liquidity == L - L // 2
        assert vault.total_supply() == HALF

    def test_full_removes_positions(self, env, funded_vault, dex, accounts):
        """JIT 보호는 출금에 적용되지 않고, 비게 된 포지션은 제거"""
        vault = funded_vault
        vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        vault.add_liquidity(accounts.manager, -1200, 1200, L, 0, 0, DEADLINE)

        vault.withdraw(accounts.alice, E18, 0, 0)
        assert vault.position_length() == 0
        assert vault.total_supply() == 0
        assert balances(env, vault, vault.address) == (0, 0)
        assert dex.query_range_position(vault.address, vault.asset0, vault.asset1, POOL_IDX, -600, 600) == 0

    def test_includes_fees(self, env, funded_vault, dex, accounts):
        vault = funded_vault
        vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        dex.accrue_rewards(vault.address, vault.asset0, vault.asset1, POOL_IDX, -600, 600, 1000, 2000)
        underlying = vault.vault_all_underlying_assets()

        received = vault.withdraw(accounts.alice, E18, 0, 0)
        assert received == underlying

    def test_round_trip_without_fees(self, env, funded_vault, accounts):
        """수수료 0: 전체 출금 시 입금한 가치를 반올림 오차 내에서 회수

        포지션마다 mint 올림 + burn 내림으로 토큰별 최대 1 손실
        """
        vault = funded_vault
        vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        vault.add_liquidity(accounts.manager, -1200, 1200, L // 3, 0, 0, DEADLINE)
        env.advance_time(3600)
        assert balances(env, vault, accounts.alice) == (0, 0)

        vault.withdraw(accounts.alice, E18, 0, 0)
        amount0, amount1 = balances(env, vault, accounts.alice)
        assert HALF - 2 <= amount0 <= HALF
        assert HALF - 2 <= amount1 <= HALF
        assert amount0 + amount1 >= E18 - 4

    def test_empty_harvest_emits_no_event(self, env, funded_vault, dex, accounts):
        vault = funded_vault
        vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        vault.add_liquidity(accounts.manager, -1200, 1200, L, 0, 0, DEADLINE)
        dex.accrue_rewards(vault.address, vault.asset0, vault.asset1, POOL_IDX, -1200, 1200, 5, 0)

        vault.withdraw(accounts.alice, HALF, 0, 0)
        assert env.events_of(CollectSwapFees, vault.address) == [CollectSwapFees(-1200, 1200, 5, 0)]

        vault.withdraw(accounts.alice, HALF // 2, 0, 0)
        assert len(env.events_of(CollectSwapFees, vault.address)) == 1


class TestValuation:
    """평가 뷰 테스트"""

    def test_underlying(self, env, funded_vault, dex, accounts):
        vault = funded_vault
        paid = vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        dex.accrue_rewards(vault.address, vault.asset0, vault.asset1, POOL_IDX, -600, 600, 7, 9)
        held = amounts_at_price_one(L)
        assert vault.vault_all_underlying_assets() == (
            HALF - paid[0] + held[0] + 7,
            HALF - paid[1] + held[1] + 9,
        )

    def test_all_position_info(self, funded_vault, dex, accounts):
        vault = funded_vault
        vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        vault.add_liquidity(accounts.manager, -1200, 1200, L, 0, 0, DEADLINE)
        dex.accrue_rewards(vault.address, vault.asset0, vault.asset1, POOL_IDX, -1200, 1200, 3, 4)

        first, second = vault.position_info(0), vault.position_info(1)
        assert (second.fee0, second.fee1) == (3, 4)
        assert vault.all_position_info() == (
            first.amount0 + second.amount0,
            first.amount1 + second.amount1,
            3,
            4,
        )

    def test_estimated_value_price_one(self, funded_vault):
        amount0, amount1 = funded_vault.vault_all_underlying_assets()
        assert funded_vault.estimated_value_in_token0() == amount0 + amount1
        assert funded_vault.estimated_value_in_token1() == amount0 + amount1

    def test_estimated_value_price_four(self, funded_vault, dex):
        """sqrtP = 2: token0 1개 = token1 4개"""
        vault = funded_vault
        dex.set_price(vault.asset0, vault.asset1, POOL_IDX, 2 * Q64)
        assert vault.estimated_value_in_token1() == HALF * 4 + HALF
        assert vault.estimated_value_in_token0() == HALF + HALF // 4

    def test_views_do_not_mutate(self, env, funded_vault, accounts):
        vault = funded_vault
        vault.add_liquidity(accounts.manager, -600, 600, L, 0, 0, DEADLINE)
        n_events = len(env.events)
        vault.get_pool_info()
        vault.position_info(0)
        vault.estimated_value_in_token0()
        vault.get_all_positions()[0].liquidity = 0
        assert vault.positions(0).liquidity == L
        assert len(env.events) == n_events

    def test_liquidity_amount_views(self, funded_vault):
        vault = funded_vault
        amount0, amount1 = vault.get_amounts_for_liquidity(-600, 600, L)
        assert (amount0, amount1) == amounts_at_price_one(L)
        liquidity = vault.get_liquidity_for_amounts(-600, 600, amount0, amount1)
        assert liquidity == pytest.approx(L, rel=1e-12)

    def test_pool_info(self, funded_vault, tokens):
        info = funded_vault.get_pool_info()
        assert info[0] == tokens[0]
        assert info[1] == tokens[1]
        assert info.pool_idx == POOL_IDX
        assert info.sqrt_price_x64 == Q64
        assert info.tick == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
