"""
공통 fixture

가격 1 (sqrtPriceX64 = 2^64), tick_size 10, 스왑 수수료 0인 풀과
그 풀을 사용하는 볼트를 구성합니다.
"""

from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any, Callable, Optional

import pytest

from ..chain.environment import Contract, Environment
from ..constants import NATIVE_ASSET, Q64
from ..venue.base import VenueCallPaths
from ..venue.simulated import SimulatedAmbientDex
from ..vault.factory import VaultFactory
from ..vault.logic import VaultLogic
from ..vault.types import FeeConfig, VaultParams

START = 1_700_000_000
POOL_IDX = 420
TICK_SIZE = 10
DEADLINE = 2 ** 40
RESERVE = 10 ** 30


@dataclass(frozen=True)
class SwapOrder:
    """MockSwapTarget 호출 데이터"""
    src: str
    dst: str
    amount_in: int  # target이 가져갈 수량
    amount_out: int  # target이 돌려줄 수량


class MockSwapTarget(Contract):
    """주문대로 입력을 가져가고 출력을 지급하는 스왑 대상"""

    def __init__(self, env: Environment):
        self.env = env
        self.callback: Optional[Callable[[], Any]] = None
        env.register(self)

    def on_call(self, sender: str, data: Any, value: int) -> Any:
        if self.callback is not None:
            self.callback()
        ledger = self.env.ledger
        if not ledger.is_native(data.src):
            ledger.transfer_from(data.src, self.address, sender, self.address, data.amount_in)
        ledger.transfer(data.dst, self.address, sender, data.amount_out)
        return 10 ** 40  # 무시되어야 하는 반환값


@pytest.fixture
def env():
    return Environment(timestamp=START)


@pytest.fixture
def accounts(env):
    return SimpleNamespace(
        owner=env.new_address(),
        manager=env.new_address(),
        treasury=env.new_address(),
        alice=env.new_address(),
        bob=env.new_address(),
    )


@pytest.fixture
def tokens(env):
    token0 = env.create_token("TKA", 18)
    token1 = env.create_token("TKB", 18)
    return token0, token1


@pytest.fixture
def call_paths():
    return VenueCallPaths(swap_call_path=1, lp_call_path=2, mint_code=1, burn_code=2, harvest_code=5)


@pytest.fixture
def logic():
    return VaultLogic(version=1, max_positions=5, jit_protection_seconds=60)


def seed_pool(env, dex, asset0, asset1, sqrt_price=Q64):
    dex.init_pool(asset0, asset1, POOL_IDX, sqrt_price, tick_size=TICK_SIZE, fee_rate=0)
    for asset in (asset0, asset1):
        env.ledger.mint(asset, dex.address, RESERVE)


@pytest.fixture
def dex(env, tokens, call_paths):
    dex = SimulatedAmbientDex(env, call_paths)
    seed_pool(env, dex, *tokens)
    return dex


@pytest.fixture
def factory(env, accounts, logic, dex, call_paths):
    return VaultFactory(env, accounts.owner, logic, dex, call_paths)


@pytest.fixture
def make_vault(factory, accounts, tokens):
    def _make(fee_config=None, decimal_offset=0, asset0=None, asset1=None, fee_cap=500_000):
        params = VaultParams(
            name="Test Vault",
            symbol="TVAULT",
            decimal_offset=decimal_offset,
            fee_cap=fee_cap,
            asset0=asset0 or tokens[0],
            asset1=asset1 or tokens[1],
            pool_idx=POOL_IDX,
            manager=accounts.manager,
            owner=accounts.owner,
            fee_config=fee_config or FeeConfig(treasury=accounts.treasury),
        )
        return factory.create_vault(accounts.owner, params)

    return _make


@pytest.fixture
def vault(make_vault):
    return make_vault()


def fund(env, vault, holder, amount0=0, amount1=0):
    """holder에게 자산을 발행하고 볼트에 승인"""
    for asset, amount in ((vault.asset0, amount0), (vault.asset1, amount1)):
        env.ledger.mint(asset, holder, amount)
        if asset != NATIVE_ASSET:
            env.ledger.approve(asset, holder, vault.address, 2 ** 255)


def balances(env, vault, holder):
    return env.ledger.balance_of(vault.asset0, holder), env.ledger.balance_of(vault.asset1, holder)
