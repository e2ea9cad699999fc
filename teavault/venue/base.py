"""
AMM Venue 인터페이스

볼트가 사용하는 외부 AMM(Ambient CrocSwapDex 형태)의 경계 정의.
venue 내부 상태(틱 비트맵, 수수료 성장 등)는 볼트가 알 필요가 없고,
볼트는 다음만 사용합니다:

- user_cmd(call_path, command): 스왑 / 유동성 mint / burn / harvest
- query_*: 가격, 틱, 풀 파라미터, 포지션 유동성, 미수령 보상 조회

정산 부호 규칙 (Ambient flow):
    flow > 0: 호출자가 venue에 지불
    flow < 0: venue가 호출자에게 지불
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Tuple

from ..chain.environment import Contract
from ..errors import VenueError
from ..math.tick_math import get_tick_at_sqrt_ratio


@dataclass(frozen=True)
class VenueCallPaths:
    """venue 명령 라우팅 코드

    - swap_call_path: 스왑 명령 경로
    - lp_call_path: 유동성 명령 경로
    - mint_code / burn_code / harvest_code: lp 경로 내 명령 코드
    """
    swap_call_path: int
    lp_call_path: int
    mint_code: int
    burn_code: int
    harvest_code: int


@dataclass(frozen=True)
class PoolParams:
    """풀 파라미터"""
    tick_size: int  # 포지션 틱은 tick_size의 배수
    fee_rate: int  # 스왑 수수료 (parts-per-million)


@dataclass(frozen=True)
class SwapCommand:
    """스왑 명령

    is_buy=True: base(token0)를 지불하고 quote(token1)를 받음
    is_buy=False: quote(token1)를 지불하고 base(token0)를 받음
    """
    base: str
    quote: str
    pool_idx: int
    is_buy: bool
    qty: int  # 지불할 입력 수량
    min_out: int = 0


@dataclass(frozen=True)
class RangeCommand:
    """집중 유동성 명령 (mint / burn / harvest, 유동성 단위 고정)"""
    code: int
    base: str
    quote: str
    pool_idx: int
    bid_tick: int
    ask_tick: int
    liquidity: int = 0


@dataclass(frozen=True)
class UserCommand:
    """invoke()로 venue에 전달되는 호출 데이터"""
    call_path: int
    command: Any


class AmbientVenue(Contract, ABC):
    """AMM venue 추상 인터페이스

    볼트는 Environment.invoke(vault, venue.address, UserCommand(...), value)로
    명령을 보냅니다. value는 on_call 진입 전에 이미 venue로 전송되어 있습니다.
    """

    def on_call(self, sender: str, data: Any, value: int) -> Tuple[int, int]:
        if not isinstance(data, UserCommand):
            raise VenueError(f"알 수 없는 호출 데이터: {data!r}")
        return self.user_cmd(sender, data.call_path, data.command, value)

    @abstractmethod
    def user_cmd(self, caller: str, call_path: int, command: Any, value: int = 0) -> Tuple[int, int]:
        """명령 실행 후 (base_flow, quote_flow) 반환"""

    @abstractmethod
    def query_price(self, base: str, quote: str, pool_idx: int) -> int:
        """현재 sqrtPriceX64"""

    def query_curve_tick(self, base: str, quote: str, pool_idx: int) -> int:
        """현재 틱"""
        return get_tick_at_sqrt_ratio(self.query_price(base, quote, pool_idx))

    @abstractmethod
    def query_pool_params(self, base: str, quote: str, pool_idx: int) -> PoolParams:
        """풀 파라미터"""

    @abstractmethod
    def query_range_position(
        self, owner: str, base: str, quote: str, pool_idx: int, bid_tick: int, ask_tick: int
    ) -> int:
        """owner 포지션의 유동성"""

    @abstractmethod
    def query_conc_rewards(
        self, owner: str, base: str, quote: str, pool_idx: int, bid_tick: int, ask_tick: int
    ) -> Tuple[int, int]:
        """owner 포지션의 미수령 보상 (base, quote)"""
