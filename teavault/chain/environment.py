"""
Execution Environment - 볼트 실행 환경

온체인 실행 환경이 제공하던 기능을 in-process로 제공합니다:
- 자산 원장 (TokenLedger)
- 블록 시계 (timestamp)
- 이벤트 로그
- 주소 → 컨트랙트 레지스트리와 불투명 외부 호출 (invoke)
- all-or-nothing 트랜잭션 (atomic)

공개 연산은 atomic() 안에서 실행되고, 예외가 발생하면 등록된 모든 상태
(원장, 볼트, venue, 이벤트 로그)가 호출 이전으로 복원됩니다.
"""

import functools
import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Type, TypeVar

from ..constants import NATIVE_ASSET
from ..errors import ExternalCallFailed, TeaVaultError
from ..events import LogEntry
from .ledger import TokenLedger

logger = logging.getLogger(__name__)

E = TypeVar("E")


class Contract:
    """Environment에 등록되는 컨트랙트 기본 클래스

    invoke()로 호출되면 on_call(sender, data, value)가 실행됩니다.
    상태를 가진 컨트랙트는 snapshot()/restore()를 구현하면 트랜잭션 롤백에
    포함됩니다.
    """

    address: str = ""

    def on_call(self, sender: str, data: Any, value: int) -> Any:
        raise ExternalCallFailed(self.address, "fallback 함수가 없습니다")


class Environment:
    """단일 실행 스레드의 볼트 실행 환경

    사용법:
        env = Environment(timestamp=1_700_000_000)
        usdc = env.create_token("USDC", 6)
        alice = env.new_address()
        env.ledger.mint(usdc, alice, 10**6)
        env.advance_time(3600)
    """

    def __init__(self, timestamp: Optional[int] = None):
        self.ledger = TokenLedger()
        self.timestamp: int = int(time.time()) if timestamp is None else int(timestamp)
        self.events: List[LogEntry] = []
        self._contracts: Dict[str, Contract] = {}
        self._stateful: List[Any] = [self.ledger]
        self._nonce = 0
        self._depth = 0

    # ==========================================================================
    # 주소 / 컨트랙트
    # ==========================================================================

    def new_address(self) -> str:
        """새 주소 발급 (발급 순서대로 증가, NATIVE_ASSET과 겹치지 않음)"""
        self._nonce += 1
        return "0x" + format(self._nonce, "040x")

    def create_token(self, symbol: str, decimals: int = 18) -> str:
        """ERC20 토큰 생성 후 주소 반환"""
        return self.ledger.register_token(self.new_address(), symbol, decimals)

    def register(self, contract: Contract) -> str:
        """컨트랙트에 주소를 부여하고 레지스트리에 등록"""
        contract.address = self.new_address()
        self._contracts[contract.address] = contract
        if hasattr(contract, "snapshot") and hasattr(contract, "restore"):
            self._stateful.append(contract)
        logger.debug("컨트랙트 등록: %s @ %s", type(contract).__name__, contract.address)
        return contract.address

    def contract_at(self, address: str) -> Contract:
        try:
            return self._contracts[address]
        except KeyError:
            raise ExternalCallFailed(address, "컨트랙트가 없는 주소입니다") from None

    def invoke(self, sender: str, target: str, data: Any, value: int = 0) -> Any:
        """불투명 외부 호출

        value만큼 네이티브 통화를 target으로 보낸 뒤 target.on_call을 실행합니다.
        대상에서 발생한 예외는 ExternalCallFailed로 감싸서 전파하며, 호출 중의
        모든 상태 변경은 롤백됩니다.

        Returns:
            대상이 반환한 raw 결과 (호출자는 신뢰하지 않음)
        """
        contract = self.contract_at(target)
        with self.atomic():
            if value:
                self.ledger.transfer(NATIVE_ASSET, sender, target, value)
            try:
                return contract.on_call(sender, data, value)
            except ExternalCallFailed:
                raise
            except Exception as exc:
                raise ExternalCallFailed(target, f"{type(exc).__name__}: {exc}") from exc

    # ==========================================================================
    # 시계
    # ==========================================================================

    def advance_time(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError(f"시간은 되돌릴 수 없습니다: {seconds}")
        self.timestamp += seconds
        return self.timestamp

    # ==========================================================================
    # 이벤트
    # ==========================================================================

    def emit(self, emitter: str, event: Any) -> None:
        self.events.append(LogEntry(emitter, self.timestamp, event))
        logger.debug("event %s from %s: %s", type(event).__name__, emitter, event)

    def events_of(self, event_type: Type[E], emitter: Optional[str] = None) -> List[E]:
        """이벤트 타입(과 발생 주소)으로 필터링"""
        return [
            entry.event for entry in self.events
            if isinstance(entry.event, event_type)
            and (emitter is None or entry.emitter == emitter)
        ]

    # ==========================================================================
    # 트랜잭션
    # ==========================================================================

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """all-or-nothing 실행 블록

        블록 안에서 예외가 발생하면 원장, 등록된 상태 컨트랙트, 이벤트 로그를
        블록 진입 시점으로 복원하고 예외를 다시 발생시킵니다. 중첩 가능합니다.
        """
        snapshots = [(obj, obj.snapshot()) for obj in self._stateful]
        n_events = len(self.events)
        contracts = dict(self._contracts)
        n_stateful = len(self._stateful)
        self._depth += 1
        try:
            yield
        except BaseException as exc:
            for obj, state in snapshots:
                obj.restore(state)
            del self.events[n_events:]
            self._contracts = contracts
            del self._stateful[n_stateful:]
            if self._depth == 1 and isinstance(exc, TeaVaultError):
                logger.info("transaction reverted: %s: %s", type(exc).__name__, exc)
            raise
        finally:
            self._depth -= 1


def transactional(method):
    """메서드 전체를 self.env.atomic() 안에서 실행"""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.env.atomic():
            return method(self, *args, **kwargs)

    return wrapper
