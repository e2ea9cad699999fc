"""
Position Book

볼트가 보유한 레인지 포지션 목록. 범위당 항목은 최대 하나이고 개수는
max_positions로 제한됩니다.

제거 시 상대 순서를 유지하며 압축합니다 (제거된 항목 뒤의 인덱스만 1씩
감소). 출금 시 포지션별 유동성 인출 순서가 인덱스 순서이므로, 순서는
외부에서 관찰 가능한 속성입니다.
"""

from typing import Dict, Iterator, List, Optional, Tuple

from ..errors import (
    InsufficientLiquidity,
    LiquidityLocked,
    PositionDoesNotExist,
    PositionLengthExceedsLimit,
)
from .types import Position

Range = Tuple[int, int]


class PositionBook:
    """순서가 있는 포지션 목록 + (tick_lower, tick_upper) → 인덱스 색인"""

    def __init__(self, max_positions: int):
        self.max_positions = max_positions
        self._positions: List[Position] = []
        self._index: Dict[Range, int] = {}

    def __len__(self) -> int:
        return len(self._positions)

    def __iter__(self) -> Iterator[Position]:
        return iter(self._positions)

    def __getitem__(self, index: int) -> Position:
        if not 0 <= index < len(self._positions):
            raise PositionDoesNotExist(f"포지션 인덱스 범위 초과: {index}")
        return self._positions[index]

    def find(self, tick_lower: int, tick_upper: int) -> Optional[int]:
        return self._index.get((tick_lower, tick_upper))

    def get(self, tick_lower: int, tick_upper: int) -> Position:
        index = self.find(tick_lower, tick_upper)
        if index is None:
            raise PositionDoesNotExist(f"포지션이 없습니다: [{tick_lower}, {tick_upper})")
        return self._positions[index]

    def ensure_capacity(self, tick_lower: int, tick_upper: int) -> None:
        """새 항목이 필요한 경우 한도 확인 (venue 호출 전에 사용)"""
        if self.find(tick_lower, tick_upper) is None and len(self._positions) >= self.max_positions:
            raise PositionLengthExceedsLimit(
                f"포지션 수 한도 초과: {len(self._positions)} >= {self.max_positions}"
            )

    def add(self, tick_lower: int, tick_upper: int, liquidity: int, now: int) -> Position:
        """유동성 추가 (upsert)

        기존 항목이면 유동성을 합산합니다. timestamp는 항목이 비어 있던
        경우(새 항목)에만 갱신됩니다.
        """
        self.ensure_capacity(tick_lower, tick_upper)
        index = self.find(tick_lower, tick_upper)
        if index is None:
            position = Position(tick_lower, tick_upper, liquidity, now)
            self._index[(tick_lower, tick_upper)] = len(self._positions)
            self._positions.append(position)
            return position

        position = self._positions[index]
        if position.liquidity == 0:
            position.timestamp = now
        position.liquidity += liquidity
        return position

    def check_unlocked(self, position: Position, now: int, window: int) -> None:
        if now - position.timestamp < window:
            raise LiquidityLocked(
                f"JIT 보호 중: [{position.tick_lower}, {position.tick_upper}) "
                f"{now - position.timestamp}s < {window}s"
            )

    def reduce(self, tick_lower: int, tick_upper: int, liquidity: int) -> int:
        """유동성 감소, 비면 항목 제거

        Returns:
            남은 유동성
        """
        index = self.find(tick_lower, tick_upper)
        if index is None:
            raise PositionDoesNotExist(f"포지션이 없습니다: [{tick_lower}, {tick_upper})")
        position = self._positions[index]
        if liquidity > position.liquidity:
            raise InsufficientLiquidity(f"유동성 부족: {liquidity} > {position.liquidity}")

        position.liquidity -= liquidity
        if position.liquidity == 0:
            self._remove_at(index)
        return position.liquidity

    def _remove_at(self, index: int) -> None:
        removed = self._positions.pop(index)
        del self._index[(removed.tick_lower, removed.tick_upper)]
        for i in range(index, len(self._positions)):
            p = self._positions[i]
            self._index[(p.tick_lower, p.tick_upper)] = i

    def ranges(self) -> List[Range]:
        return [(p.tick_lower, p.tick_upper) for p in self._positions]
