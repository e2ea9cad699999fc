"""
Vault data types

- FeeConfig: 수수료 설정 (pydantic, 생성 시 형식 검증)
- VaultParams: 팩토리 create_vault 파라미터
- Position: 볼트가 보유한 레인지 포지션
- PoolInfo / PositionInfo: 조회 결과
"""

from dataclasses import dataclass
from typing import NamedTuple

from pydantic import BaseModel, Field, field_validator

from ..constants import DEFAULT_FEE_CAP


class FeeConfig(BaseModel):
    """볼트 수수료 설정 (parts-per-million, 1_000_000 = 100%)

    여기서는 형식(음수, 빈 treasury)만 검증합니다. 상한 검증은 볼트별
    fee_cap에 의존하므로 FeeEngine.validate()에서 수행합니다.
    """
    treasury: str = Field(..., description="수수료 수령 주소")
    entry_fee: int = Field(default=0, description="입금 수수료 (기초 자산, 입금액 위에 부과)")
    exit_fee: int = Field(default=0, description="출금 수수료 (share, treasury로 전송)")
    performance_fee: int = Field(default=0, description="성과 수수료 (저장만 함)")
    management_fee: int = Field(default=0, description="연율 관리 수수료 (share 희석)")

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "treasury": "0x00000000000000000000000000000000000000aa",
                "entry_fee": 1000,
                "exit_fee": 2000,
                "performance_fee": 100000,
                "management_fee": 10000
            }
        }

    @field_validator("treasury")
    @classmethod
    def _treasury_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("treasury 주소가 비어 있습니다")
        return value


class VaultParams(BaseModel):
    """VaultFactory.create_vault 파라미터"""
    name: str = Field(..., description="share 토큰 이름")
    symbol: str = Field(..., description="share 토큰 심볼")
    decimal_offset: int = Field(default=0, description="share decimals = asset0 decimals + offset", ge=0, le=18)
    fee_cap: int = Field(default=DEFAULT_FEE_CAP, description="entry/exit 수수료 상한", ge=0)
    asset0: str = Field(..., description="base 자산 (asset0 < asset1)")
    asset1: str = Field(..., description="quote 자산")
    pool_idx: int = Field(..., description="venue 풀 인덱스", ge=0)
    manager: str = Field(..., description="포지션/스왑 관리자")
    owner: str = Field(..., description="볼트 소유자")
    fee_config: FeeConfig

    class Config:
        frozen = True


@dataclass
class Position:
    """레인지 포지션 [tick_lower, tick_upper)"""
    tick_lower: int
    tick_upper: int
    liquidity: int
    timestamp: int  # 마지막으로 빈 상태에서 유동성이 추가된 시각 (JIT 보호 기준)


class PoolInfo(NamedTuple):
    """get_pool_info() 결과"""
    token0: str
    token1: str
    decimals0: int
    decimals1: int
    pool_idx: int
    sqrt_price_x64: int
    tick: int


class PositionInfo(NamedTuple):
    """position_info() 결과: 현재 가격 기준 수량(내림)과 미수령 수수료"""
    amount0: int
    amount1: int
    fee0: int
    fee1: int
