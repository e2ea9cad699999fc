"""
Fee Engine

볼트 수수료 계산:
- 관리 수수료: 경과 시간에 비례한 share 희석 (treasury에 mint)
- 입금 수수료: 기초 자산, 입금액 위에 부과
- 출금 수수료: share, treasury로 전송 (소각하지 않음)

모든 수수료는 볼트에 유리하게 올림합니다.

관리 수수료 공식:
    mint 후 treasury 지분이 rate * Δt / (FEE_MULTIPLIER * YEAR) 가 되도록

    shares = ceil( S * rate * Δt / (FEE_MULTIPLIER * YEAR - rate * Δt) )
"""

import logging

from ..constants import FEE_MULTIPLIER, SECONDS_PER_YEAR
from ..errors import InvalidFeeCap, InvalidFeePercentage, InvalidDenominator
from ..math.full_math import mul_div_rounding_up
from .types import FeeConfig

logger = logging.getLogger(__name__)


class FeeEngine:
    """수수료 계산과 설정 검증 (상태 없음)"""

    @staticmethod
    def validate_fee_cap(fee_cap: int) -> int:
        if not 0 <= fee_cap < FEE_MULTIPLIER:
            raise InvalidFeeCap(f"fee cap은 0 이상 {FEE_MULTIPLIER} 미만이어야 합니다: {fee_cap}")
        return fee_cap

    @staticmethod
    def validate(config: FeeConfig, fee_cap: int) -> FeeConfig:
        """수수료 상한 검증

        - entry_fee, exit_fee <= fee_cap
        - performance_fee, management_fee <= FEE_MULTIPLIER
        - 음수 불가

        Raises:
            InvalidFeePercentage: 상한 위반 (값을 조정하지 않음)
        """
        limits = {
            "entry_fee": fee_cap,
            "exit_fee": fee_cap,
            "performance_fee": FEE_MULTIPLIER,
            "management_fee": FEE_MULTIPLIER,
        }
        for field, limit in limits.items():
            rate = getattr(config, field)
            if rate < 0 or rate > limit:
                raise InvalidFeePercentage(f"{field}={rate} (허용 범위 0..{limit})")
        return config

    @staticmethod
    def management_fee_shares(total_supply: int, management_fee: int, elapsed: int) -> int:
        """경과 시간 동안의 관리 수수료 share 수량

        Args:
            total_supply: 현재 총 share
            management_fee: 연율 (ppm)
            elapsed: 마지막 정산 이후 경과 시간 (초)

        Raises:
            InvalidDenominator: rate * Δt >= FEE_MULTIPLIER * YEAR
        """
        if total_supply == 0 or management_fee == 0 or elapsed <= 0:
            return 0
        accrued = management_fee * elapsed
        denominator = FEE_MULTIPLIER * SECONDS_PER_YEAR - accrued
        if denominator <= 0:
            raise InvalidDenominator(f"관리 수수료 분모가 양수가 아닙니다: {denominator}")
        shares = mul_div_rounding_up(total_supply, accrued, denominator)
        logger.debug("management fee: supply=%d rate=%d elapsed=%d -> %d shares",
                     total_supply, management_fee, elapsed, shares)
        return shares

    @staticmethod
    def entry_fee_amount(amount: int, entry_fee: int) -> int:
        return mul_div_rounding_up(amount, entry_fee, FEE_MULTIPLIER)

    @staticmethod
    def exit_fee_shares(shares: int, exit_fee: int) -> int:
        return mul_div_rounding_up(shares, exit_fee, FEE_MULTIPLIER)
