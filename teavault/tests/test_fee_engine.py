"""
Fee Engine 테스트

관리/입금/출금 수수료 계산과 수수료 설정 검증을 테스트합니다.
"""

import pytest
from pydantic import ValidationError

from ..constants import FEE_MULTIPLIER, SECONDS_PER_YEAR
from ..errors import InvalidDenominator, InvalidFeeCap, InvalidFeePercentage
from ..vault.fee_engine import FeeEngine
from ..vault.types import FeeConfig

TREASURY = "0x" + "aa" * 20


class TestManagementFeeShares:
    """management_fee_shares 테스트"""

    def test_one_year_one_percent(self):
        """1년, 1%: mint 후 treasury 지분이 정확히 1%"""
        supply = 99 * 10 ** 16
        shares = FeeEngine.management_fee_shares(supply, 10_000, SECONDS_PER_YEAR)
        assert shares == 10 ** 16
        assert shares * 100 == supply + shares

    def test_rounds_up(self):
        """ceil(S * rate * Δt / (M * Y - rate * Δt))"""
        shares = FeeEngine.management_fee_shares(1000, 10_000, 1)
        assert shares == 1

    def test_zero_cases(self):
        assert FeeEngine.management_fee_shares(0, 10_000, SECONDS_PER_YEAR) == 0
        assert FeeEngine.management_fee_shares(10 ** 18, 0, SECONDS_PER_YEAR) == 0
        assert FeeEngine.management_fee_shares(10 ** 18, 10_000, 0) == 0

    def test_monotonic_in_elapsed(self):
        """고정 S, rate에서 Δt가 늘면 수수료 share는 줄지 않음"""
        supply = 10 ** 18
        elapsed = {1, 2, 3, 7, 59, 60, 61, 3600, 86_400} | {10 ** k for k in range(8)}
        elapsed = sorted(elapsed | set(range(0, 10 ** 7, 99_991)))
        for rate in (1, 10_000, 500_000):
            minted = [FeeEngine.management_fee_shares(supply, rate, dt) for dt in elapsed]
            assert minted == sorted(minted)

    def test_monotonic_in_rate(self):
        """고정 S, Δt에서 rate가 늘면 수수료 share는 줄지 않음"""
        supply = 12_345_678_901_234_567
        rates = [0, 1, 2, 10, 99, 100, 1000, 9_999, 10_000, 123_456, 500_000, FEE_MULTIPLIER]
        for dt in (1, 3600, 86_400, 30 * 86_400, SECONDS_PER_YEAR - 1):
            minted = [FeeEngine.management_fee_shares(supply, rate, dt) for rate in rates]
            assert minted == sorted(minted)

    def test_non_positive_denominator(self):
        """rate * Δt >= M * Y"""
        with pytest.raises(InvalidDenominator):
            FeeEngine.management_fee_shares(10 ** 18, FEE_MULTIPLIER, SECONDS_PER_YEAR)
        with pytest.raises(ArithmeticError):
            FeeEngine.management_fee_shares(10 ** 18, FEE_MULTIPLIER // 2, 3 * SECONDS_PER_YEAR)


class TestEntryExitFee:
    """entry_fee_amount / exit_fee_shares 테스트"""

    def test_entry_fee(self):
        assert FeeEngine.entry_fee_amount(10 ** 18, 1000) == 10 ** 15

    def test_entry_fee_rounds_up(self):
        assert FeeEngine.entry_fee_amount(999, 1000) == 1

    def test_exit_fee(self):
        assert FeeEngine.exit_fee_shares(10 ** 6, 2000) == 2000
        assert FeeEngine.exit_fee_shares(1, 2000) == 1

    def test_zero_rate(self):
        assert FeeEngine.entry_fee_amount(10 ** 18, 0) == 0
        assert FeeEngine.exit_fee_shares(10 ** 18, 0) == 0


class TestValidate:
    """FeeEngine.validate 테스트"""

    def test_valid(self):
        config = FeeConfig(treasury=TREASURY, entry_fee=1000, exit_fee=2000,
                           performance_fee=100_000, management_fee=10_000)
        assert FeeEngine.validate(config, 500_000) is config

    def test_entry_fee_at_cap(self):
        config = FeeConfig(treasury=TREASURY, entry_fee=500_000, exit_fee=500_000)
        FeeEngine.validate(config, 500_000)

    def test_entry_fee_above_cap(self):
        config = FeeConfig(treasury=TREASURY, entry_fee=500_001)
        with pytest.raises(InvalidFeePercentage):
            FeeEngine.validate(config, 500_000)

    def test_exit_fee_above_cap(self):
        config = FeeConfig(treasury=TREASURY, exit_fee=10_001)
        with pytest.raises(InvalidFeePercentage):
            FeeEngine.validate(config, 10_000)

    def test_management_fee_limit(self):
        FeeEngine.validate(FeeConfig(treasury=TREASURY, management_fee=FEE_MULTIPLIER), 0)
        with pytest.raises(InvalidFeePercentage):
            FeeEngine.validate(FeeConfig(treasury=TREASURY, management_fee=FEE_MULTIPLIER + 1), 0)

    def test_performance_fee_limit(self):
        with pytest.raises(InvalidFeePercentage):
            FeeEngine.validate(FeeConfig(treasury=TREASURY, performance_fee=FEE_MULTIPLIER + 1), 0)

    def test_negative(self):
        with pytest.raises(InvalidFeePercentage):
            FeeEngine.validate(FeeConfig(treasury=TREASURY, entry_fee=-1), 500_000)

    def test_empty_treasury(self):
        with pytest.raises(ValidationError):
            FeeConfig(treasury="")

    def test_fee_cap(self):
        assert FeeEngine.validate_fee_cap(999_999) == 999_999
        with pytest.raises(InvalidFeeCap):
            FeeEngine.validate_fee_cap(FEE_MULTIPLIER)
        with pytest.raises(InvalidFeeCap):
            FeeEngine.validate_fee_cap(-1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
