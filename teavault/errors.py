"""
TeaVault 예외 정의

모든 볼트 예외는 TeaVaultError를 상속합니다. 공개 연산은 예외가 발생하면
트랜잭션 전체가 롤백되므로, 예외 종류는 실패 원인만 구분합니다.

- 검증 오류: 잘못된 범위, 수수료 상한 초과, 슬리피지, 부족한 입금액
- 권한 오류: owner/manager 전용 연산을 다른 주소가 호출
- 산술 오류: 오버플로우, 양수가 아닌 분모 (ArithmeticError 하위)
- 외부 호출 오류: 스왑 대상 또는 venue 실패
"""


class TeaVaultError(Exception):
    """TeaVault 예외 기본 클래스"""


# ==============================================================================
# 검증 오류
# ==============================================================================

class InvalidFeePercentage(TeaVaultError):
    """수수료율이 상한을 벗어남"""


class InvalidFeeCap(TeaVaultError):
    """fee cap이 FEE_MULTIPLIER 이상이거나 음수"""


class InvalidPriceSlippage(TeaVaultError):
    """요구/수령 수량이 호출자가 지정한 한도를 벗어남"""


class InsufficientValue(TeaVaultError):
    """전달된 네이티브 통화가 필요한 수량보다 적음"""


class InvalidShareAmount(TeaVaultError):
    """share 수량이 0 이하이거나 0 자산에 대응함"""


class InsufficientShares(TeaVaultError):
    """share 잔고 또는 허용량 부족"""


class InvalidTickRange(TeaVaultError):
    """틱 범위가 정렬되지 않았거나 tick size 배수가 아님"""


class InvalidLiquidity(TeaVaultError):
    """유동성 수량이 0 이하"""


class PositionLengthExceedsLimit(TeaVaultError):
    """최대 포지션 수 초과"""


class PositionDoesNotExist(TeaVaultError):
    """해당 틱 범위/인덱스의 포지션이 없음"""


class InsufficientLiquidity(TeaVaultError):
    """포지션 유동성이 요청량보다 적음"""


class LiquidityLocked(TeaVaultError):
    """JIT 보호 시간이 지나지 않은 유동성 제거 시도"""


class TransactionExpired(TeaVaultError):
    """deadline 경과"""


class ExcessiveSwapInput(TeaVaultError):
    """스왑이 amount_in보다 많은 입력 자산을 소비함"""


class InvalidTokenOrder(TeaVaultError):
    """asset0 < asset1 순서 위반 또는 동일 자산"""


class InvalidAddress(TeaVaultError):
    """빈 주소"""


class InvalidLogicMigration(TeaVaultError):
    """로직 버전 업그레이드를 적용할 수 없음"""


# ==============================================================================
# 권한 오류
# ==============================================================================

class CallerIsNotOwner(TeaVaultError):
    """owner 전용 연산"""


class CallerIsNotManager(TeaVaultError):
    """manager 전용 연산"""


# ==============================================================================
# 산술 오류
# ==============================================================================

class ArithmeticOverflow(TeaVaultError, ArithmeticError):
    """uint256 범위를 벗어난 결과"""


class InvalidDenominator(TeaVaultError, ArithmeticError):
    """0 또는 음수 분모"""


# ==============================================================================
# 외부 호출 / 실행 환경 오류
# ==============================================================================

class ExternalCallFailed(TeaVaultError):
    """외부 컨트랙트 호출 실패"""

    def __init__(self, target: str, reason: str = ""):
        self.target = target
        self.reason = reason
        super().__init__(f"외부 호출 실패 ({target}): {reason}")


class VenueError(TeaVaultError):
    """AMM venue가 명령을 거부함"""


class ReentrancyGuardReentrantCall(TeaVaultError):
    """진행 중인 연산 내부에서 재진입"""


class InsufficientBalance(TeaVaultError):
    """자산 잔고 부족"""


class InsufficientAllowance(TeaVaultError):
    """자산 허용량 부족"""
