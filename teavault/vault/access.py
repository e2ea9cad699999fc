"""
Access control

볼트 공개 연산 데코레이터. 호출자 주소는 메서드의 첫 번째 인자
(caller)로 전달됩니다.

    @transactional
    @nonreentrant
    @only_manager
    def add_liquidity(self, caller, ...):
"""

import functools

from ..errors import CallerIsNotManager, CallerIsNotOwner, ReentrancyGuardReentrantCall


def _caller(args, kwargs) -> str:
    return kwargs["caller"] if "caller" in kwargs else args[0]


def only_owner(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        caller = _caller(args, kwargs)
        if caller != self.owner:
            raise CallerIsNotOwner(f"owner 전용 연산입니다: {caller}")
        return method(self, *args, **kwargs)

    return wrapper


def only_manager(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        caller = _caller(args, kwargs)
        if caller != self.manager:
            raise CallerIsNotManager(f"manager 전용 연산입니다: {caller}")
        return method(self, *args, **kwargs)

    return wrapper


def nonreentrant(method):
    """진행 중인 보호 연산이 있으면 ReentrancyGuardReentrantCall"""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        if self._entered:
            raise ReentrancyGuardReentrantCall(f"{method.__name__}: 재진입 호출")
        self._entered = True
        try:
            return method(self, *args, **kwargs)
        finally:
            self._entered = False

    return wrapper
