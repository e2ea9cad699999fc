"""
Chain layer for TeaVault

볼트가 실행되는 환경:
- ledger: 자산 잔고/허용량
- environment: 시계, 이벤트, 컨트랙트 레지스트리, 트랜잭션
"""

from .ledger import TokenLedger
from .environment import Contract, Environment, transactional
