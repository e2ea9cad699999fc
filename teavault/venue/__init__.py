"""
Venue layer for TeaVault

외부 AMM 경계:
- base: AmbientVenue 인터페이스, call path, 명령 레코드
- simulated: in-process 참조 venue
"""

from .base import (
    AmbientVenue,
    PoolParams,
    RangeCommand,
    SwapCommand,
    UserCommand,
    VenueCallPaths,
)
from .simulated import SimulatedAmbientDex
