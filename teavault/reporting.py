"""
Reporting - pandas DataFrame 변환

볼트 포지션과 이벤트 로그를 분석용 DataFrame으로 변환합니다.
정수 수량은 int64 범위를 넘을 수 있으므로 변환하지 않고 그대로 둡니다.
"""

import dataclasses
from typing import TYPE_CHECKING, Iterable

import pandas as pd

from .events import LogEntry
from .math.price_math import sqrt_price_x64_to_price
from .math.tick_math import tick_to_price

if TYPE_CHECKING:
    from .vault.vault import TeaVaultAmbient

POSITION_COLUMNS = [
    "tick_lower", "tick_upper", "liquidity", "timestamp",
    "amount0", "amount1", "fee0", "fee1",
    "price_lower", "price_upper", "price",
]


def positions_frame(vault: "TeaVaultAmbient") -> pd.DataFrame:
    """포지션별 유동성, 현재 가격 기준 수량, 미수령 수수료

    price_lower / price_upper / price는 토큰 decimals를 반영한
    token1/token0 가격(float)입니다.
    """
    pool_info = vault.get_pool_info()
    decimals = (pool_info.decimals0, pool_info.decimals1)
    price = sqrt_price_x64_to_price(pool_info.sqrt_price_x64, *decimals)

    rows = []
    for index, position in enumerate(vault.get_all_positions()):
        info = vault.position_info(index)
        rows.append({
            "tick_lower": position.tick_lower,
            "tick_upper": position.tick_upper,
            "liquidity": position.liquidity,
            "timestamp": position.timestamp,
            "amount0": info.amount0,
            "amount1": info.amount1,
            "fee0": info.fee0,
            "fee1": info.fee1,
            "price_lower": tick_to_price(position.tick_lower, *decimals),
            "price_upper": tick_to_price(position.tick_upper, *decimals),
            "price": price,
        })

    df = pd.DataFrame(rows, columns=POSITION_COLUMNS)
    df['timestamp'] = pd.to_datetime(df['timestamp'], unit='s')
    return df


def events_frame(events: Iterable[LogEntry]) -> pd.DataFrame:
    """이벤트 로그 → DataFrame

    공통 컬럼(emitter, timestamp, event)에 이벤트 필드를 펼쳐서 붙입니다.
    이벤트 종류에 없는 필드는 NaN입니다.
    """
    rows = []
    for entry in events:
        row = {
            "emitter": entry.emitter,
            "timestamp": entry.timestamp,
            "event": type(entry.event).__name__,
        }
        if dataclasses.is_dataclass(entry.event):
            for field in dataclasses.fields(entry.event):
                row[field.name] = getattr(entry.event, field.name)
        rows.append(row)

    df = pd.DataFrame(rows)
    if df.empty:
        return pd.DataFrame(columns=["emitter", "timestamp", "event"])
    df['timestamp'] = pd.to_datetime(df['timestamp'], unit='s')
    return df
