"""
helpers.py - 헬퍼 유틸리티
"""

import math
from typing import Any


def to_number(value: Any, default: float = 0.0) -> float:
    """느슨한 숫자 변환

    None, 빈 문자열, 숫자가 아닌 값, NaN/Inf는 default로 처리.
    "1,250" 같은 쉼표 표기는 허용.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).replace(",", "").strip())
        except (TypeError, ValueError):
            return default
    if not math.isfinite(number):
        return default
    return number


def to_int(value: Any, default: int = 0) -> int:
    """느슨한 정수 변환"""
    return int(to_number(value, default))


def round_half(value: float) -> float:
    """0.5 단위 반올림 (0에서 먼 쪽으로)

    10.25 -> 10.5, 10.24 -> 10.0
    """
    doubled = abs(value) * 2
    rounded = math.floor(doubled + 0.5) / 2
    return math.copysign(rounded, value) if rounded else 0.0


def format_currency(amount: float, symbol: str = "SAR") -> str:
    """통화 포맷"""
    return f"{amount:,.2f} {symbol}"


def truncate_text(text: str, max_length: int = 100, suffix: str = "") -> str:
    """텍스트 자르기"""
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix
