"""유틸리티 모듈"""
from .helpers import (
    to_number,
    to_int,
    round_half,
    format_currency,
    truncate_text,
)

__all__ = [
    "to_number",
    "to_int",
    "round_half",
    "format_currency",
    "truncate_text",
]
