"""Souq Agent - 사우디 이커머스 상품 소싱 도구"""

__version__ = "1.0.0"
