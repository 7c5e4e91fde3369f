"""도메인 모듈 (v1.0) - 순수 비즈니스 로직"""
from .models import (
    ProductCost,
    ProductRecord,
    OptimizedContent,
    OptimizedProduct,
    SupplierSource,
)
from .pricing import PriceCalculator, compute_price, select_margin

__all__ = [
    # 모델
    "ProductCost",
    "ProductRecord",
    "OptimizedContent",
    "OptimizedProduct",
    "SupplierSource",
    # 로직
    "PriceCalculator",
    "compute_price",
    "select_margin",
]
