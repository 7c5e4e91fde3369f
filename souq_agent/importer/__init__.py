"""상품 수집 모듈 (공급사 → products_raw.json)"""
from .product_filter import FilterConfig, ProductFilter
from .repository import load_json_array, save_json_array
from .import_pipeline import ImportResult, ProductImporter

__all__ = [
    "FilterConfig",
    "ProductFilter",
    "load_json_array",
    "save_json_array",
    "ImportResult",
    "ProductImporter",
]
