"""상품 문구 현지화 + 판매가 모듈 (products_raw.json → products_optimized.json)"""
from .content_optimizer import (
    ContentOptimizer,
    MockContentOptimizer,
    OptimizedContentModel,
    build_user_prompt,
    parse_content_response,
)
from .optimize_pipeline import OptimizePipeline, OptimizeResult

__all__ = [
    "ContentOptimizer",
    "MockContentOptimizer",
    "OptimizedContentModel",
    "build_user_prompt",
    "parse_content_response",
    "OptimizePipeline",
    "OptimizeResult",
]
