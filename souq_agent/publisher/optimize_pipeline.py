"""
optimize_pipeline.py - 문구 현지화 + 판매가 계산 (v1.0)

products_raw.json → products_optimized.json

상품마다:
1. ContentOptimizer로 아랍어 제목/설명/SEO 태그 생성
2. PriceCalculator로 판매가 계산
3. 실패한 상품은 로그 남기고 건너뜀

사용법:
    pipeline = OptimizePipeline(settings)
    result = pipeline.run("products_raw.json", "products_optimized.json")
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..core.config import AppSettings
from ..core.error_handler import ErrorHandler, RecoveryAction
from ..domain.models import OptimizedProduct, ProductRecord
from ..domain.pricing import PriceCalculator
from ..importer.repository import load_json_array, save_json_array
from .content_optimizer import ContentOptimizer, MockContentOptimizer

logger = logging.getLogger(__name__)

# 정규화 레코드에 없는 원본 필드는 출력에 그대로 남긴다
_RECORD_FIELDS = set(ProductRecord().to_dict().keys())


@dataclass
class OptimizeResult:
    """현지화 결과 통계"""
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    output_path: Optional[str] = None
    failed_ids: List[str] = field(default_factory=list)
    error_summary: Dict[str, Any] = field(default_factory=dict)

    @property
    def success_rate(self) -> float:
        return (self.succeeded / self.total * 100) if self.total else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "success_rate": round(self.success_rate, 1),
            "output_path": self.output_path,
            "failed_ids": list(self.failed_ids),
            "error_summary": self.error_summary,
        }


def _record_label(raw: Any, index: int) -> str:
    """로그용 식별자 (external_id → title_raw → 순번)"""
    if isinstance(raw, Mapping):
        label = raw.get("external_id") or raw.get("title_raw")
        if label:
            return str(label)
    return f"#{index}"


class OptimizePipeline:
    """products_raw.json 일괄 처리기"""

    def __init__(
        self,
        settings: AppSettings = None,
        optimizer: ContentOptimizer = None,
        calculator: PriceCalculator = None,
        error_handler: ErrorHandler = None,
        use_mock: bool = False,
    ):
        self.settings = settings or AppSettings()
        if optimizer is None:
            optimizer = MockContentOptimizer(self.settings.llm) if use_mock else ContentOptimizer(self.settings.llm)
        self.optimizer = optimizer
        self.calculator = calculator or PriceCalculator(self.settings.pricing_config())
        self.error_handler = error_handler or ErrorHandler(logger)

    def process(self, raw: Mapping[str, Any]) -> OptimizedProduct:
        """상품 1개 처리

        Raises:
            SouqAgentError: 정규화/문구 생성/가격 계산 실패
        """
        record = ProductRecord.from_dict(raw)
        content = self.optimizer.optimize(record)
        final_price = self.calculator.calculate(record)
        extra = {k: v for k, v in raw.items() if k not in _RECORD_FIELDS}
        return OptimizedProduct(record=record, content=content, final_price=final_price, extra=extra)

    def run(
        self,
        input_path: Optional[str] = None,
        output_path: Optional[str] = None,
        on_progress: Optional[Callable[[int, int], None]] = None,
    ) -> OptimizeResult:
        """일괄 처리 실행

        Args:
            input_path: 입력 JSON (기본: settings.input_path)
            output_path: 출력 JSON (기본: settings.output_path)
            on_progress: (처리 수, 전체 수) 콜백

        Returns:
            OptimizeResult

        Raises:
            DataImportError: 입력 파일이 없거나 배열이 아님
            ConfigurationError: GEMINI_API_KEY 없음
        """
        input_path = input_path or self.settings.input_path
        output_path = output_path or self.settings.output_path

        raw_products = load_json_array(input_path)
        self.optimizer.initialize()

        result = OptimizeResult(total=len(raw_products))
        logger.info(f"{result.total}개 상품 처리 시작: {input_path}")

        optimized: List[Dict[str, Any]] = []
        for index, raw in enumerate(raw_products):
            label = _record_label(raw, index)
            try:
                optimized.append(self.process(raw).to_dict())
                result.succeeded += 1
            except Exception as e:
                if self.error_handler.handle(e, {"product": label}) is RecoveryAction.ABORT:
                    raise
                result.failed += 1
                result.failed_ids.append(label)
                logger.warning(f"상품 처리 실패, 건너뜀: {label}")

            if on_progress:
                on_progress(index + 1, result.total)

        saved = save_json_array(output_path, optimized)
        result.output_path = str(Path(saved))
        result.error_summary = self.error_handler.get_error_summary()
        logger.info(f"{output_path} 생성 완료: {result.succeeded}/{result.total}개")
        return result
