"""
import_pipeline.py - 공급사 상품 수집 (v1.0)

흐름:
1. 공급사별 검색 (AutoDrop → 마카젠)
2. 원본 응답 정규화 (ProductRecord)
3. 품질 필터 (평점/주문수)
4. products_raw.json 저장

공급사 하나가 실패해도 나머지로 계속 진행한다.

사용법:
    importer = ProductImporter(settings)
    result = importer.run("products_raw.json")
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..adapters.supplier_client import SupplierClient, create_supplier_clients
from ..core.config import AppSettings
from ..core.error_handler import ErrorHandler, RecoveryAction
from ..domain.models import ProductRecord
from .product_filter import FilterConfig, ProductFilter
from .repository import save_json_array

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """수집 결과 통계"""
    fetched: Dict[str, int] = field(default_factory=dict)   # 공급사별 수신 수
    normalized: int = 0
    skipped: int = 0
    kept: int = 0
    output_path: Optional[str] = None
    errors: List[str] = field(default_factory=list)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def total_fetched(self) -> int:
        return sum(self.fetched.values())

    @property
    def duration_seconds(self) -> float:
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fetched": dict(self.fetched),
            "total_fetched": self.total_fetched,
            "normalized": self.normalized,
            "skipped": self.skipped,
            "kept": self.kept,
            "output_path": self.output_path,
            "errors": list(self.errors),
            "duration_seconds": round(self.duration_seconds, 2),
        }


class ProductImporter:
    """공급사 상품 수집기"""

    def __init__(
        self,
        settings: AppSettings = None,
        clients: List[SupplierClient] = None,
        product_filter: ProductFilter = None,
        error_handler: ErrorHandler = None,
        use_mock: bool = False,
    ):
        self.settings = settings or AppSettings()
        self.clients = clients if clients is not None else create_supplier_clients(self.settings, use_mock)
        self.product_filter = product_filter or ProductFilter(
            FilterConfig.from_settings(self.settings.filter)
        )
        self.error_handler = error_handler or ErrorHandler(logger)

    def run(self, output_path: Optional[str] = None) -> ImportResult:
        """수집 실행

        Args:
            output_path: 저장 경로 (기본: settings.input_path)

        Returns:
            ImportResult
        """
        result = ImportResult(start_time=datetime.now())
        output_path = output_path or self.settings.input_path

        records: List[ProductRecord] = []
        for client in self.clients:
            raw_products = self._fetch(client, result)
            records.extend(self._normalize(raw_products, client.NAME, result))

        logger.info(f"정규화 완료: {len(records)}개 (건너뜀 {result.skipped}개)")
        result.normalized = len(records)

        kept = self.product_filter.apply(records)
        result.kept = len(kept)
        logger.info(self.product_filter.get_filter_summary(len(records), len(kept)))

        saved = save_json_array(output_path, [r.to_dict() for r in kept])
        result.output_path = str(Path(saved))
        logger.info(f"{result.kept}개 상품 저장: {result.output_path}")

        result.end_time = datetime.now()
        return result

    def _fetch(self, client: SupplierClient, result: ImportResult) -> List[Any]:
        """공급사 1곳 검색 (실패 시 빈 목록)"""
        try:
            raw_products = client.search(
                categories=self.settings.search_categories,
                min_rating=self.settings.filter.min_rating,
            )
        except Exception as e:
            if self.error_handler.handle(e, {"supplier": client.NAME}) is RecoveryAction.ABORT:
                raise
            result.errors.append(f"{client.NAME}: {e}")
            result.fetched[client.NAME] = 0
            return []

        result.fetched[client.NAME] = len(raw_products)
        return raw_products

    def _normalize(self, raw_products: List[Any], source: str, result: ImportResult) -> List[ProductRecord]:
        records = []
        for index, raw in enumerate(raw_products):
            try:
                records.append(ProductRecord.from_raw(raw, source=source))
            except Exception as e:
                if self.error_handler.handle(e, {"supplier": source, "index": index}) is RecoveryAction.ABORT:
                    raise
                result.skipped += 1
        return records
