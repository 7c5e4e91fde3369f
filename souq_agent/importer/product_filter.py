"""
product_filter.py - 상품 품질 필터 (v1.0)

통과 조건:
1. 평점 >= min_rating
2. 주문수 >= min_orders
3. 허용 카테고리 (비어 있으면 전체 허용)
4. 이미지 필수 옵션
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from ..domain.models import ProductRecord


@dataclass
class FilterConfig:
    """필터링 설정"""
    min_rating: float = 4.6             # 최소 평점
    min_orders: int = 50                # 최소 주문수
    allowed_categories: List[str] = field(default_factory=list)  # 비어 있으면 전체
    require_image: bool = False         # 이미지 없는 상품 제외

    @classmethod
    def from_settings(cls, settings) -> "FilterConfig":
        """FilterSettings → FilterConfig"""
        return cls(
            min_rating=settings.min_rating,
            min_orders=settings.min_orders,
            allowed_categories=list(settings.categories),
            require_image=settings.require_image,
        )


class ProductFilter:
    """상품 필터링"""

    def __init__(self, config: FilterConfig = None):
        self.config = config or FilterConfig()

    def check(self, product: ProductRecord) -> Tuple[bool, List[str]]:
        """단일 상품 검사

        Returns:
            (통과 여부, 거부 사유 리스트)
        """
        reasons = []

        if product.rating < self.config.min_rating:
            reasons.append(f"평점 부족: {product.rating} < {self.config.min_rating}")

        if product.orders < self.config.min_orders:
            reasons.append(f"주문수 부족: {product.orders} < {self.config.min_orders}")

        allowed = self.config.allowed_categories
        if allowed and product.category not in allowed:
            reasons.append(f"허용되지 않은 카테고리: {product.category or '-'}")

        if self.config.require_image and not product.has_image:
            reasons.append("이미지 없음")

        return len(reasons) == 0, reasons

    def apply(self, products: List[ProductRecord]) -> List[ProductRecord]:
        """조건을 통과한 상품만 반환 (순서 유지)"""
        return [p for p in products if self.check(p)[0]]

    def get_filter_summary(self, total: int, kept: int) -> str:
        """필터 결과 요약"""
        removed = total - kept
        rate = (kept / total * 100) if total else 0.0
        return (
            f"필터 결과: {kept}/{total}개 통과 ({rate:.1f}%), {removed}개 제외 "
            f"[평점>={self.config.min_rating}, 주문>={self.config.min_orders}]"
        )
