"""
models.py - 도메인 모델 (v1.0)

순수 파이썬 데이터 클래스. 외부 의존성 없음.
공급사마다 다른 필드명을 ProductRecord 하나로 정규화한다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..core.exceptions import ValidationError
from ..utils.helpers import to_int, to_number


class SupplierSource(Enum):
    """공급사 종류"""
    AUTODROP = "autodrop"
    MAKHAZEN = "makhazen"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ProductCost:
    """가격 계산 입력 (공급가 + 배송비)"""
    supplier_price: float = 0.0
    supplier_shipping: float = 0.0

    @property
    def base_cost(self) -> float:
        return self.supplier_price + self.supplier_shipping

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProductCost":
        """누락/숫자 아님 → 0"""
        return cls(
            supplier_price=to_number(data.get("supplier_price")),
            supplier_shipping=to_number(data.get("supplier_shipping")),
        )


# 원본 필드 별칭 (공급사 API 버전에 따라 다를 수 있음)
FIELD_ALIASES: Dict[str, Sequence[str]] = {
    "external_id": ["external_id", "id", "product_id", "item_id", "sku"],
    "title_raw": ["title_raw", "title", "name", "product_title"],
    "desc_raw": ["desc_raw", "description", "desc", "details"],
    "category": ["category", "category_slug", "category_name"],
    "brand": ["brand", "brand_name"],
    "supplier_price": ["supplier_price", "price", "sale_price", "cost"],
    "supplier_shipping": ["supplier_shipping", "shipping", "shipping_fee", "shipping_cost"],
    "rating": ["rating", "rate", "score"],
    "orders": ["orders", "order_count", "orders_count", "sold"],
    "images": ["images", "image_urls", "image_list"],
    "image": ["image", "main_image", "image_url", "thumbnail"],
    "currency": ["currency"],
}


def _pick(raw: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """별칭 목록에서 처음 발견되는 값"""
    for alias in FIELD_ALIASES.get(key, [key]):
        value = raw.get(alias)
        if value not in (None, ""):
            return value
    return default


def _image_list(value: Any) -> List[str]:
    """이미지 값 → URL 목록 (문자열 1개, 목록, [{"url": ...}] 허용)

    Raises:
        ValidationError: 목록도 문자열도 아닐 때
    """
    if value in (None, ""):
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        raise ValidationError("images는 목록이어야 합니다.", field="images", value=value)
    result = []
    for item in value:
        url = item.get("url") if isinstance(item, dict) else item
        if url:
            result.append(str(url))
    return result


def _collect_images(raw: Mapping[str, Any]) -> List[str]:
    result = _image_list(_pick(raw, "images"))
    single = _pick(raw, "image")
    if single and str(single) not in result:
        result.insert(0, str(single))
    return result


@dataclass
class ProductRecord:
    """정규화된 상품 레코드"""
    external_id: str = ""
    source: str = SupplierSource.UNKNOWN.value
    title_raw: str = ""
    desc_raw: str = ""
    category: str = ""
    brand: str = ""
    supplier_price: float = 0.0
    supplier_shipping: float = 0.0
    rating: float = 0.0
    orders: int = 0
    images: List[str] = field(default_factory=list)
    currency: str = "SAR"

    @property
    def cost(self) -> ProductCost:
        return ProductCost(self.supplier_price, self.supplier_shipping)

    @property
    def has_image(self) -> bool:
        return len(self.images) > 0

    @property
    def label(self) -> str:
        """로그용 식별자"""
        return self.external_id or self.title_raw or "<unknown>"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "external_id": self.external_id,
            "source": self.source,
            "title_raw": self.title_raw,
            "desc_raw": self.desc_raw,
            "category": self.category,
            "brand": self.brand,
            "supplier_price": self.supplier_price,
            "supplier_shipping": self.supplier_shipping,
            "rating": self.rating,
            "orders": self.orders,
            "images": list(self.images),
            "currency": self.currency,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProductRecord":
        """저장된 레코드 로드 (정규화 필드명 기준)

        Raises:
            ValidationError: 객체가 아니거나 images 형식 오류
        """
        if not isinstance(data, Mapping):
            raise ValidationError("상품 레코드는 객체여야 합니다.", field="record", value=data)
        return cls(
            external_id=str(data.get("external_id") or ""),
            source=str(data.get("source") or SupplierSource.UNKNOWN.value),
            title_raw=str(data.get("title_raw") or ""),
            desc_raw=str(data.get("desc_raw") or ""),
            category=str(data.get("category") or ""),
            brand=str(data.get("brand") or ""),
            supplier_price=to_number(data.get("supplier_price")),
            supplier_shipping=to_number(data.get("supplier_shipping")),
            rating=to_number(data.get("rating")),
            orders=to_int(data.get("orders")),
            images=_image_list(data.get("images")),
            currency=str(data.get("currency") or "SAR"),
        )

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any], source: str = SupplierSource.UNKNOWN.value) -> "ProductRecord":
        """공급사 원본 응답 → 정규화 레코드

        Raises:
            ValidationError: 객체가 아니거나 식별자/제목이 모두 없을 때
        """
        if not isinstance(raw, Mapping):
            raise ValidationError("공급사 응답 항목이 객체가 아닙니다.", field="raw", value=raw)

        external_id = _pick(raw, "external_id", "")
        title = _pick(raw, "title_raw", "")
        if not external_id and not title:
            raise ValidationError("식별자와 제목이 모두 없습니다.", field="external_id", value=raw)

        return cls(
            external_id=str(external_id),
            source=source,
            title_raw=str(title),
            desc_raw=str(_pick(raw, "desc_raw", "")),
            category=str(_pick(raw, "category", "")),
            brand=str(_pick(raw, "brand", "")),
            supplier_price=to_number(_pick(raw, "supplier_price")),
            supplier_shipping=to_number(_pick(raw, "supplier_shipping")),
            rating=to_number(_pick(raw, "rating")),
            orders=to_int(_pick(raw, "orders")),
            images=_collect_images(raw),
            currency=str(_pick(raw, "currency", "SAR")),
        )


@dataclass
class OptimizedContent:
    """언어모델이 다시 쓴 상품 문구"""
    title_ar: str = ""
    description_ar: str = ""
    seo_tags_ar: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title_ar": self.title_ar,
            "description_ar": self.description_ar,
            "seo_tags_ar": list(self.seo_tags_ar),
        }


@dataclass
class OptimizedProduct:
    """최종 카탈로그 레코드 (원본 + 문구 + 판매가)"""
    record: ProductRecord
    content: OptimizedContent
    final_price: float
    extra: Optional[Dict[str, Any]] = None  # 원본에만 있던 필드 보존

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.extra or {})
        data.update(self.record.to_dict())
        data.update(self.content.to_dict())
        data["final_price"] = self.final_price
        return data
