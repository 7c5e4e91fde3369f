"""models.py 테스트 - 상품 레코드 정규화"""

import pytest

from souq_agent.core.exceptions import ValidationError
from souq_agent.domain.models import (
    OptimizedContent,
    OptimizedProduct,
    ProductCost,
    ProductRecord,
    SupplierSource,
)


class TestProductCost:
    """ProductCost 테스트"""

    def test_base_cost(self):
        assert ProductCost(100, 20).base_cost == 120

    def test_from_mapping_coerces(self):
        """누락/숫자 아님 → 0"""
        cost = ProductCost.from_mapping({"supplier_price": "abc"})
        assert cost == ProductCost(0.0, 0.0)


class TestProductRecordFromRaw:
    """공급사 원본 → ProductRecord"""

    def test_field_aliases(self):
        """공급사별 필드명 매핑"""
        raw = {
            "id": 5,
            "name": "Leather Bag",
            "details": "Genuine leather",
            "category_name": "bags",
            "sale_price": "12.5",
            "shipping_fee": 3,
            "order_count": "1,250",
            "rate": 4.7,
            "image_urls": [{"url": "https://img/a.jpg"}, "https://img/b.jpg"],
            "main_image": "https://img/c.jpg",
        }
        record = ProductRecord.from_raw(raw, source=SupplierSource.MAKHAZEN.value)

        assert record.external_id == "5"
        assert record.source == "makhazen"
        assert record.title_raw == "Leather Bag"
        assert record.desc_raw == "Genuine leather"
        assert record.category == "bags"
        assert record.supplier_price == 12.5
        assert record.supplier_shipping == 3.0
        assert record.orders == 1250
        assert record.rating == 4.7
        assert record.images == ["https://img/c.jpg", "https://img/a.jpg", "https://img/b.jpg"]
        assert record.currency == "SAR"

    def test_normalized_names_take_priority(self):
        """정규화 필드명이 별칭보다 우선"""
        raw = {"external_id": "x-1", "id": "other", "supplier_price": 10, "price": 99}
        record = ProductRecord.from_raw(raw)
        assert record.external_id == "x-1"
        assert record.supplier_price == 10.0

    def test_missing_numbers_are_zero(self):
        record = ProductRecord.from_raw({"title": "No price"})
        assert record.supplier_price == 0.0
        assert record.rating == 0.0
        assert record.orders == 0
        assert record.has_image == False

    def test_requires_id_or_title(self):
        with pytest.raises(ValidationError):
            ProductRecord.from_raw({"price": 10})

    def test_non_mapping_raises(self):
        with pytest.raises(ValidationError):
            ProductRecord.from_raw(["not", "a", "dict"])


class TestProductRecord:
    """ProductRecord 직렬화 테스트"""

    def test_round_trip(self):
        record = ProductRecord(
            external_id="p-1",
            source="autodrop",
            title_raw="T-Shirt",
            supplier_price=25.0,
            supplier_shipping=10.0,
            rating=4.8,
            orders=1200,
            images=["https://img/t.jpg"],
        )
        assert ProductRecord.from_dict(record.to_dict()) == record

    def test_from_dict_non_mapping(self):
        with pytest.raises(ValidationError):
            ProductRecord.from_dict("oops")

    def test_from_dict_single_image_string(self):
        """문자열 images → URL 1개짜리 목록"""
        record = ProductRecord.from_dict({"external_id": "p-1", "images": "https://img/a.jpg"})
        assert record.images == ["https://img/a.jpg"]

    def test_from_dict_images_not_list(self):
        with pytest.raises(ValidationError) as exc_info:
            ProductRecord.from_dict({"external_id": "p-1", "images": 5})
        assert exc_info.value.field == "images"

    def test_from_dict_image_objects(self):
        record = ProductRecord.from_dict({"images": [{"url": "https://img/a.jpg"}, "", None]})
        assert record.images == ["https://img/a.jpg"]

    def test_cost_and_label(self):
        record = ProductRecord(title_raw="Watch", supplier_price=100, supplier_shipping=20)
        assert record.cost == ProductCost(100, 20)
        assert record.label == "Watch"
        assert ProductRecord().label == "<unknown>"


class TestOptimizedProduct:
    """OptimizedProduct 직렬화 테스트"""

    def test_to_dict_is_flat(self):
        """원본 + 문구 + 판매가, 원본에만 있던 필드 보존"""
        product = OptimizedProduct(
            record=ProductRecord(external_id="p-1", title_raw="Watch"),
            content=OptimizedContent("ساعة", "وصف", ["ساعة رجالية"]),
            final_price=234.5,
            extra={"supplier_url": "https://s/1", "title_raw": "stale"},
        )
        d = product.to_dict()

        assert d["external_id"] == "p-1"
        assert d["title_raw"] == "Watch"
        assert d["supplier_url"] == "https://s/1"
        assert d["title_ar"] == "ساعة"
        assert d["seo_tags_ar"] == ["ساعة رجالية"]
        assert d["final_price"] == 234.5


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
