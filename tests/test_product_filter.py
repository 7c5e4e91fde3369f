"""product_filter.py 테스트"""

import pytest

from souq_agent.core.config import FilterSettings
from souq_agent.domain.models import ProductRecord
from souq_agent.importer.product_filter import FilterConfig, ProductFilter


def make_record(rating=4.8, orders=100, category="watches", images=None, external_id="p"):
    return ProductRecord(
        external_id=external_id,
        rating=rating,
        orders=orders,
        category=category,
        images=["https://img/1.jpg"] if images is None else images,
    )


class TestProductFilter:
    """ProductFilter 테스트"""

    def setup_method(self):
        self.filter = ProductFilter()

    def test_default_thresholds(self):
        """평점 4.6, 주문 50 이상"""
        assert self.filter.check(make_record(rating=4.6, orders=50))[0] == True
        assert self.filter.check(make_record(rating=4.59, orders=500))[0] == False
        assert self.filter.check(make_record(rating=5.0, orders=49))[0] == False

    def test_reasons(self):
        passed, reasons = self.filter.check(make_record(rating=4.0, orders=10))
        assert passed == False
        assert len(reasons) == 2

    def test_missing_numbers_rejected(self):
        """평점/주문수 누락(0) → 제외"""
        assert self.filter.check(ProductRecord(external_id="x"))[0] == False

    def test_apply_keeps_order(self):
        records = [
            make_record(external_id="a"),
            make_record(external_id="b", rating=3.0),
            make_record(external_id="c"),
        ]
        kept = self.filter.apply(records)
        assert [r.external_id for r in kept] == ["a", "c"]

    def test_allowed_categories(self):
        product_filter = ProductFilter(FilterConfig(allowed_categories=["bags"]))
        assert product_filter.check(make_record(category="bags"))[0] == True
        assert product_filter.check(make_record(category="watches"))[0] == False

    def test_require_image(self):
        product_filter = ProductFilter(FilterConfig(require_image=True))
        assert product_filter.check(make_record(images=[]))[0] == False
        assert self.filter.check(make_record(images=[]))[0] == True

    def test_from_settings(self):
        settings = FilterSettings(min_rating=4.0, min_orders=10, categories=["shoes"], require_image=True)
        config = FilterConfig.from_settings(settings)
        assert config.min_rating == 4.0
        assert config.min_orders == 10
        assert config.allowed_categories == ["shoes"]
        assert config.require_image == True

    def test_summary(self):
        summary = self.filter.get_filter_summary(4, 3)
        assert "3/4" in summary
        assert "75.0%" in summary
        assert "0/0" in self.filter.get_filter_summary(0, 0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
