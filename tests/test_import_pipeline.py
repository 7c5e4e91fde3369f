"""import_pipeline.py 테스트"""

import json

import pytest

from souq_agent.adapters.supplier_client import MockSupplierClient, SupplierClient
from souq_agent.core.config import AppSettings
from souq_agent.core.exceptions import SupplierAPIError
from souq_agent.importer.import_pipeline import ProductImporter


class FailingClient(SupplierClient):
    """항상 실패하는 공급사"""

    NAME = "makhazen"

    def search(self, **kwargs):
        raise SupplierAPIError("HTTP error! 503", supplier=self.NAME, status_code=503)


class TestProductImporter:
    """ProductImporter 테스트"""

    def test_merge_filter_and_save(self, tmp_path):
        """두 공급사 병합 → 필터 → 저장"""
        output = tmp_path / "products_raw.json"
        importer = ProductImporter(
            AppSettings(),
            clients=[MockSupplierClient("autodrop"), MockSupplierClient("makhazen")],
        )

        result = importer.run(str(output))

        assert result.fetched == {"autodrop": 3, "makhazen": 3}
        assert result.total_fetched == 6
        assert result.normalized == 6
        assert result.kept == 4
        assert result.errors == []
        assert result.output_path == str(output)

        saved = json.loads(output.read_text(encoding="utf-8"))
        assert [p["source"] for p in saved] == ["autodrop", "autodrop", "makhazen", "makhazen"]
        assert saved[0]["external_id"] == "autodrop-1001"
        assert saved[0]["supplier_price"] == 25.0
        assert saved[0]["supplier_shipping"] == 10.0

    def test_supplier_failure_continues(self, tmp_path):
        """공급사 하나 실패해도 계속 진행"""
        output = tmp_path / "raw.json"
        importer = ProductImporter(
            AppSettings(),
            clients=[MockSupplierClient("autodrop"), FailingClient(api_key="k")],
        )

        result = importer.run(str(output))

        assert result.fetched == {"autodrop": 3, "makhazen": 0}
        assert result.kept == 2
        assert len(result.errors) == 1
        assert "makhazen" in result.errors[0]
        assert importer.error_handler.get_error_summary()["by_code"] == {"SQA_SUPPLIER": 1}
        assert len(json.loads(output.read_text(encoding="utf-8"))) == 2

    def test_unexpected_error_aborts(self, tmp_path):
        """공급사 클라이언트 버그는 전체 중단"""

        class BrokenClient(SupplierClient):
            NAME = "autodrop"

            def search(self, **kwargs):
                raise KeyError("products")

        output = tmp_path / "raw.json"
        importer = ProductImporter(AppSettings(), clients=[BrokenClient()])

        with pytest.raises(KeyError):
            importer.run(str(output))

        assert not output.exists()

    def test_invalid_listings_skipped(self, tmp_path):
        """정규화 실패 항목은 건너뜀"""
        client = MockSupplierClient("autodrop", products=[
            {"price": 10},
            "not a dict",
            {"id": "ok-1", "title": "Good", "rating": 4.9, "orders": 100},
        ])
        importer = ProductImporter(AppSettings(), clients=[client])

        result = importer.run(str(tmp_path / "raw.json"))

        assert result.skipped == 2
        assert result.normalized == 1
        assert result.kept == 1

    def test_filter_settings_applied(self, tmp_path):
        """설정의 필터 기준 사용"""
        settings = AppSettings()
        settings.filter.min_rating = 4.0
        settings.filter.min_orders = 10
        importer = ProductImporter(settings, clients=[MockSupplierClient("autodrop")])

        result = importer.run(str(tmp_path / "raw.json"))

        assert result.kept == 3

    def test_default_output_path(self, tmp_path, monkeypatch):
        """경로 미지정 → settings.input_path"""
        monkeypatch.chdir(tmp_path)
        importer = ProductImporter(AppSettings(), use_mock=True)

        result = importer.run()

        assert (tmp_path / "products_raw.json").exists()
        assert result.kept == 4

    def test_to_dict(self, tmp_path):
        importer = ProductImporter(AppSettings(), clients=[MockSupplierClient("autodrop")])
        d = importer.run(str(tmp_path / "raw.json")).to_dict()
        assert d["total_fetched"] == 3
        assert d["kept"] == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
