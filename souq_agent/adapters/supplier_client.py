"""
supplier_client.py - 공급사 상품 검색 클라이언트 (v1.0)

AutoDrop(알리익스프레스 연동)과 마카젠(사우디 도매) 검색 API 호출.
요청 1회 + 타임아웃만 처리. 재시도/페이지네이션은 하지 않는다.

사용법:
    client = AutoDropClient(api_key="...")
    raw_products = client.search()
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import requests

from ..core.config import DEFAULT_CATEGORIES
from ..core.exceptions import ConfigurationError, NetworkError, SupplierAPIError

logger = logging.getLogger(__name__)


class SupplierClient:
    """공급사 검색 API 기본 클래스"""

    NAME = "supplier"
    SEARCH_URL = ""
    DEFAULT_MIN_ORDERS = 50

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            api_key: Bearer 토큰
            base_url: 검색 엔드포인트 (None이면 기본값)
            timeout: 요청 타임아웃 (초)
            session: 테스트용 세션 주입
        """
        self.api_key = api_key or ""
        self.search_url = base_url or self.SEARCH_URL
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    def build_params(
        self,
        categories: Sequence[str] = DEFAULT_CATEGORIES,
        min_rating: float = 4.6,
        min_orders: Optional[int] = None,
        limit: int = 50,
        market: str = "sa",
    ) -> Dict[str, Any]:
        """검색 쿼리 파라미터"""
        return {
            "categories": ",".join(categories),
            "sort": "orders_desc",
            "min_rating": min_rating,
            "min_orders": self.DEFAULT_MIN_ORDERS if min_orders is None else min_orders,
            "limit": limit,
            "market": market,
        }

    def search(
        self,
        categories: Sequence[str] = DEFAULT_CATEGORIES,
        min_rating: float = 4.6,
        min_orders: Optional[int] = None,
        limit: int = 50,
        market: str = "sa",
    ) -> List[Dict[str, Any]]:
        """상품 검색

        Returns:
            원본 상품 딕셔너리 목록

        Raises:
            ConfigurationError: API 키 없음
            SupplierAPIError: 2xx 이외 응답
            NetworkError: 연결/타임아웃 실패
        """
        if not self.api_key:
            raise ConfigurationError(
                f"{self.NAME} API 키가 설정되지 않았습니다.",
                config_key=f"{self.NAME}.api_key"
            )

        params = self.build_params(categories, min_rating, min_orders, limit, market)
        logger.info(f"[{self.NAME}] 검색 요청: {len(categories)}개 카테고리, limit={limit}")

        try:
            response = self.session.get(
                self.search_url,
                headers=self._headers(),
                params=params,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise NetworkError(
                f"{self.NAME} 요청 실패: {e}",
                details={"endpoint": self.search_url},
                cause=e
            )

        if not response.ok:
            raise SupplierAPIError(
                f"HTTP error! {response.status_code}",
                supplier=self.NAME,
                status_code=response.status_code,
                response_body=response.text[:500],
                endpoint=self.search_url
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise SupplierAPIError(
                f"{self.NAME} 응답이 JSON이 아닙니다.",
                supplier=self.NAME,
                status_code=response.status_code,
                endpoint=self.search_url,
                cause=e
            )

        products = self._extract_products(payload)
        logger.info(f"[{self.NAME}] {len(products)}개 상품 수신")
        return products

    @staticmethod
    def _extract_products(payload: Any) -> List[Dict[str, Any]]:
        """응답 본문에서 상품 목록 추출 (list 또는 {products|data|items: [...]})"""
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict):
            for key in ("products", "data", "items"):
                value = payload.get(key)
                if isinstance(value, list):
                    return value
        return []


class AutoDropClient(SupplierClient):
    """AutoDrop (AliExpress) 검색"""

    NAME = "autodrop"
    SEARCH_URL = "https://api.autodrop.ai/v1/aliexpress/search"
    DEFAULT_MIN_ORDERS = 100


class MakhazenClient(SupplierClient):
    """마카젠 (makhazen.sa) 검색"""

    NAME = "makhazen"
    SEARCH_URL = "https://api.makhazen.sa/v1/products/search"
    DEFAULT_MIN_ORDERS = 50


# --- Mock Client (API 키 없이 테스트용) ---
class MockSupplierClient(SupplierClient):
    """테스트용 Mock 공급사"""

    def __init__(self, name: str = "autodrop", products: Optional[List[Dict[str, Any]]] = None):
        super().__init__(api_key="mock")
        self.NAME = name
        self._products = products if products is not None else self._sample_products(name)
        self.calls: List[Dict[str, Any]] = []

    def search(
        self,
        categories: Sequence[str] = DEFAULT_CATEGORIES,
        min_rating: float = 4.6,
        min_orders: Optional[int] = None,
        limit: int = 50,
        market: str = "sa",
    ) -> List[Dict[str, Any]]:
        self.calls.append(self.build_params(categories, min_rating, min_orders, limit, market))
        return [dict(p) if isinstance(p, dict) else p for p in self._products[:limit]]

    @staticmethod
    def _sample_products(name: str) -> List[Dict[str, Any]]:
        return [
            {
                "id": f"{name}-1001",
                "title": "Men's Cotton Crew Neck T-Shirt",
                "description": "Breathable 100% cotton t-shirt, regular fit.",
                "category": "men_tshirts",
                "brand": "Basics",
                "price": 25.0,
                "shipping_fee": 10.0,
                "rating": 4.8,
                "orders": 1250,
                "images": ["https://example.com/tshirt.jpg"],
            },
            {
                "id": f"{name}-1002",
                "title": "Vitamin C Brightening Serum 30ml",
                "description": "Lightweight serum with vitamin C and hyaluronic acid.",
                "category": "beauty_serums",
                "price": 40.0,
                "shipping_fee": 0,
                "rating": 4.7,
                "orders": 320,
                "images": ["https://example.com/serum.jpg"],
            },
            {
                "id": f"{name}-1003",
                "title": "Classic Leather Watch",
                "category": "watches",
                "price": 100.0,
                "shipping_fee": 20.0,
                "rating": 4.2,
                "orders": 15,
                "images": [],
            },
        ]


def create_supplier_clients(settings, use_mock: bool = False) -> List[SupplierClient]:
    """설정 기반 공급사 클라이언트 목록 (AutoDrop → 마카젠 순서)"""
    if use_mock:
        return [MockSupplierClient("autodrop"), MockSupplierClient("makhazen")]

    return [
        AutoDropClient(
            api_key=settings.autodrop.api_key,
            base_url=settings.autodrop.base_url,
            timeout=settings.autodrop.timeout,
        ),
        MakhazenClient(
            api_key=settings.makhazen.api_key,
            base_url=settings.makhazen.base_url,
            timeout=settings.makhazen.timeout,
        ),
    ]
