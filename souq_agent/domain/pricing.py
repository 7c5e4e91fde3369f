"""
pricing.py - 판매가 계산기 (v1.0)

판매가 = (공급가 + 배송비) × (1 + 구간 마진) × (1 + 부가세), 0.5 SAR 단위 반올림

- 마진 구간은 선언 순서대로 검사, 처음 매칭되는 구간 적용 (양끝 포함)
- 매칭 구간이 없으면 마진 50%
- 부가세 미설정 시 15%
- 설정은 인자로 받음 (전역 설정 참조 없음)
"""

import math
from typing import Any, Mapping, Optional, Sequence, Union

from ..core.config import DEFAULT_MARGIN, MarginTier, PricingConfig
from ..core.exceptions import InvalidInputError
from ..utils.helpers import round_half
from .models import ProductCost, ProductRecord

PriceInput = Union[ProductCost, ProductRecord, Mapping[str, Any]]


def select_margin(tiers: Sequence[MarginTier], base_cost: float) -> float:
    """원가에 해당하는 마진 선택

    Args:
        tiers: 마진 구간 (순서대로 검사)
        base_cost: 공급가 + 배송비

    Returns:
        첫 매칭 구간의 마진, 없으면 0.5
    """
    for tier in tiers:
        if tier.min <= base_cost <= tier.max:
            return tier.margin
    return DEFAULT_MARGIN


def _to_cost(product: PriceInput) -> ProductCost:
    if isinstance(product, ProductCost):
        return product
    if isinstance(product, ProductRecord):
        return product.cost
    return ProductCost.from_mapping(product or {})


def compute_price(product: PriceInput, config: PricingConfig) -> float:
    """최종 판매가 계산 (순수 함수)

    Args:
        product: ProductCost, ProductRecord 또는 supplier_price/supplier_shipping 키를 가진 dict
        config: 마진 구간 + 부가세

    Returns:
        0.5 단위 판매가
    """
    cost = _to_cost(product)
    base = cost.supplier_price + cost.supplier_shipping
    margin = select_margin(config.margin_tiers, base)
    with_margin = base * (1 + margin)
    with_vat = with_margin * (1 + config.effective_vat_rate)
    return round_half(with_vat)


class PriceCalculator:
    """판매가 계산기

    strict=True면 음수/NaN/숫자 아닌 원가를 0으로 바꾸지 않고 InvalidInputError 발생.
    """

    COST_FIELDS = ("supplier_price", "supplier_shipping")

    def __init__(self, config: Optional[PricingConfig] = None, strict: bool = False):
        """
        Args:
            config: 가격 설정. None이면 구간 없음 + 부가세 15%
            strict: 입력 검증 여부
        """
        self.config = config or PricingConfig()
        self.strict = strict

    def select_margin(self, base_cost: float) -> float:
        return select_margin(self.config.margin_tiers, base_cost)

    def calculate(self, product: PriceInput) -> float:
        """판매가 계산"""
        if self.strict:
            self._validate(product)
        return compute_price(product, self.config)

    def breakdown(self, product: PriceInput) -> dict:
        """단계별 계산 내역 (CLI 출력용)"""
        cost = _to_cost(product)
        base = cost.base_cost
        margin = self.select_margin(base)
        with_margin = base * (1 + margin)
        vat_rate = self.config.effective_vat_rate
        with_vat = with_margin * (1 + vat_rate)
        return {
            "base_cost": base,
            "margin": margin,
            "with_margin": with_margin,
            "vat_rate": vat_rate,
            "with_vat": with_vat,
            "final_price": self.calculate(product),
        }

    def _validate(self, product: PriceInput):
        if isinstance(product, (ProductCost, ProductRecord)):
            values = {f: getattr(product, f) for f in self.COST_FIELDS}
        else:
            values = {f: (product or {}).get(f) for f in self.COST_FIELDS}

        for name, value in values.items():
            if value is None:
                continue  # 누락은 0으로 취급
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidInputError(f"{name}은(는) 숫자여야 합니다.", field=name, value=value)
            if not math.isfinite(value):
                raise InvalidInputError(f"{name}이(가) 유한한 숫자가 아닙니다.", field=name, value=value)
            if value < 0:
                raise InvalidInputError(f"{name}은(는) 0 이상이어야 합니다.", field=name, value=value)
