"""
config.py - 애플리케이션 설정 (v1.0)

config.yml + 환경변수(.env) 기반 설정을 중앙 관리.
가격 계산기는 전역 설정을 읽지 않고 PricingConfig를 인자로 받는다.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigurationError

DEFAULT_CONFIG_PATH = Path("config.yml")
DEFAULT_INPUT_PATH = "products_raw.json"
DEFAULT_OUTPUT_PATH = "products_optimized.json"

DEFAULT_MARGIN = 0.5                    # 구간 미매칭 시 마진 50%
DEFAULT_VAT_RATE = 0.15                 # 사우디 부가세 15%

# 공급사 검색 카테고리
DEFAULT_CATEGORIES: Tuple[str, ...] = (
    "men_tshirts",
    "women_abaya",
    "men_pants",
    "men_shirts",
    "shoes",
    "glasses",
    "watches",
    "bags",
    "beauty_serums",
    "beauty_cleansers",
    "moisturizers",
    "hair_care",
    "makeup_powder",
    "makeup_lipstick",
    "makeup_mascara",
)


@dataclass(frozen=True)
class MarginTier:
    """마진 구간: 원가가 [min, max] 안이면 margin 적용 (양끝 포함)"""
    min: float
    max: float
    margin: float = DEFAULT_MARGIN

    def contains(self, base_cost: float) -> bool:
        return self.min <= base_cost <= self.max

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MarginTier":
        """config.yml의 {min, max, margin} 항목 변환

        margin이 비어 있으면 기본 마진(0.5)을 쓴다.
        """
        if not isinstance(data, dict) or "min" not in data or "max" not in data:
            raise ConfigurationError(
                f"마진 구간에는 min/max가 필요합니다: {data!r}",
                config_key="settings.profit_margin"
            )
        margin = data.get("margin")
        try:
            return cls(
                min=float(data["min"]),
                max=float(data["max"]),
                margin=DEFAULT_MARGIN if margin is None else float(margin),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"마진 구간 값이 숫자가 아닙니다: {data!r}",
                config_key="settings.profit_margin",
                cause=e
            )


@dataclass(frozen=True)
class PricingConfig:
    """가격 계산 설정 (계산 1회 동안 불변)"""
    margin_tiers: Tuple[MarginTier, ...] = ()
    vat_rate: Optional[float] = DEFAULT_VAT_RATE

    def __post_init__(self):
        # 리스트로 넘겨도 불변 튜플로 고정
        object.__setattr__(self, "margin_tiers", tuple(self.margin_tiers))

    @property
    def effective_vat_rate(self) -> float:
        """미설정(None)이면 기본 15%"""
        return DEFAULT_VAT_RATE if self.vat_rate is None else float(self.vat_rate)


@dataclass
class SupplierSettings:
    """공급사 API 설정"""
    api_key: str = ""
    base_url: Optional[str] = None      # None이면 클라이언트 기본 엔드포인트
    timeout: int = 30


@dataclass
class LLMSettings:
    """언어모델 설정"""
    api_key: str = ""
    model: str = "gemini-1.5-flash"
    temperature: float = 0.7
    max_tokens: int = 800


@dataclass
class FilterSettings:
    """품질 필터 기준"""
    min_rating: float = 4.6
    min_orders: int = 50
    categories: List[str] = field(default_factory=list)
    require_image: bool = False


@dataclass
class AppSettings:
    """애플리케이션 전체 설정"""
    autodrop: SupplierSettings = field(default_factory=SupplierSettings)
    makhazen: SupplierSettings = field(default_factory=SupplierSettings)
    llm: LLMSettings = field(default_factory=LLMSettings)
    filter: FilterSettings = field(default_factory=FilterSettings)

    margin_tiers: List[MarginTier] = field(default_factory=list)
    vat_rate: Optional[float] = None

    search_categories: List[str] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    input_path: str = DEFAULT_INPUT_PATH
    output_path: str = DEFAULT_OUTPUT_PATH
    log_level: str = "INFO"

    def pricing_config(self) -> PricingConfig:
        """불변 PricingConfig 생성"""
        return PricingConfig(margin_tiers=tuple(self.margin_tiers), vat_rate=self.vat_rate)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppSettings":
        """config.yml 구조를 설정 객체로 변환"""
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigurationError("config.yml 최상위는 매핑이어야 합니다.")

        autodrop = data.get("autodrop") or {}
        makhazen = data.get("makhazen") or {}
        # 예전 config.yml은 openai 섹션을 썼음
        llm = data.get("llm") or data.get("openai") or {}
        flt = data.get("filter") or {}
        settings = data.get("settings") or {}

        tiers = settings.get("profit_margin") or []
        if not isinstance(tiers, list):
            raise ConfigurationError(
                "settings.profit_margin은 목록이어야 합니다.",
                config_key="settings.profit_margin"
            )

        vat_rate = settings.get("vat_rate")

        try:
            return cls(
                autodrop=SupplierSettings(
                    api_key=autodrop.get("api_key") or "",
                    base_url=autodrop.get("base_url"),
                    timeout=int(autodrop.get("timeout", 30)),
                ),
                makhazen=SupplierSettings(
                    api_key=makhazen.get("api_key") or "",
                    base_url=makhazen.get("base_url"),
                    timeout=int(makhazen.get("timeout", 30)),
                ),
                llm=LLMSettings(
                    api_key=llm.get("api_key") or "",
                    model=llm.get("model") or "gemini-1.5-flash",
                    temperature=float(llm.get("temperature", 0.7)),
                    max_tokens=int(llm.get("max_tokens", 800)),
                ),
                filter=FilterSettings(
                    min_rating=float(flt.get("min_rating", 4.6)),
                    min_orders=int(flt.get("min_orders", 50)),
                    categories=list(flt.get("categories") or []),
                    require_image=bool(flt.get("require_image", False)),
                ),
                margin_tiers=[MarginTier.from_dict(t) for t in tiers],
                vat_rate=None if vat_rate is None else float(vat_rate),
                search_categories=list(settings.get("categories") or DEFAULT_CATEGORIES),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"설정값 형식 오류: {e}", cause=e)

    def apply_env(self) -> "AppSettings":
        """비어 있는 값을 환경변수로 채움"""
        self.autodrop.api_key = self.autodrop.api_key or os.getenv("AUTODROP_API_KEY", "")
        self.makhazen.api_key = self.makhazen.api_key or os.getenv("MAKHAZEN_API_KEY", "")
        self.llm.api_key = (
            self.llm.api_key
            or os.getenv("GEMINI_API_KEY", "")
            or os.getenv("GOOGLE_API_KEY", "")
        )
        self.input_path = os.getenv("INPUT_PATH", self.input_path)
        self.output_path = os.getenv("OUTPUT_PATH", self.output_path)
        self.log_level = os.getenv("LOG_LEVEL", self.log_level)
        return self

    def validate(self) -> list:
        """설정 유효성 검사 (오류 메시지 목록)"""
        errors = []

        if not self.autodrop.api_key:
            errors.append("AutoDrop API 키가 설정되지 않았습니다.")
        if not self.makhazen.api_key:
            errors.append("마카젠 API 키가 설정되지 않았습니다.")
        if not self.llm.api_key:
            errors.append("GEMINI_API_KEY가 설정되지 않았습니다.")

        if self.vat_rate is not None and not (0 <= self.vat_rate <= 1):
            errors.append("부가세율은 0~1 사이여야 합니다.")

        for tier in self.margin_tiers:
            if tier.min > tier.max:
                errors.append(f"마진 구간 min({tier.min})이 max({tier.max})보다 큽니다.")

        return errors


def load_settings(path: Union[str, Path, None] = None, use_env: bool = True) -> AppSettings:
    """config.yml 로드 (없으면 기본값)

    Args:
        path: 설정 파일 경로 (기본: ./config.yml)
        use_env: .env / 환경변수로 빈 값 보완 여부

    Returns:
        AppSettings
    """
    if use_env:
        load_dotenv()

    config_path = Path(path) if path else DEFAULT_CONFIG_PATH

    data: Dict[str, Any] = {}
    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"config.yml 파싱 실패: {e}",
                config_key=str(config_path),
                cause=e
            )
    elif path:
        raise ConfigurationError(f"설정 파일이 없습니다: {config_path}", config_key=str(config_path))

    settings = AppSettings.from_dict(data)
    if use_env:
        settings.apply_env()
    return settings
