"""
content_optimizer.py - 상품 문구 현지화 (v1.0)

핵심 기능:
1. 원본 제목/설명 → 걸프 아랍어 마케팅 제목 + 설명
2. 아랍어 SEO 태그 생성
3. Gemini JSON 응답을 Pydantic으로 검증

재시도 없음. 응답 1회가 실패하면 예외를 올리고 파이프라인이 해당 상품을 건너뛴다.

사용법:
    optimizer = ContentOptimizer(api_key="...")
    content = optimizer.optimize(record)
"""

import json
import logging
import re
from typing import List, Optional

import google.generativeai as genai
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from ..core.config import LLMSettings
from ..core.exceptions import ConfigurationError, LLMAPIError, LLMResponseError
from ..domain.models import OptimizedContent, ProductRecord
from ..utils.helpers import truncate_text

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_CHARS = 1200


# ============================================================
# Pydantic 모델 (Gemini 출력 검증용)
# ============================================================

class OptimizedContentModel(BaseModel):
    """현지화 결과 (Pydantic)"""
    title_ar: str = Field(..., min_length=1, description="아랍어 제목")
    description_ar: str = Field(..., min_length=1, description="아랍어 설명")
    seo_tags_ar: List[str] = Field(default_factory=list, description="아랍어 SEO 태그")

    @field_validator("title_ar", "description_ar", mode="before")
    @classmethod
    def strip_text(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("seo_tags_ar", mode="before")
    @classmethod
    def normalize_tags(cls, v):
        """쉼표 구분 문자열도 허용, # 제거, 빈 값 제외"""
        if v is None:
            return []
        if isinstance(v, str):
            v = re.split(r"[,،\n]", v)
        if not isinstance(v, list):
            return v
        return [str(t).strip().lstrip("#").strip() for t in v if str(t).strip().lstrip("#").strip()]


# ============================================================
# 프롬프트
# ============================================================

SYSTEM_PROMPT = """أنت كاتب محتوى تسويقي لمتجر إلكتروني في السوق السعودي.
اكتب بالعربية الفصحى مع لمسة خليجية، بأسلوب واضح ومقنع.
لا تذكر ادعاءات علاجية أو صحية مبالغ فيها.

[شكل المخرجات]
- أعد JSON صالحاً فقط، دون أي نص قبله أو بعده ودون ```.
{
  "title_ar": "...",
  "description_ar": "...",
  "seo_tags_ar": ["...", "..."]
}
"""

USER_PROMPT_TEMPLATE = """بيانات المنتج:
- التصنيف: {category}
- العلامة التجارية: {brand}
- العنوان الأصلي: {title}
- الوصف الأصلي: {description}

المطلوب:
1) title_ar: عنوان عربي قصير (حوالي 60 إلى 70 حرفاً) يحتوي كلمات البحث الأساسية.
2) description_ar: وصف تسويقي بفقرات قصيرة ونقاط يوضح الخامة والمزايا وطريقة الاستخدام.
3) seo_tags_ar: من 10 إلى 15 وسماً عربياً للبحث، بدون # وبدون أرقام موديلات.
"""


def build_user_prompt(record: ProductRecord) -> str:
    """상품 → 사용자 프롬프트 (설명은 1200자까지)"""
    return USER_PROMPT_TEMPLATE.format(
        category=record.category,
        brand=record.brand,
        title=record.title_raw,
        description=truncate_text(record.desc_raw, MAX_DESCRIPTION_CHARS),
    )


def parse_content_response(response_text: str) -> OptimizedContent:
    """Gemini 응답 텍스트 → OptimizedContent

    Raises:
        LLMResponseError: JSON이 아니거나 필수 필드 누락
    """
    # 코드 블록 제거
    json_str = (response_text or "").strip()
    json_str = re.sub(r'^```(?:json)?\s*', '', json_str)
    json_str = re.sub(r'\s*```$', '', json_str)

    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise LLMResponseError(f"JSON 파싱 실패: {e}", raw_response=response_text, cause=e)

    if not isinstance(data, dict):
        raise LLMResponseError("응답 JSON이 객체가 아닙니다.", raw_response=response_text)

    try:
        validated = OptimizedContentModel(**data)
    except PydanticValidationError as e:
        raise LLMResponseError(f"Pydantic 검증 실패: {e}", raw_response=response_text, cause=e)

    return OptimizedContent(
        title_ar=validated.title_ar,
        description_ar=validated.description_ar,
        seo_tags_ar=validated.seo_tags_ar,
    )


class ContentOptimizer:
    """Gemini 기반 상품 문구 현지화기"""

    def __init__(self, settings: Optional[LLMSettings] = None, api_key: Optional[str] = None):
        """
        Args:
            settings: 모델/temperature/max_tokens 설정
            api_key: 지정하면 settings.api_key보다 우선
        """
        self.settings = settings or LLMSettings()
        self.api_key = api_key or self.settings.api_key
        self.model = None

    def initialize(self):
        """모델 생성 (최초 1회)

        Raises:
            ConfigurationError: API 키 없음
        """
        if self.model is not None:
            return self.model

        if not self.api_key:
            raise ConfigurationError(
                "GEMINI_API_KEY가 설정되지 않았습니다.",
                config_key="llm.api_key"
            )

        genai.configure(api_key=self.api_key)
        self.model = genai.GenerativeModel(
            self.settings.model,
            system_instruction=SYSTEM_PROMPT,
            generation_config={
                "temperature": self.settings.temperature,
                "max_output_tokens": self.settings.max_tokens,
            },
        )
        return self.model

    def _classify_error(self, error: Exception) -> LLMAPIError:
        """에러 유형 분류 (메시지 기반)"""
        msg = str(error).lower()
        status_code = None
        if "quota" in msg or "429" in msg or "rate limit" in msg:
            status_code = 429
        elif "api_key" in msg or "401" in msg or "403" in msg:
            status_code = 401
        return LLMAPIError(
            f"Gemini API 오류: {error}",
            model=self.settings.model,
            status_code=status_code,
            cause=error
        )

    def generate(self, prompt: str) -> str:
        """프롬프트 1회 호출 → 응답 텍스트"""
        model = self.initialize()
        try:
            response = model.generate_content(prompt)
        except Exception as e:
            raise self._classify_error(e)

        try:
            return response.text
        except ValueError as e:
            # 안전 필터 차단 등으로 텍스트가 없는 경우
            raise LLMResponseError(f"응답 텍스트 없음: {e}", cause=e)

    def optimize(self, record: ProductRecord) -> OptimizedContent:
        """상품 1개 현지화"""
        logger.debug(f"문구 생성 요청: {record.label}")
        return parse_content_response(self.generate(build_user_prompt(record)))


# --- Mock Optimizer (API 키 없이 테스트용) ---
class MockContentOptimizer(ContentOptimizer):
    """테스트용 Mock Optimizer"""

    def __init__(self, settings: Optional[LLMSettings] = None):
        super().__init__(settings, api_key="mock")
        self.prompts: List[str] = []

    def initialize(self):
        return None

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return json.dumps({
            "title_ar": "منتج مميز بجودة عالية",
            "description_ar": "تصميم عصري وخامة متينة تناسب الاستخدام اليومي.",
            "seo_tags_ar": ["جودة عالية", "تسوق اونلاين", "السعودية"],
        }, ensure_ascii=False)

    def optimize(self, record: ProductRecord) -> OptimizedContent:
        content = super().optimize(record)
        if record.title_raw:
            content.title_ar = f"{content.title_ar} - {truncate_text(record.title_raw, 40)}"
        return content
