"""
커스텀 예외 클래스

Souq Agent에서 사용하는 모든 커스텀 예외를 정의
"""

from typing import Dict, Any


class SouqAgentError(Exception):
    """기본 예외 클래스"""

    def __init__(
        self,
        message: str,
        error_code: str = None,
        details: Dict[str, Any] = None,
        cause: Exception = None
    ):
        """
        Args:
            message: 에러 메시지
            error_code: 에러 코드
            details: 추가 상세 정보
            cause: 원인 예외
        """
        self.message = message
        self.error_code = error_code or self._default_code()
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def _default_code(self) -> str:
        return "SQA_UNKNOWN"

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "type": self.__class__.__name__
        }

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ValidationError(SouqAgentError):
    """데이터 검증 오류"""

    def __init__(
        self,
        message: str,
        field: str = None,
        value: Any = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        details = kwargs.pop("details", {})
        details["field"] = field
        details["value"] = str(value)[:100]  # 값 길이 제한
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "SQA_VALIDATION"


class InvalidInputError(ValidationError):
    """가격 계산 입력값 오류 (strict 모드)"""

    def _default_code(self) -> str:
        return "SQA_INVALID_INPUT"


class ConfigurationError(SouqAgentError):
    """설정 오류"""

    def __init__(
        self,
        message: str,
        config_key: str = None,
        **kwargs
    ):
        self.config_key = config_key
        details = kwargs.pop("details", {})
        details["config_key"] = config_key
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "SQA_CONFIG"


class DataImportError(SouqAgentError):
    """데이터 임포트 오류"""

    def __init__(
        self,
        message: str,
        file_path: str = None,
        row_number: int = None,
        **kwargs
    ):
        self.file_path = file_path
        self.row_number = row_number
        details = kwargs.pop("details", {})
        details["file_path"] = file_path
        details["row_number"] = row_number
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "SQA_IMPORT"


class APIError(SouqAgentError):
    """API 호출 오류 (기본)"""

    def __init__(
        self,
        message: str,
        status_code: int = None,
        response_body: str = None,
        endpoint: str = None,
        **kwargs
    ):
        self.status_code = status_code
        self.response_body = response_body
        self.endpoint = endpoint
        details = kwargs.pop("details", {})
        details["status_code"] = status_code
        details["endpoint"] = endpoint
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "SQA_API"


class SupplierAPIError(APIError):
    """공급사(AutoDrop, 마카젠) API 오류"""

    def __init__(
        self,
        message: str,
        supplier: str = None,
        **kwargs
    ):
        self.supplier = supplier
        details = kwargs.pop("details", {})
        details["supplier"] = supplier
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "SQA_SUPPLIER"


class LLMAPIError(APIError):
    """언어모델(Gemini) API 오류"""

    def __init__(
        self,
        message: str,
        model: str = None,
        **kwargs
    ):
        self.model = model
        details = kwargs.pop("details", {})
        details["model"] = model
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "SQA_LLM"


class LLMResponseError(SouqAgentError):
    """언어모델 응답 파싱/검증 실패"""

    def __init__(
        self,
        message: str,
        raw_response: str = None,
        **kwargs
    ):
        self.raw_response = raw_response
        details = kwargs.pop("details", {})
        details["raw_response"] = (raw_response or "")[:200]
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "SQA_LLM_RESPONSE"


class NetworkError(SouqAgentError):
    """네트워크 오류"""

    def _default_code(self) -> str:
        return "SQA_NETWORK"


# 에러 코드 상수
class ErrorCodes:
    """에러 코드 상수"""

    # 일반
    UNKNOWN = "SQA_UNKNOWN"
    VALIDATION = "SQA_VALIDATION"
    INVALID_INPUT = "SQA_INVALID_INPUT"
    CONFIG = "SQA_CONFIG"

    # 데이터
    IMPORT_FAILED = "SQA_IMPORT"
    IMPORT_INVALID_FORMAT = "SQA_IMPORT_FORMAT"

    # API
    API_ERROR = "SQA_API"
    SUPPLIER_ERROR = "SQA_SUPPLIER"
    LLM_ERROR = "SQA_LLM"
    LLM_RESPONSE_ERROR = "SQA_LLM_RESPONSE"

    # 네트워크
    NETWORK_ERROR = "SQA_NETWORK"
