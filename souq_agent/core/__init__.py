"""코어 모듈 (v1.0)"""
from .exceptions import (
    SouqAgentError,
    ValidationError,
    InvalidInputError,
    ConfigurationError,
    DataImportError,
    APIError,
    SupplierAPIError,
    LLMAPIError,
    LLMResponseError,
    NetworkError,
    ErrorCodes,
)
from .error_handler import ErrorHandler, RecoveryAction
from .config import (
    AppSettings,
    MarginTier,
    PricingConfig,
    load_settings,
    DEFAULT_MARGIN,
    DEFAULT_VAT_RATE,
)
from .logging import setup_logger

__all__ = [
    # 예외
    "SouqAgentError",
    "ValidationError",
    "InvalidInputError",
    "ConfigurationError",
    "DataImportError",
    "APIError",
    "SupplierAPIError",
    "LLMAPIError",
    "LLMResponseError",
    "NetworkError",
    "ErrorCodes",
    "ErrorHandler",
    "RecoveryAction",
    # 설정
    "AppSettings",
    "MarginTier",
    "PricingConfig",
    "load_settings",
    "DEFAULT_MARGIN",
    "DEFAULT_VAT_RATE",
    "setup_logger",
]
