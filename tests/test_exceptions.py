"""exceptions.py 테스트"""

import pytest

from souq_agent.core.exceptions import (
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


class TestSouqAgentError:
    """SouqAgentError 테스트"""

    def test_basic_error(self):
        """기본 에러"""
        error = SouqAgentError("테스트 에러")
        assert error.message == "테스트 에러"
        assert error.error_code == "SQA_UNKNOWN"

    def test_error_with_code(self):
        """에러 코드 포함"""
        error = SouqAgentError("테스트", error_code="CUSTOM_CODE")
        assert error.error_code == "CUSTOM_CODE"

    def test_to_dict(self):
        """딕셔너리 변환"""
        error = SouqAgentError("테스트", error_code="TEST_CODE", details={"field": "test"})
        d = error.to_dict()

        assert d["error_code"] == "TEST_CODE"
        assert d["message"] == "테스트"
        assert d["details"]["field"] == "test"
        assert d["type"] == "SouqAgentError"

    def test_str_representation(self):
        """문자열 표현"""
        error = SouqAgentError("테스트 에러", error_code="TEST")
        assert str(error) == "[TEST] 테스트 에러"

    def test_cause(self):
        """원인 예외 보존"""
        cause = ValueError("원인")
        error = SouqAgentError("래핑", cause=cause)
        assert error.cause is cause


class TestValidationErrors:
    """ValidationError / InvalidInputError 테스트"""

    def test_validation_error(self):
        """검증 에러"""
        error = ValidationError("필수값입니다", field="external_id", value=None)
        assert error.field == "external_id"
        assert error.value is None
        assert error.error_code == "SQA_VALIDATION"
        assert error.details["field"] == "external_id"

    def test_value_truncated(self):
        """긴 값은 100자로 제한"""
        error = ValidationError("너무 김", field="desc", value="x" * 500)
        assert len(error.details["value"]) == 100

    def test_invalid_input_is_validation_error(self):
        """InvalidInputError는 ValidationError 하위"""
        error = InvalidInputError("음수", field="supplier_price", value=-1)
        assert isinstance(error, ValidationError)
        assert error.error_code == ErrorCodes.INVALID_INPUT


class TestOtherErrors:
    """나머지 예외 테스트"""

    def test_configuration_error(self):
        error = ConfigurationError("키 없음", config_key="llm.api_key")
        assert error.config_key == "llm.api_key"
        assert error.error_code == ErrorCodes.CONFIG

    def test_data_import_error(self):
        error = DataImportError("파싱 실패", file_path="products_raw.json", row_number=3)
        assert error.details["file_path"] == "products_raw.json"
        assert error.details["row_number"] == 3
        assert error.error_code == ErrorCodes.IMPORT_FAILED

    def test_supplier_api_error(self):
        """공급사 API 에러"""
        error = SupplierAPIError(
            "HTTP error! 503",
            supplier="autodrop",
            status_code=503,
            endpoint="https://api.autodrop.ai/v1/aliexpress/search"
        )
        assert isinstance(error, APIError)
        assert error.supplier == "autodrop"
        assert error.status_code == 503
        assert error.details["supplier"] == "autodrop"
        assert error.details["status_code"] == 503
        assert error.error_code == ErrorCodes.SUPPLIER_ERROR

    def test_llm_api_error(self):
        error = LLMAPIError("할당량 초과", model="gemini-1.5-flash", status_code=429)
        assert isinstance(error, APIError)
        assert error.details["model"] == "gemini-1.5-flash"
        assert error.error_code == ErrorCodes.LLM_ERROR

    def test_llm_response_error_truncates_raw(self):
        """원본 응답은 200자까지만 details에"""
        raw = "a" * 1000
        error = LLMResponseError("JSON 아님", raw_response=raw)
        assert error.raw_response == raw
        assert len(error.details["raw_response"]) == 200
        assert error.error_code == ErrorCodes.LLM_RESPONSE_ERROR

    def test_network_error(self):
        error = NetworkError("연결 실패")
        assert error.error_code == ErrorCodes.NETWORK_ERROR

    def test_all_catchable_as_base(self):
        """모든 예외는 SouqAgentError로 잡힘"""
        for error in [
            ValidationError("x"),
            ConfigurationError("x"),
            DataImportError("x"),
            SupplierAPIError("x"),
            LLMAPIError("x"),
            LLMResponseError("x"),
            NetworkError("x"),
        ]:
            with pytest.raises(SouqAgentError):
                raise error


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
