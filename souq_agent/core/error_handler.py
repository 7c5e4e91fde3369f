"""
에러 핸들러

배치 파이프라인용 중앙 집중식 에러 처리.
레코드 단위 실패는 기록 후 건너뛰고 나머지를 계속 처리한다.
"""

import logging
import traceback
from typing import Optional, Any, Dict, List
from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime

from .exceptions import (
    SouqAgentError,
    ValidationError,
    DataImportError,
    LLMResponseError,
)


class RecoveryAction(Enum):
    """복구 액션"""
    SKIP = "skip"
    ABORT = "abort"
    LOG_AND_CONTINUE = "log_and_continue"


@dataclass
class ErrorRecord:
    """에러 기록"""
    error_code: str
    message: str
    timestamp: str
    traceback: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    recovery_action: Optional[RecoveryAction] = None


class ErrorHandler:
    """에러 핸들러"""

    # 레코드 하나만 버리면 되는 에러
    SKIPPABLE = (ValidationError, DataImportError, LLMResponseError)

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger(__name__)
        self.error_history: List[ErrorRecord] = []

    def handle(
        self,
        error: Exception,
        context: Dict[str, Any] = None
    ) -> RecoveryAction:
        """
        에러 처리

        Args:
            error: 발생한 예외
            context: 에러 컨텍스트 (external_id 등)

        Returns:
            복구 액션
        """
        context = context or {}

        record = self._create_record(error, context)
        self.error_history.append(record)

        self._log_error(error, context)

        recovery = self._determine_recovery(error)
        record.recovery_action = recovery

        return recovery

    def _create_record(
        self,
        error: Exception,
        context: Dict[str, Any]
    ) -> ErrorRecord:
        """에러 기록 생성"""
        error_code = "UNKNOWN"
        details = {}

        if isinstance(error, SouqAgentError):
            error_code = error.error_code
            details = error.details

        return ErrorRecord(
            error_code=error_code,
            message=str(error),
            timestamp=datetime.now().isoformat(),
            traceback="".join(traceback.format_exception(type(error), error, error.__traceback__)),
            details={**details, **context}
        )

    def _log_error(self, error: Exception, context: Dict[str, Any]):
        """에러 로깅"""
        if isinstance(error, SouqAgentError):
            self.logger.error(
                f"[{error.error_code}] {error.message}",
                extra={"context": {**error.details, **context}},
            )
        else:
            self.logger.error(
                f"Unhandled error: {str(error)}",
                extra={"context": context},
                exc_info=error
            )

    def _determine_recovery(self, error: Exception) -> RecoveryAction:
        """복구 전략 결정"""
        if isinstance(error, self.SKIPPABLE):
            return RecoveryAction.SKIP

        if isinstance(error, SouqAgentError):
            return RecoveryAction.LOG_AND_CONTINUE

        return RecoveryAction.ABORT

    def get_error_summary(self) -> Dict[str, Any]:
        """에러 요약 반환"""
        if not self.error_history:
            return {"total_errors": 0, "by_code": {}}

        by_code = {}
        for record in self.error_history:
            code = record.error_code
            by_code[code] = by_code.get(code, 0) + 1

        return {
            "total_errors": len(self.error_history),
            "by_code": by_code,
            "recent_errors": [
                {"code": r.error_code, "message": r.message, "time": r.timestamp}
                for r in self.error_history[-5:]
            ]
        }

    def clear_history(self):
        """에러 히스토리 초기화"""
        self.error_history.clear()
