from enum import Enum


class ErrorCode(str, Enum):
    """에러 코드 열거형"""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    CONTEXT_RESOLUTION_ERROR = "CONTEXT_RESOLUTION_ERROR"
    GITHUB_API_ERROR = "GITHUB_API_ERROR"
    LLM_ERROR = "LLM_ERROR"
    MALFORMED_LOG = "MALFORMED_LOG"


class CustomException(Exception):
    def __init__(
        self,
        error_code: ErrorCode | str,
        message: str,
        detail: str | None = None,
    ):
        self.error_code = error_code
        self.message = message
        self.detail = detail
        super().__init__(message)


class ConfigurationError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            error_code=ErrorCode.CONFIGURATION_ERROR,
            message="설정이 올바르지 않습니다",
            detail=detail,
        )


class ContextResolutionError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            error_code=ErrorCode.CONTEXT_RESOLUTION_ERROR,
            message="실행 컨텍스트에서 PR 정보를 찾을 수 없습니다",
            detail=detail,
        )


class GitHubAPIError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            error_code=ErrorCode.GITHUB_API_ERROR,
            message="GitHub API 호출에 실패했습니다",
            detail=detail,
        )


class LLMError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            error_code=ErrorCode.LLM_ERROR,
            message="LLM 호출에 실패했습니다",
            detail=detail,
        )


class MalformedLogError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            error_code=ErrorCode.MALFORMED_LOG,
            message="PR 본문의 변경 로그를 해석할 수 없습니다",
            detail=detail,
        )


def format_failure(exc: CustomException, include_detail: bool = True) -> str:
    """실패 보고용 메시지 생성"""
    if include_detail and exc.detail:
        return f"{exc.message}: {exc.detail}"
    return exc.message
