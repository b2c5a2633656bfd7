"""
structlog 기반 로깅 설정

- 로컬/Actions 실행: 콘솔 출력, 터미널이나 Actions 로그에서만 컬러
- 프로덕션 환경: JSON 형식 출력
- 컨텍스트 자동 주입: pr_number, commit_sha
- GitHub Actions와 프로덕션에서는 토큰/API 키 마스킹
"""

import logging
import re
import sys

import structlog

from pr_changelog.core.config import settings
from pr_changelog.core.context import get_commit_sha, get_pr_number

SENSITIVE_PATTERNS = [
    (re.compile(r"(token=)[^&\s]+", re.IGNORECASE), r"\1***"),
    (re.compile(r"(Bearer\s+)[^\s]+", re.IGNORECASE), r"\1***"),
    (re.compile(r"(api[_-]?key=)[^&\s]+", re.IGNORECASE), r"\1***"),
    (re.compile(r"\b(gh[pousr]_)[A-Za-z0-9]+"), r"\1***"),
    (re.compile(r"\b(github_pat_)[A-Za-z0-9_]+"), r"\1***"),
    (re.compile(r"\b(sk-)[A-Za-z0-9_-]+"), r"\1***"),
]

NOISY_LOGGERS = ("httpcore", "httpx", "langfuse", "langchain", "openai", "anyio")


def _mask_sensitive_data(value: str) -> str:
    """민감한 정보 마스킹"""
    for pattern, replacement in SENSITIVE_PATTERNS:
        value = pattern.sub(replacement, value)
    return value


def add_context_processor(logger: logging.Logger, method_name: str, event_dict: dict) -> dict:
    """처리 중인 PR 번호와 커밋 SHA를 로그에 주입"""
    pr_number = get_pr_number()
    commit_sha = get_commit_sha()

    if pr_number:
        event_dict["pr_number"] = pr_number
    if commit_sha:
        event_dict["commit_sha"] = commit_sha

    return event_dict


def mask_sensitive_processor(logger: logging.Logger, method_name: str, event_dict: dict) -> dict:
    """위치 인자가 포맷된 뒤의 문자열 값 마스킹"""
    if not settings.mask_secrets:
        return event_dict

    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = _mask_sensitive_data(value)

    return event_dict


def _build_renderer():
    if settings.is_production:
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=settings.github_actions or sys.stdout.isatty())


def setup_logging(level: str | None = None) -> None:
    """structlog 설정 초기화, 표준 출력 하나로 모든 로그 출력"""
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    shared_processors: list = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        add_context_processor,
        mask_sensitive_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if settings.is_production:
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _build_renderer(),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """structlog 로거 반환"""
    return structlog.get_logger(name)
