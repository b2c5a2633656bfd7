import asyncio

from pr_changelog.cli import report_failure
from pr_changelog.core.config import settings
from pr_changelog.core.context import clear_context, set_pr_number
from pr_changelog.core.exceptions import ConfigurationError, CustomException, format_failure
from pr_changelog.core.logging import get_logger, setup_logging
from pr_changelog.domain.changelog.service import update_pull_request_changelog
from pr_changelog.infra.github.client import close_client as close_github_client
from pr_changelog.infra.github.event import resolve_context

logger = get_logger(__name__)


async def run() -> None:
    """설정 검증 후 PR 변경 로그 갱신 실행"""
    try:
        missing = settings.validate_required()
        if missing:
            raise ConfigurationError(detail=f"누락된 설정: {', '.join(missing)}")

        repository, pr_number = resolve_context(
            settings.github_repository,
            settings.github_event_path,
            settings.pr_number,
        )
        set_pr_number(pr_number)
        logger.info("PR 변경 로그 갱신 시작 repo=%s", repository)

        await update_pull_request_changelog(repository, pr_number, settings.github_token)
    finally:
        await close_github_client()


def main() -> int:
    """설정이 로드된 뒤의 실행 진입점, 실패 시 종료 코드 1 반환"""
    setup_logging()
    try:
        asyncio.run(run())
    except CustomException as e:
        message = format_failure(e, include_detail=not settings.is_production)
        error_code = getattr(e.error_code, "value", e.error_code)
        logger.error("PR 변경 로그 갱신 실패 error_code=%s message=%s", error_code, message)
        report_failure(message)
        return 1
    except Exception as e:
        logger.exception("PR 변경 로그 갱신 중 예상하지 못한 오류")
        report_failure(str(e) or type(e).__name__)
        return 1
    finally:
        clear_context()
    return 0
