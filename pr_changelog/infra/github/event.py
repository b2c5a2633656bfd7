"""
GitHub Actions 실행 컨텍스트 해석

이벤트 payload(GITHUB_EVENT_PATH)에서 PR 번호를 찾고,
GITHUB_REPOSITORY에서 대상 레포지토리를 가져온다.
"""

import json
from pathlib import Path

from pr_changelog.core.exceptions import ContextResolutionError
from pr_changelog.core.logging import get_logger
from pr_changelog.infra.github.client import parse_repository

logger = get_logger(__name__)


def load_event_payload(event_path: str) -> dict:
    """이벤트 payload JSON 파일 로드

    Raises:
        ContextResolutionError: 경로가 없거나 JSON을 읽을 수 없는 경우
    """
    if not event_path:
        raise ContextResolutionError(detail="GITHUB_EVENT_PATH가 설정되지 않았습니다")

    try:
        payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ContextResolutionError(detail=f"이벤트 payload 로드 실패: {e}") from e

    if not isinstance(payload, dict):
        raise ContextResolutionError(detail="이벤트 payload가 객체가 아닙니다")
    return payload


def resolve_pull_number(payload: dict) -> int:
    """payload에서 PR 번호 추출, 없으면 이슈 번호 사용

    Raises:
        ContextResolutionError: 두 번호 모두 없는 경우
    """
    for key in ("pull_request", "issue"):
        section = payload.get(key) or {}
        number = section.get("number")
        if number:
            logger.debug("PR 번호 확인 source=%s number=%s", key, number)
            return int(number)

    raise ContextResolutionError(detail="이벤트 payload에 pull_request/issue 번호가 없습니다")


def resolve_context(
    repository: str, event_path: str, pr_number: int | None = None
) -> tuple[str, int]:
    """실행 대상 레포지토리와 PR 번호 결정

    Args:
        repository: owner/repo
        event_path: 이벤트 payload 파일 경로
        pr_number: 명시적으로 지정된 PR 번호, payload보다 우선

    Returns:
        (repository, pr_number) 튜플
    """
    try:
        parse_repository(repository)
    except ValueError as e:
        raise ContextResolutionError(detail=str(e)) from e

    if pr_number:
        return repository, pr_number

    payload = load_event_payload(event_path)
    return repository, resolve_pull_number(payload)
