import asyncio
from collections.abc import Iterator
from contextlib import contextmanager

import httpx

from pr_changelog.core.config import settings
from pr_changelog.core.context import set_commit_sha
from pr_changelog.core.exceptions import GitHubAPIError
from pr_changelog.core.logging import get_logger
from pr_changelog.domain.changelog.marker import decode_log, embed_log
from pr_changelog.domain.changelog.schemas import CommitInfo, CommitLogEntry, PullRequestInfo
from pr_changelog.infra.github.client import (
    get_commit_diff,
    get_pull_commits,
    get_pull_request,
    update_pull_request_body,
)
from pr_changelog.infra.llm.client import generate_changelog

logger = get_logger(__name__)


@contextmanager
def _github_errors(action: str) -> Iterator[None]:
    """httpx 오류를 GitHubAPIError로 변환"""
    try:
        yield
    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        logger.error("GitHub API 오류 action=%s status=%d", action, status_code)
        raise GitHubAPIError(detail=f"{action} 실패 HTTP {status_code}") from e
    except httpx.HTTPError as e:
        logger.error("GitHub API 통신 오류 action=%s error=%s", action, type(e).__name__)
        raise GitHubAPIError(detail=f"{action} 실패 {type(e).__name__}") from e


def filter_new_commits(
    commits: list[CommitInfo], entries: list[CommitLogEntry]
) -> list[CommitInfo]:
    """이미 로그에 기록된 커밋을 제외, 원래 순서 유지"""
    logged = {entry.commit_hash for entry in entries}
    return [commit for commit in commits if commit.sha not in logged]


def format_previous_logs(entries: list[CommitLogEntry]) -> str:
    """기존 변경 로그를 프롬프트 컨텍스트로 연결"""
    return "\n".join(entry.changelog for entry in entries)


def clean_completion(text: str | None, reply_prefix: str | None = None) -> str:
    """LLM 응답에서 응답 접두어 제거 후 공백 정리

    접두어는 첫 번째 등장 하나만 제거
    """
    if not text:
        return ""
    prefix = settings.reply_prefix if reply_prefix is None else reply_prefix
    if prefix:
        text = text.replace(prefix, "", 1)
    return text.strip()


async def describe_commit(
    repository: str,
    pull_request: PullRequestInfo,
    commit: CommitInfo,
    previous_logs: str,
    token: str | None = None,
) -> CommitLogEntry:
    """커밋 하나의 diff를 받아 변경 로그 항목 생성

    Args:
        repository: owner/repo
        pull_request: 대상 PR
        commit: 변경 로그를 만들 커밋
        previous_logs: 기존 변경 로그를 이어 붙인 컨텍스트
        token: GitHub 토큰

    Returns:
        생성된 변경 로그 항목
    """
    set_commit_sha(commit.sha)
    logger.info("커밋 변경 로그 생성 시작 message=%s url=%s", commit.message, commit.html_url)

    with _github_errors("커밋 diff 조회"):
        diff = await get_commit_diff(repository, commit.sha, token)

    completion = await generate_changelog(
        pr_title=pull_request.title,
        previous_logs=previous_logs,
        commit_message=commit.message,
        commit_diff=diff,
        session_id=f"{repository}#{pull_request.number}",
    )
    changelog = clean_completion(completion)

    logger.info("커밋 변경 로그 생성 완료 changelog=%s", changelog)
    set_commit_sha(None)
    return CommitLogEntry(commit_hash=commit.sha, changelog=changelog)


async def _describe_sequentially(
    repository: str,
    pull_request: PullRequestInfo,
    new_commits: list[CommitInfo],
    entries: list[CommitLogEntry],
    token: str | None,
) -> None:
    # 앞서 생성한 항목도 다음 커밋의 컨텍스트에 포함
    for commit in new_commits:
        entry = await describe_commit(
            repository, pull_request, commit, format_previous_logs(entries), token
        )
        entries.append(entry)


async def _describe_concurrently(
    repository: str,
    pull_request: PullRequestInfo,
    new_commits: list[CommitInfo],
    entries: list[CommitLogEntry],
    token: str | None,
    concurrency: int,
) -> None:
    # 컨텍스트는 실행 시작 시점의 로그로 고정, 결과는 커밋 순서대로 추가
    previous_logs = format_previous_logs(entries)
    semaphore = asyncio.Semaphore(concurrency)

    async def describe_with_limit(commit: CommitInfo) -> CommitLogEntry:
        async with semaphore:
            return await describe_commit(repository, pull_request, commit, previous_logs, token)

    # 하나라도 실패하면 나머지 작업은 취소
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(describe_with_limit(commit)) for commit in new_commits]
    except ExceptionGroup as eg:
        raise eg.exceptions[0] from None

    entries.extend(task.result() for task in tasks)


async def update_pull_request_changelog(
    repository: str,
    pull_number: int,
    token: str | None = None,
    concurrency: int | None = None,
) -> list[CommitLogEntry]:
    """PR 본문의 변경 로그에 새 커밋 항목을 추가하고 본문 갱신

    기존 항목은 순서와 내용을 그대로 유지하고, 로그에 없는 커밋만 생성한다.
    중간에 실패하면 PR 본문은 갱신하지 않는다.

    Args:
        repository: owner/repo
        pull_number: PR 번호
        token: GitHub 토큰
        concurrency: 동시에 처리할 커밋 수, 기본값은 설정값

    Returns:
        갱신된 전체 변경 로그

    Raises:
        GitHubAPIError: GitHub API 호출 실패 시
        LLMError: LLM 호출 실패 시
        MalformedLogError: 기존 마커를 해석할 수 없는 경우
    """
    if concurrency is None:
        concurrency = settings.generation_concurrency

    with _github_errors("PR 조회"):
        pull_request = await get_pull_request(repository, pull_number, token)

    entries, body = decode_log(pull_request.body)

    with _github_errors("PR 커밋 목록 조회"):
        commits = await get_pull_commits(repository, pull_number, token)

    logger.info("PR 커밋 확인 count=%d", len(commits))
    logger.info("기존 변경 로그 확인 count=%d", len(entries))

    new_commits = filter_new_commits(commits, entries)
    logger.info("새 커밋 확인 count=%d", len(new_commits))

    if concurrency > 1 and len(new_commits) > 1:
        await _describe_concurrently(
            repository, pull_request, new_commits, entries, token, concurrency
        )
    else:
        await _describe_sequentially(repository, pull_request, new_commits, entries, token)

    new_body = embed_log(body, entries)

    with _github_errors("PR 본문 갱신"):
        status_code = await update_pull_request_body(repository, pull_number, new_body, token)

    logger.info("PR 변경 로그 갱신 완료 entries=%d status=%d", len(entries), status_code)
    return entries
