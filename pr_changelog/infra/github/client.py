import re

import httpx

from pr_changelog.core.config import settings
from pr_changelog.core.logging import get_logger
from pr_changelog.domain.changelog.schemas import CommitInfo, PullRequestInfo

logger = get_logger(__name__)

REPOSITORY_PATTERN = re.compile(r"^([a-zA-Z0-9_.-]+)/([a-zA-Z0-9_.-]+)$")

# GitHub은 PR 커밋 목록을 최대 250개까지만 반환
MAX_PULL_COMMITS = 250

_client = httpx.AsyncClient(timeout=settings.github_timeout)


def _api_base() -> str:
    return settings.github_api_url.rstrip("/")


def _get_headers(token: str | None = None) -> dict[str, str]:
    """GitHub API 요청 헤더 생성

    Args:
        token: GitHub 토큰

    Returns:
        HTTP 헤더 딕셔너리
    """
    headers = {"Accept": "application/vnd.github.v3+json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


async def close_client():
    """httpx 클라이언트 종료"""
    await _client.aclose()


def parse_repository(repository: str) -> tuple[str, str]:
    """owner/repo 형식 문자열에서 owner와 repo 추출

    Args:
        repository: GITHUB_REPOSITORY 형식의 레포지토리 이름

    Returns:
        owner, repo 튜플

    Raises:
        ValueError: 형식이 올바르지 않은 경우
    """
    match = REPOSITORY_PATTERN.match(repository.strip())
    if not match:
        raise ValueError(f"유효하지 않은 레포지토리 이름: {repository}")
    return match.group(1), match.group(2)


async def get_pull_request(
    repository: str, pull_number: int, token: str | None = None
) -> PullRequestInfo:
    """PR 제목과 본문 조회

    Args:
        repository: owner/repo
        pull_number: PR 번호
        token: GitHub 토큰

    Returns:
        PR 기본 정보, 본문이 없으면 빈 문자열
    """
    owner, repo = parse_repository(repository)
    url = f"{_api_base()}/repos/{owner}/{repo}/pulls/{pull_number}"

    response = await _client.get(url, headers=_get_headers(token))
    response.raise_for_status()
    data = response.json()

    logger.info("PR 조회 완료 repo=%s/%s pr=%d", owner, repo, pull_number)
    return PullRequestInfo(
        number=data["number"],
        title=data.get("title") or "",
        body=data.get("body") or "",
    )


async def get_pull_commits(
    repository: str,
    pull_number: int,
    token: str | None = None,
    per_page: int = 100,
) -> list[CommitInfo]:
    """PR에 포함된 커밋 목록을 순서대로 조회

    Args:
        repository: owner/repo
        pull_number: PR 번호
        token: GitHub 토큰
        per_page: 페이지당 커밋 개수

    Returns:
        커밋 목록, 오래된 커밋부터
    """
    owner, repo = parse_repository(repository)
    url = f"{_api_base()}/repos/{owner}/{repo}/pulls/{pull_number}/commits"
    per_page = min(per_page, 100)

    commits: list[CommitInfo] = []
    page = 1
    while len(commits) < MAX_PULL_COMMITS:
        params = {"per_page": per_page, "page": page}
        response = await _client.get(url, headers=_get_headers(token), params=params)
        response.raise_for_status()
        data = response.json()

        commits.extend(
            CommitInfo(
                sha=commit["sha"],
                message=commit["commit"]["message"],
                html_url=commit.get("html_url", ""),
            )
            for commit in data
        )

        if len(data) < per_page:
            break
        page += 1

    logger.info(
        "PR 커밋 조회 완료 repo=%s/%s pr=%d count=%d", owner, repo, pull_number, len(commits)
    )
    return commits


async def get_commit_diff(repository: str, sha: str, token: str | None = None) -> str:
    """커밋의 변경 파일 patch를 하나의 diff로 합쳐서 반환

    patch가 없는 파일(바이너리 등)은 빈 문자열로 취급

    Args:
        repository: owner/repo
        sha: 커밋 SHA
        token: GitHub 토큰

    Returns:
        파일별 patch를 줄바꿈으로 이은 문자열
    """
    owner, repo = parse_repository(repository)
    url = f"{_api_base()}/repos/{owner}/{repo}/commits/{sha}"

    response = await _client.get(url, headers=_get_headers(token))
    response.raise_for_status()
    data = response.json()

    patches = [f.get("patch") or "" for f in data.get("files", [])]

    logger.info(
        "커밋 diff 조회 완료 repo=%s/%s sha=%s files=%d", owner, repo, sha[:7], len(patches)
    )
    return "\n".join(patches)


async def update_pull_request_body(
    repository: str, pull_number: int, body: str, token: str | None = None
) -> int:
    """PR 본문 갱신

    Args:
        repository: owner/repo
        pull_number: PR 번호
        body: 새 본문
        token: GitHub 토큰

    Returns:
        응답 HTTP 상태 코드
    """
    owner, repo = parse_repository(repository)
    url = f"{_api_base()}/repos/{owner}/{repo}/pulls/{pull_number}"

    response = await _client.patch(url, headers=_get_headers(token), json={"body": body})
    response.raise_for_status()

    logger.info("PR 본문 갱신 완료 repo=%s/%s pr=%d", owner, repo, pull_number)
    return response.status_code
