"""테스트 공통 fixture"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from pr_changelog.core.context import clear_context
from pr_changelog.domain.changelog.schemas import CommitInfo, CommitLogEntry, PullRequestInfo

SERVICE = "pr_changelog.domain.changelog.service"


@pytest.fixture(autouse=True)
def _reset_context():
    """테스트 간 컨텍스트 변수 격리"""
    yield
    clear_context()


@pytest.fixture
def sample_pull_request() -> PullRequestInfo:
    """테스트용 PR"""
    return PullRequestInfo(
        number=42,
        title="Add retry support to uploader",
        body="## Summary\nAdds retries.\n",
    )


@pytest.fixture
def sample_commits() -> list[CommitInfo]:
    """테스트용 커밋 리스트"""
    return [
        CommitInfo(sha="a1", message="Fix bug", html_url="https://github.com/o/r/commit/a1"),
        CommitInfo(sha="b2", message="Add test", html_url="https://github.com/o/r/commit/b2"),
    ]


@pytest.fixture
def sample_entries() -> list[CommitLogEntry]:
    """테스트용 변경 로그"""
    return [CommitLogEntry(commit_hash="a1", changelog="X")]


@pytest.fixture
def mock_github():
    """service 모듈이 사용하는 GitHub 클라이언트 함수 mock"""
    with (
        patch(f"{SERVICE}.get_pull_request", new_callable=AsyncMock) as get_pr,
        patch(f"{SERVICE}.get_pull_commits", new_callable=AsyncMock) as get_commits,
        patch(f"{SERVICE}.get_commit_diff", new_callable=AsyncMock) as get_diff,
        patch(f"{SERVICE}.update_pull_request_body", new_callable=AsyncMock) as update_body,
    ):
        get_diff.return_value = "@@ -1 +1 @@\n-old\n+new"
        update_body.return_value = 200
        mock = MagicMock()
        mock.get_pull_request = get_pr
        mock.get_pull_commits = get_commits
        mock.get_commit_diff = get_diff
        mock.update_pull_request_body = update_body
        yield mock


@pytest.fixture
def mock_generate():
    """변경 로그 생성 LLM 호출 mock"""
    with patch(f"{SERVICE}.generate_changelog", new_callable=AsyncMock) as mock:
        yield mock


@pytest.fixture
def mock_github_response():
    """GitHub API 응답 mock 생성"""
    mock = MagicMock()
    mock.raise_for_status = MagicMock()
    mock.status_code = 200
    return mock


@pytest.fixture
def create_http_error():
    """HTTPStatusError 생성 helper"""

    def _create(status_code: int, message: str = "Error"):
        request = httpx.Request("GET", "https://test.com")
        return httpx.HTTPStatusError(
            message,
            request=request,
            response=httpx.Response(status_code, request=request),
        )

    return _create
