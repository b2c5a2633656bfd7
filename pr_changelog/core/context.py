"""
실행 컨텍스트 관리 모듈

contextvars를 사용하여 처리 중인 PR 번호와 커밋 SHA를 로그에 전달
"""

from contextvars import ContextVar

pr_number_var: ContextVar[int | None] = ContextVar("pr_number", default=None)
commit_sha_var: ContextVar[str | None] = ContextVar("commit_sha", default=None)


def get_pr_number() -> int | None:
    """현재 컨텍스트의 PR 번호 반환"""
    return pr_number_var.get()


def set_pr_number(pr_number: int | None) -> None:
    """PR 번호 설정"""
    pr_number_var.set(pr_number)


def get_commit_sha() -> str | None:
    """현재 컨텍스트의 커밋 SHA 반환"""
    return commit_sha_var.get()


def set_commit_sha(sha: str | None) -> None:
    """
    커밋 SHA 설정

    로그 가독성을 위해 앞 7자리만 저장
    """
    commit_sha_var.set(sha[:7] if sha else None)


def clear_context() -> None:
    """모든 컨텍스트 변수 초기화"""
    pr_number_var.set(None)
    commit_sha_var.set(None)
