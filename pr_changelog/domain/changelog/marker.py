"""
PR 본문에 숨겨진 변경 로그 마커 인코딩/디코딩

마커 형식: <!-- GPT-LOG:<JSON 배열> -->
렌더링된 본문에는 보이지 않는 HTML 주석으로 저장된다.
"""

import json
import re

from pydantic import ValidationError

from pr_changelog.core.exceptions import MalformedLogError
from pr_changelog.domain.changelog.schemas import CommitLogEntry, commit_log_adapter

MARKER_PREFIX = "<!-- GPT-LOG:"
MARKER_SUFFIX = " -->"

# 한 줄 안에서 greedy 매칭, 첫 번째 매치만 사용
MARKER_PATTERN = re.compile(r"<!-- GPT-LOG:(.*) -->")


def decode_log(body: str) -> tuple[list[CommitLogEntry], str]:
    """PR 본문에서 변경 로그를 추출하고 마커를 제거한 본문을 함께 반환

    Args:
        body: PR 본문

    Returns:
        (변경 로그 항목 목록, 마커가 제거된 본문) 튜플.
        마커가 없으면 빈 목록과 원본 본문

    Raises:
        MalformedLogError: 마커 내용이 올바른 JSON 배열이 아닌 경우
    """
    match = MARKER_PATTERN.search(body)
    if not match:
        return [], body

    try:
        entries = commit_log_adapter.validate_json(match.group(1))
    except ValidationError as e:
        first_error = e.errors()[0]["msg"]
        raise MalformedLogError(
            detail=f"검증 오류 {e.error_count()}개, 첫 번째 오류: {first_error}"
        ) from e

    stripped = body[: match.start()] + body[match.end() :]
    return entries, stripped


def encode_log(entries: list[CommitLogEntry]) -> str:
    """변경 로그를 마커 문자열로 직렬화"""
    payload = [entry.model_dump(by_alias=True) for entry in entries]
    serialized = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    return f"{MARKER_PREFIX}{serialized}{MARKER_SUFFIX}"


def embed_log(body: str, entries: list[CommitLogEntry]) -> str:
    """마커가 제거된 본문 끝에 변경 로그 마커 추가"""
    return body + encode_log(entries)
