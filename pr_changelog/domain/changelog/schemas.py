from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class CommitLogEntry(BaseModel):
    """커밋 하나에 대한 변경 로그 항목

    PR 본문에는 commitHash, changelog 키로 저장된다.
    저장된 항목에 알 수 없는 키가 있으면 그대로 보존한다.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", strict=True)

    commit_hash: str = Field(alias="commitHash")
    changelog: str


CommitLog = list[CommitLogEntry]

commit_log_adapter: TypeAdapter[CommitLog] = TypeAdapter(CommitLog)


class PullRequestInfo(BaseModel):
    """PR 기본 정보"""

    number: int
    title: str
    body: str = ""


class CommitInfo(BaseModel):
    """PR에 포함된 커밋 정보"""

    sha: str
    message: str
    html_url: str = ""
