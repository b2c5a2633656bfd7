import os

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langfuse.langchain import CallbackHandler

from pr_changelog.core.config import settings
from pr_changelog.core.exceptions import LLMError
from pr_changelog.core.logging import get_logger
from pr_changelog.domain.changelog.prompts import CHANGELOG_HUMAN, CHANGELOG_SYSTEM
from pr_changelog.infra.llm.factory import get_generator_client

logger = get_logger(__name__)

if settings.langfuse_public_key:
    os.environ["LANGFUSE_PUBLIC_KEY"] = settings.langfuse_public_key
if settings.langfuse_secret_key:
    os.environ["LANGFUSE_SECRET_KEY"] = settings.langfuse_secret_key
if settings.langfuse_base_url:
    os.environ["LANGFUSE_HOST"] = settings.langfuse_base_url


def get_langfuse_handler() -> CallbackHandler | None:
    """Langfuse 콜백 핸들러 반환"""
    if not settings.langfuse_public_key or not settings.langfuse_secret_key:
        return None

    return CallbackHandler()


def build_changelog_messages(
    pr_title: str,
    previous_logs: str,
    commit_message: str,
    commit_diff: str,
) -> list[BaseMessage]:
    """커밋 하나에 대한 변경 로그 생성 메시지 구성"""
    return [
        SystemMessage(content=CHANGELOG_SYSTEM.format(reply_prefix=settings.reply_prefix)),
        HumanMessage(
            content=CHANGELOG_HUMAN.format(
                pr_title=pr_title,
                previous_logs=previous_logs,
                commit_message=commit_message,
                commit_diff=commit_diff,
            )
        ),
    ]


def _message_text(content: str | list) -> str:
    """응답 content에서 텍스트만 추출

    일부 프로바이더는 content를 블록 리스트로 반환
    """
    if isinstance(content, str):
        return content

    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


async def generate_changelog(
    pr_title: str,
    previous_logs: str,
    commit_message: str,
    commit_diff: str,
    session_id: str | None = None,
) -> str:
    """커밋 diff 기반 변경 로그 원문 생성

    Returns:
        LLM 응답 텍스트, 응답이 비어 있으면 빈 문자열

    Raises:
        LLMError: LLM 호출 실패 시
    """
    messages = build_changelog_messages(pr_title, previous_logs, commit_message, commit_diff)
    logger.debug("변경 로그 생성 요청 prompt=%s", messages[-1].content)

    langfuse_handler = get_langfuse_handler()
    config = {
        "callbacks": [langfuse_handler] if langfuse_handler else [],
        "metadata": {
            "langfuse_session_id": session_id,
            "langfuse_tags": ["changelog", "commit"],
        },
    }

    try:
        client = get_generator_client()
        result = await client.get_chat_model().ainvoke(messages, config=config)
    except ValueError as e:
        raise LLMError(detail=str(e)) from e
    except Exception as e:
        logger.error("LLM 호출 실패 error=%s", type(e).__name__)
        raise LLMError(detail=f"{type(e).__name__}: {e}") from e

    text = _message_text(result.content) if result is not None else ""
    logger.debug("변경 로그 생성 완료 model=%s length=%d", client.get_model_name(), len(text))
    return text
