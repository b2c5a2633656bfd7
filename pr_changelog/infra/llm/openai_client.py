from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from pr_changelog.core.config import settings
from pr_changelog.infra.llm.base import BaseLLMClient


class OpenAIClient(BaseLLMClient):
    """OpenAI API 클라이언트 - 기본 프로바이더"""

    def __init__(self):
        if not settings.openai_api_key:
            raise ValueError("OPENAI_API_KEY가 설정되지 않았습니다")

        # 커밋당 한 번 호출, 결정적인 짧은 응답
        self._model = ChatOpenAI(
            model=settings.openai_model,
            api_key=settings.openai_api_key,
            timeout=settings.openai_timeout,
            max_tokens=settings.changelog_max_tokens,
            temperature=0,
            frequency_penalty=0,
            presence_penalty=0,
            n=1,
        )

    def get_chat_model(self) -> BaseChatModel:
        """LangChain ChatOpenAI 모델 반환"""
        return self._model

    def get_model_name(self) -> str:
        """사용 중인 모델 이름 반환"""
        return settings.openai_model
