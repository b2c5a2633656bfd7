from pr_changelog.core.config import settings
from pr_changelog.core.logging import get_logger
from pr_changelog.infra.llm.base import BaseLLMClient
from pr_changelog.infra.llm.gemini_client import GeminiClient
from pr_changelog.infra.llm.openai_client import OpenAIClient
from pr_changelog.infra.llm.vllm_client import VLLMClient

logger = get_logger(__name__)

_generator_client: BaseLLMClient | None = None


def get_generator_client() -> BaseLLMClient:
    """변경 로그 생성용 LLM 클라이언트 반환"""
    global _generator_client

    if _generator_client is not None:
        return _generator_client

    provider = settings.llm_provider

    if provider == "openai":
        _generator_client = OpenAIClient()
    elif provider == "vllm":
        _generator_client = VLLMClient()
    elif provider == "gemini":
        _generator_client = GeminiClient()
    else:
        raise ValueError(f"지원하지 않는 LLM 프로바이더: {provider}")

    logger.info(
        "LLM 클라이언트 초기화 provider=%s model=%s",
        provider,
        _generator_client.get_model_name(),
    )

    return _generator_client


def reset_clients() -> None:
    """클라이언트 캐시 초기화 - 테스트용"""
    global _generator_client
    _generator_client = None
