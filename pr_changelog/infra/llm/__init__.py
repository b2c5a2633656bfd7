from pr_changelog.infra.llm.base import BaseLLMClient
from pr_changelog.infra.llm.client import build_changelog_messages, generate_changelog
from pr_changelog.infra.llm.factory import get_generator_client, reset_clients
from pr_changelog.infra.llm.gemini_client import GeminiClient
from pr_changelog.infra.llm.openai_client import OpenAIClient
from pr_changelog.infra.llm.vllm_client import VLLMClient

__all__ = [
    "BaseLLMClient",
    "OpenAIClient",
    "VLLMClient",
    "GeminiClient",
    "get_generator_client",
    "reset_clients",
    "build_changelog_messages",
    "generate_changelog",
]
