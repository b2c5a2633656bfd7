"""LLM 클라이언트 테스트"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from pr_changelog.core.exceptions import LLMError
from pr_changelog.infra.llm.client import (
    _message_text,
    build_changelog_messages,
    generate_changelog,
)
from pr_changelog.infra.llm.factory import get_generator_client, reset_clients
from pr_changelog.infra.llm.gemini_client import GeminiClient
from pr_changelog.infra.llm.openai_client import OpenAIClient
from pr_changelog.infra.llm.vllm_client import VLLMClient


@pytest.fixture
def mock_chat_model():
    """변경 로그 생성용 채팅 모델 mock"""
    with patch("pr_changelog.infra.llm.client.get_generator_client") as mock_get:
        model = MagicMock()
        model.ainvoke = AsyncMock()
        mock_get.return_value.get_chat_model.return_value = model
        yield model


class TestBuildChangelogMessages:
    """build_changelog_messages 함수 테스트"""

    def test_contains_labeled_fields(self):
        """네 개의 라벨 필드를 포함"""
        messages = build_changelog_messages(
            pr_title="Add uploader retries",
            previous_logs="Adds `RetryPolicy`",
            commit_message="wire retry into uploader",
            commit_diff="+ retry()",
        )

        assert isinstance(messages[0], SystemMessage)
        assert isinstance(messages[1], HumanMessage)
        human = messages[1].content
        assert "PRTitle: Add uploader retries" in human
        assert "PreviousLogs: Adds `RetryPolicy`" in human
        assert "CommitMessage: wire retry into uploader" in human
        assert "CommitDiff: + retry()" in human

    def test_system_instructions(self):
        """백틱 포맷과 응답 형식 지시"""
        system = build_changelog_messages("t", "", "m", "d")[0].content

        assert "backticks" in system
        assert "PR title" in system
        assert "Reply: <content>" in system

    def test_braces_in_diff_are_kept(self):
        """diff의 중괄호가 포맷에 영향을 주지 않음"""
        messages = build_changelog_messages("t", "", "m", "def f(): return {'a': 1}")

        assert "{'a': 1}" in messages[1].content


class TestMessageText:
    """_message_text 함수 테스트"""

    def test_string_content(self):
        assert _message_text("Reply: ok") == "Reply: ok"

    def test_block_content(self):
        """블록 리스트는 텍스트만 이어 붙임"""
        content = [
            {"type": "text", "text": "Reply: "},
            {"type": "image_url", "image_url": "x"},
            "ok",
        ]

        assert _message_text(content) == "Reply: ok"


class TestGenerateChangelog:
    """generate_changelog 함수 테스트"""

    @pytest.mark.asyncio
    async def test_returns_raw_text(self, mock_chat_model):
        """응답 텍스트를 그대로 반환"""
        mock_chat_model.ainvoke.return_value = AIMessage(content="Reply: Fixes bug")

        result = await generate_changelog("T", "", "Fix bug", "+fix")

        assert result == "Reply: Fixes bug"
        messages = mock_chat_model.ainvoke.call_args.args[0]
        assert "CommitMessage: Fix bug" in messages[1].content

    @pytest.mark.asyncio
    async def test_empty_response(self, mock_chat_model):
        """빈 응답은 빈 문자열"""
        mock_chat_model.ainvoke.return_value = AIMessage(content="")

        assert await generate_changelog("T", "", "m", "d") == ""

    @pytest.mark.asyncio
    async def test_api_error_is_wrapped(self, mock_chat_model):
        """LLM 호출 실패는 LLMError"""
        mock_chat_model.ainvoke.side_effect = RuntimeError("rate limited")

        with pytest.raises(LLMError) as exc_info:
            await generate_changelog("T", "", "m", "d")

        assert "rate limited" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_client_init_error_is_wrapped(self):
        """클라이언트 초기화 실패도 LLMError"""
        with patch(
            "pr_changelog.infra.llm.client.get_generator_client",
            side_effect=ValueError("OPENAI_API_KEY가 설정되지 않았습니다"),
        ):
            with pytest.raises(LLMError, match="LLM 호출에 실패"):
                await generate_changelog("T", "", "m", "d")


class TestFactory:
    """get_generator_client 함수 테스트"""

    @pytest.fixture(autouse=True)
    def _reset(self):
        reset_clients()
        yield
        reset_clients()

    @pytest.mark.parametrize(
        "provider,client_path",
        [
            ("openai", "pr_changelog.infra.llm.factory.OpenAIClient"),
            ("vllm", "pr_changelog.infra.llm.factory.VLLMClient"),
            ("gemini", "pr_changelog.infra.llm.factory.GeminiClient"),
        ],
    )
    def test_selects_provider(self, provider, client_path):
        """설정된 프로바이더 클라이언트 생성"""
        with (
            patch("pr_changelog.infra.llm.factory.settings") as mock_settings,
            patch(client_path) as mock_cls,
        ):
            mock_settings.llm_provider = provider
            client = get_generator_client()

        assert client is mock_cls.return_value
        mock_cls.return_value.get_model_name.assert_called_once()

    def test_caches_client(self):
        """한 번 생성한 클라이언트 재사용"""
        with (
            patch("pr_changelog.infra.llm.factory.settings") as mock_settings,
            patch("pr_changelog.infra.llm.factory.OpenAIClient") as mock_cls,
        ):
            mock_settings.llm_provider = "openai"
            first = get_generator_client()
            second = get_generator_client()

        assert first is second
        mock_cls.assert_called_once()

    def test_unknown_provider(self):
        """지원하지 않는 프로바이더"""
        with patch("pr_changelog.infra.llm.factory.settings") as mock_settings:
            mock_settings.llm_provider = "unknown"
            with pytest.raises(ValueError, match="지원하지 않는 LLM 프로바이더"):
                get_generator_client()


class TestProviderClients:
    """프로바이더 클라이언트 생성 옵션 테스트"""

    def test_openai_requires_key(self):
        with patch("pr_changelog.infra.llm.openai_client.settings") as mock_settings:
            mock_settings.openai_api_key = ""
            with pytest.raises(ValueError, match="OPENAI_API_KEY"):
                OpenAIClient()

    def test_openai_deterministic_options(self):
        """결정적이고 짧은 응답 옵션"""
        with (
            patch("pr_changelog.infra.llm.openai_client.settings") as mock_settings,
            patch("pr_changelog.infra.llm.openai_client.ChatOpenAI") as mock_chat,
        ):
            mock_settings.openai_api_key = "sk-test"
            mock_settings.openai_model = "gpt-4o-mini"
            mock_settings.changelog_max_tokens = 100
            client = OpenAIClient()

        kwargs = mock_chat.call_args.kwargs
        assert kwargs["max_tokens"] == 100
        assert kwargs["temperature"] == 0
        assert kwargs["frequency_penalty"] == 0
        assert kwargs["presence_penalty"] == 0
        assert kwargs["n"] == 1
        assert client.get_model_name() == "gpt-4o-mini"

    def test_vllm_requires_url(self):
        with patch("pr_changelog.infra.llm.vllm_client.settings") as mock_settings:
            mock_settings.vllm_api_url = ""
            with pytest.raises(ValueError, match="VLLM_API_URL"):
                VLLMClient()

    def test_gemini_requires_key(self):
        with patch("pr_changelog.infra.llm.gemini_client.settings") as mock_settings:
            mock_settings.gemini_api_key = ""
            with pytest.raises(ValueError, match="GEMINI_API_KEY"):
                GeminiClient()
