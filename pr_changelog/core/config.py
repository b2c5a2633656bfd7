from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LLMProvider = Literal["openai", "vllm", "gemini"]


class Settings(BaseSettings):
    """애플리케이션 설정"""

    environment: str = "development"

    # LLM 프로바이더 선택
    llm_provider: LLMProvider = "openai"

    # OpenAI 설정
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_timeout: float = 120.0

    # vLLM 설정 - OpenAI 호환 엔드포인트
    vllm_api_url: str = ""
    vllm_api_key: str = ""
    vllm_model: str = ""
    vllm_timeout: float = 180.0

    # Gemini 설정
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    gemini_timeout: float = 120.0

    # GitHub
    github_token: str = ""
    github_api_url: str = "https://api.github.com"
    github_timeout: float = 60.0

    # GitHub Actions 실행 컨텍스트
    github_actions: bool = False
    github_repository: str = ""
    github_event_path: str = ""
    pr_number: int | None = None

    # 변경 로그 생성 설정
    changelog_max_tokens: int = 100
    reply_prefix: str = "Reply: "
    generation_concurrency: int = Field(default=1, ge=1)

    # 로깅 설정
    log_level: str = "INFO"

    # Langfuse 설정
    langfuse_public_key: str = ""
    langfuse_secret_key: str = ""
    langfuse_base_url: str = "https://cloud.langfuse.com"

    # 워크플로에서 비어 있는 값으로 넘긴 환경 변수는 미설정으로 취급
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_ignore_empty=True
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def mask_secrets(self) -> bool:
        """프로덕션 또는 GitHub Actions 실행 시 로그 마스킹"""
        return self.is_production or self.github_actions

    def validate_required(self) -> list[str]:
        """실행에 필요한 자격 증명 검증 후 누락된 항목 반환"""
        errors = []
        if not self.github_token:
            errors.append("GITHUB_TOKEN")

        if self.llm_provider == "openai" and not self.openai_api_key:
            errors.append("OPENAI_API_KEY")
        elif self.llm_provider == "vllm" and not self.vllm_api_url:
            errors.append("VLLM_API_URL")
        elif self.llm_provider == "gemini" and not self.gemini_api_key:
            errors.append("GEMINI_API_KEY")
        return errors


settings = Settings()
