"""Chat service configuration from environment variables."""
import os
from dataclasses import dataclass
from typing import Optional

from campuscalm.services.llm_service.base_llm import LLMConfig, LLMProvider


# Environment variable holding the credential for each provider
API_KEY_ENV = {
    LLMProvider.GEMINI: "GEMINI_API_KEY",
    LLMProvider.OPENAI: "OPENAI_API_KEY",
    LLMProvider.HUGGINGFACE: "HUGGINGFACE_TOKEN",
}


@dataclass(frozen=True)
class ChatServiceConfig:
    """Runtime settings for the chat endpoint and its generative client."""
    llm_provider: str = "gemini"
    model_name: str = "gemini-2.5-flash"
    model_endpoint: Optional[str] = None
    api_key: Optional[str] = None
    timeout_seconds: float = 30.0
    max_tokens: Optional[int] = None
    temperature: float = 0.7
    max_message_chars: int = 16000
    static_dir: str = "public"
    port: int = 3000

    def __post_init__(self):
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        if self.max_message_chars <= 0:
            raise ValueError("max_message_chars must be positive")

    @classmethod
    def from_env(cls) -> "ChatServiceConfig":
        """Create configuration from environment variables.

        Raises:
            ValueError: On an unknown provider or a malformed number
        """
        provider = LLMProvider(os.environ.get("LLM_PROVIDER", "gemini").strip().lower())
        max_tokens = os.environ.get("LLM_MAX_TOKENS")

        return cls(
            llm_provider=provider.value,
            model_name=os.environ.get("LLM_MODEL_NAME", "gemini-2.5-flash"),
            model_endpoint=os.environ.get("LLM_ENDPOINT") or None,
            api_key=os.environ.get(API_KEY_ENV[provider]) or None,
            timeout_seconds=float(os.environ.get("LLM_TIMEOUT_SECONDS", "30")),
            max_tokens=int(max_tokens) if max_tokens else None,
            temperature=float(os.environ.get("LLM_TEMPERATURE", "0.7")),
            max_message_chars=int(os.environ.get("MAX_MESSAGE_CHARS", "16000")),
            static_dir=os.environ.get("STATIC_DIR", "public"),
            port=int(os.environ.get("PORT", "3000")),
        )

    def llm_config(self) -> LLMConfig:
        return LLMConfig(
            provider=LLMProvider(self.llm_provider),
            model_name=self.model_name,
            endpoint=self.model_endpoint,
            api_key=self.api_key,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            timeout_seconds=self.timeout_seconds,
        )
