"""Generative service adapters.

The generative backend is an opaque request/response service: one prompt
in, one block of text out. Adapters here hide provider differences
(Gemini, OpenAI, HuggingFace Inference) behind BaseLLM.generate().

Nothing here parses the model's text - the output is untrusted and goes
to ResponseParser as-is.
"""

import json
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

import aiohttp
import openai

logger = logging.getLogger(__name__)


class LLMProvider(Enum):
    """Supported generative providers."""
    GEMINI = "gemini"
    OPENAI = "openai"
    HUGGINGFACE = "huggingface"


@dataclass
class LLMConfig:
    """Configuration for generative inference."""
    provider: LLMProvider
    model_name: str
    endpoint: Optional[str] = None
    api_key: Optional[str] = None
    max_tokens: Optional[int] = None  # None leaves the provider default
    temperature: float = 0.7
    top_p: float = 0.9
    timeout_seconds: float = 30.0
    max_prompt_chars: int = 20000


@dataclass
class LLMResponse:
    """Response from a generative provider."""
    text: str
    model: str
    provider: str
    tokens_used: Optional[int] = None
    latency_ms: Optional[float] = None
    metadata: Optional[Dict] = None


class BaseLLM(ABC):
    """Abstract base class for generative provider adapters."""

    def __init__(self, config: LLMConfig):
        """Initialize adapter with configuration.

        Args:
            config: LLM configuration
        """
        self.config = config
        logger.info(
            "LLM_INITIALIZED",
            extra={
                "provider": config.provider.value,
                "model": config.model_name,
                "timeout_seconds": config.timeout_seconds,
            }
        )

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> LLMResponse:
        """Generate text for a prompt.

        Args:
            prompt: Full prompt text
            system_prompt: Optional system instruction
            **kwargs: Provider-specific parameters

        Returns:
            LLMResponse object

        Raises:
            ValueError: If prompt is invalid
            aiohttp.ClientError / openai.OpenAIError: On transport or API failure
        """
        pass

    def validate_prompt(self, prompt: str) -> bool:
        """Validate prompt before sending it out.

        Args:
            prompt: The prompt to validate

        Returns:
            True if valid, False otherwise
        """
        if not prompt or not prompt.strip():
            logger.warning("LLM_PROMPT_EMPTY")
            return False

        if len(prompt) > self.config.max_prompt_chars:
            logger.warning(
                "LLM_PROMPT_TOO_LONG",
                extra={"length": len(prompt), "limit": self.config.max_prompt_chars}
            )
            return False

        return True

    async def _post_json(
        self,
        url: str,
        payload: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """POST a JSON payload and return the decoded JSON body.

        Raises:
            aiohttp.ClientResponseError: On non-2xx status
            asyncio.TimeoutError: If the total timeout elapses
        """
        async with aiohttp.ClientSession() as session:
            async with session.post(
                url,
                headers=headers or {},
                json=payload,
                timeout=aiohttp.ClientTimeout(total=self.config.timeout_seconds),
            ) as response:
                response.raise_for_status()
                return await response.json(content_type=None)


class GeminiLLM(BaseLLM):
    """Google Gemini via the Generative Language REST API."""

    DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(self, config: LLMConfig):
        """Initialize Gemini adapter.

        Args:
            config: LLM configuration with Gemini API key
        """
        super().__init__(config)

        if not config.api_key:
            raise ValueError("Gemini API key required")

        base = (config.endpoint or self.DEFAULT_ENDPOINT).rstrip("/")
        self.url = f"{base}/models/{config.model_name}:generateContent"
        self.headers = {"x-goog-api-key": config.api_key}

    def build_payload(self, prompt: str, system_prompt: Optional[str] = None) -> Dict[str, Any]:
        generation_config: Dict[str, Any] = {
            "temperature": self.config.temperature,
            "topP": self.config.top_p,
        }
        if self.config.max_tokens is not None:
            generation_config["maxOutputTokens"] = self.config.max_tokens

        payload: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }
        if system_prompt:
            payload["systemInstruction"] = {"parts": [{"text": system_prompt}]}
        return payload

    @staticmethod
    def extract_text(result: Any) -> str:
        """Pull the reply text out of a generateContent response.

        Joins the text parts of the first candidate, skipping thought
        parts. If the response holds no text at all, the whole response is
        serialized so the caller still gets something to parse.
        """
        if isinstance(result, dict):
            candidates = result.get("candidates") or []
            if candidates and isinstance(candidates[0], dict):
                content = candidates[0].get("content") or {}
                parts = content.get("parts") or []
                texts = [
                    part["text"]
                    for part in parts
                    if isinstance(part, dict) and part.get("text") and not part.get("thought")
                ]
                if texts:
                    return "".join(texts)
        return json.dumps(result)

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> LLMResponse:
        """Generate text with Gemini generateContent.

        Args:
            prompt: Full prompt text
            system_prompt: Optional system instruction

        Returns:
            LLMResponse object
        """
        if not self.validate_prompt(prompt):
            raise ValueError("Invalid prompt")

        start_time = time.time()

        try:
            result = await self._post_json(
                self.url,
                self.build_payload(prompt, system_prompt),
                headers=self.headers,
            )
        except Exception as e:
            logger.error(
                "GEMINI_GENERATION_FAILED",
                extra={
                    "model": self.config.model_name,
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            )
            raise

        latency_ms = (time.time() - start_time) * 1000
        usage = result.get("usageMetadata", {}) if isinstance(result, dict) else {}

        logger.info(
            "GEMINI_GENERATION_SUCCESSFUL",
            extra={
                "model": self.config.model_name,
                "latency_ms": latency_ms,
                "tokens_used": usage.get("totalTokenCount"),
            }
        )

        return LLMResponse(
            text=self.extract_text(result),
            model=self.config.model_name,
            provider=self.config.provider.value,
            tokens_used=usage.get("totalTokenCount"),
            latency_ms=latency_ms,
        )


class HuggingFaceLLM(BaseLLM):
    """HuggingFace Inference endpoint."""

    def __init__(self, config: LLMConfig):
        """Initialize HuggingFace adapter.

        Args:
            config: LLM configuration with HuggingFace endpoint
        """
        super().__init__(config)

        if not config.endpoint:
            raise ValueError("HuggingFace endpoint required")

        self.endpoint = config.endpoint
        self.headers = {}

        if config.api_key:
            self.headers["Authorization"] = f"Bearer {config.api_key}"

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> LLMResponse:
        """Generate text using the HuggingFace Inference API.

        Args:
            prompt: Full prompt text
            system_prompt: Optional system prompt, prepended to the input

        Returns:
            LLMResponse object
        """
        if not self.validate_prompt(prompt):
            raise ValueError("Invalid prompt")

        full_prompt = prompt
        if system_prompt:
            full_prompt = f"{system_prompt}\n\n{prompt}"

        parameters: Dict[str, Any] = {
            "temperature": self.config.temperature,
            "top_p": self.config.top_p,
            "return_full_text": False,
        }
        if self.config.max_tokens is not None:
            parameters["max_new_tokens"] = self.config.max_tokens

        start_time = time.time()

        try:
            result = await self._post_json(
                self.endpoint,
                {"inputs": full_prompt, "parameters": parameters},
                headers=self.headers,
            )
        except Exception as e:
            logger.error(
                "HUGGINGFACE_GENERATION_FAILED",
                extra={
                    "model": self.config.model_name,
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            )
            raise

        latency_ms = (time.time() - start_time) * 1000

        if isinstance(result, list) and result and isinstance(result[0], dict):
            generated_text = result[0].get("generated_text", "")
        elif isinstance(result, dict):
            generated_text = result.get("generated_text", "")
        else:
            generated_text = ""
        if not generated_text:
            generated_text = json.dumps(result)

        logger.info(
            "HUGGINGFACE_GENERATION_SUCCESSFUL",
            extra={
                "model": self.config.model_name,
                "latency_ms": latency_ms
            }
        )

        return LLMResponse(
            text=generated_text,
            model=self.config.model_name,
            provider=self.config.provider.value,
            latency_ms=latency_ms,
            metadata={"endpoint": self.endpoint}
        )


class OpenAILLM(BaseLLM):
    """OpenAI Chat Completions."""

    def __init__(self, config: LLMConfig):
        """Initialize OpenAI adapter.

        Args:
            config: LLM configuration with API key
        """
        super().__init__(config)

        if not config.api_key:
            raise ValueError("OpenAI API key required")

    def _client(self) -> "openai.AsyncOpenAI":
        # One client per call: Flask async views may run each request on
        # a fresh event loop, and the client's connection pool is loop-bound.
        return openai.AsyncOpenAI(
            api_key=self.config.api_key,
            base_url=self.config.endpoint,
            timeout=self.config.timeout_seconds,
            max_retries=0,
        )

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> LLMResponse:
        """Generate text using the OpenAI API.

        Args:
            prompt: Full prompt text
            system_prompt: Optional system prompt

        Returns:
            LLMResponse object
        """
        if not self.validate_prompt(prompt):
            raise ValueError("Invalid prompt")

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        request: Dict[str, Any] = {
            "model": self.config.model_name,
            "messages": messages,
            "temperature": self.config.temperature,
            "top_p": self.config.top_p,
        }
        if self.config.max_tokens is not None:
            request["max_tokens"] = self.config.max_tokens

        start_time = time.time()

        try:
            async with self._client() as client:
                response = await client.chat.completions.create(**request)
        except Exception as e:
            logger.error(
                "OPENAI_GENERATION_FAILED",
                extra={
                    "model": self.config.model_name,
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            )
            raise

        latency_ms = (time.time() - start_time) * 1000

        generated_text = response.choices[0].message.content or ""
        tokens_used = response.usage.total_tokens if response.usage else None

        logger.info(
            "OPENAI_GENERATION_SUCCESSFUL",
            extra={
                "model": self.config.model_name,
                "latency_ms": latency_ms,
                "tokens_used": tokens_used
            }
        )

        return LLMResponse(
            text=generated_text,
            model=self.config.model_name,
            provider=self.config.provider.value,
            tokens_used=tokens_used,
            latency_ms=latency_ms
        )


def create_llm(config: LLMConfig) -> BaseLLM:
    """Factory function to create an adapter instance.

    Args:
        config: LLM configuration

    Returns:
        BaseLLM instance

    Raises:
        ValueError: If provider not supported or credentials missing
    """
    if config.provider == LLMProvider.GEMINI:
        return GeminiLLM(config)
    elif config.provider == LLMProvider.OPENAI:
        return OpenAILLM(config)
    elif config.provider == LLMProvider.HUGGINGFACE:
        return HuggingFaceLLM(config)
    else:
        raise ValueError(f"Unsupported provider: {config.provider}")
