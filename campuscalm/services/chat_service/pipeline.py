"""Chat pipeline: classify -> prompt -> generate -> parse -> assemble.

One coroutine per request. The only suspension point is the outbound
generative call, which is bounded by a timeout and never retried.
Classification happens locally BEFORE the prompt is built, so the
urgency flag (and the safety floor it triggers) never depends on the
model's cooperation.
"""
import asyncio
import logging
import time
from typing import Any, Optional

from campuscalm.shared.models import ResponsePayload
from campuscalm.shared.utils import short_fingerprint
from campuscalm.services.classifier_service import MessageClassifier
from campuscalm.services.llm_service import (
    BaseLLM,
    PromptBuilder,
    ResponseParser,
    create_llm,
)
from .config import ChatServiceConfig
from .errors import UpstreamError, ValidationError
from .result_assembler import ResultAssembler

logger = logging.getLogger(__name__)

MESSAGE_REQUIRED = "message (string) is required"

# Leaves room for the template inside the adapters' prompt limit
DEFAULT_MAX_MESSAGE_CHARS = 16000


class ChatPipeline:
    """Runs one chat message through the full pipeline."""

    def __init__(
        self,
        classifier: Optional[MessageClassifier] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        llm: Optional[BaseLLM] = None,
        parser: Optional[ResponseParser] = None,
        assembler: Optional[ResultAssembler] = None,
        timeout_seconds: float = 30.0,
        max_message_chars: int = DEFAULT_MAX_MESSAGE_CHARS,
    ):
        """Initialize pipeline.

        Args:
            classifier: Local sentiment + urgency classifier
            prompt_builder: Template renderer
            llm: Generative client; None means not configured
            parser: Model output parser
            assembler: Payload builder with safety floor
            timeout_seconds: Upper bound on the generative call
            max_message_chars: Longest message accepted
        """
        self.classifier = classifier or MessageClassifier()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.llm = llm
        self.parser = parser or ResponseParser()
        self.assembler = assembler or ResultAssembler()
        self.timeout_seconds = timeout_seconds
        self.max_message_chars = max_message_chars

    @classmethod
    def from_config(cls, config: ChatServiceConfig) -> "ChatPipeline":
        """Build a pipeline, leaving llm unset if the provider can't be created."""
        llm = None
        try:
            llm = create_llm(config.llm_config())
        except ValueError as e:
            logger.error(
                "LLM_NOT_CONFIGURED",
                extra={
                    "provider": config.llm_provider,
                    "error": str(e),
                }
            )
        return cls(
            llm=llm,
            timeout_seconds=config.timeout_seconds,
            max_message_chars=config.max_message_chars,
        )

    def validate(self, message: Any) -> str:
        """Check the request message before any work is done.

        Args:
            message: Value of "message" from the request body

        Returns:
            The message, unchanged

        Raises:
            ValidationError: Not a non-empty string, or longer than
                max_message_chars
        """
        if not isinstance(message, str) or not message:
            raise ValidationError(MESSAGE_REQUIRED)
        if len(message) > self.max_message_chars:
            raise ValidationError(
                f"message must be at most {self.max_message_chars} characters"
            )
        return message

    async def generate(self, prompt: str) -> str:
        """Call the generative client once, bounded by the timeout.

        Raises:
            UpstreamError: Not configured, timed out, or the call failed
        """
        if self.llm is None:
            raise UpstreamError("Generative client is not configured")

        try:
            response = await asyncio.wait_for(
                self.llm.generate(prompt),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(
                "LLM_CALL_TIMEOUT",
                extra={"timeout_seconds": self.timeout_seconds}
            )
            raise UpstreamError(
                f"Generative call timed out after {self.timeout_seconds}s"
            ) from e
        except Exception as e:
            logger.error(
                "LLM_CALL_FAILED",
                extra={
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            )
            raise UpstreamError(str(e) or type(e).__name__) from e

        return response.text

    async def handle(self, message: Any) -> ResponsePayload:
        """Process one chat message.

        Args:
            message: User message from the request body

        Returns:
            ResponsePayload

        Raises:
            ValidationError: message is not a non-empty string, or too long
            UpstreamError: generative call failed or timed out
        """
        message = self.validate(message)
        start_time = time.perf_counter()

        classification = self.classifier.classify(message)
        prompt = self.prompt_builder.build_for(message, classification)
        raw = await self.generate(prompt)
        parsed = self.parser.parse(raw)
        payload = self.assembler.assemble(parsed, classification, raw)

        latency_ms = (time.perf_counter() - start_time) * 1000
        payload.metadata["latency_ms"] = round(latency_ms, 2)

        logger.info(
            "CHAT_RESPONSE_ASSEMBLED",
            extra={
                "text_fp": short_fingerprint(message),
                "mood": classification.mood.value,
                "urgent": classification.urgent,
                "parsed_keys": sorted(parsed.keys()),
                "latency_ms": payload.metadata["latency_ms"],
            }
        )

        return payload
