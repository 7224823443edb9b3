"""LLM Service: prompt in, parsed reply out.

Components:
- prompt_builder.py: PromptBuilder with urgent/normal templates
- base_llm.py: provider adapters (Gemini, OpenAI, HuggingFace) and create_llm
- response_parser.py: ResponseParser strategy chain (never raises)
"""

from .base_llm import (
    BaseLLM,
    GeminiLLM,
    HuggingFaceLLM,
    LLMConfig,
    LLMProvider,
    LLMResponse,
    OpenAILLM,
    create_llm,
)
from .prompt_builder import PromptBuilder, PromptTemplates
from .response_parser import (
    DecodeResult,
    ResponseParser,
    decode_embedded,
    decode_fenced,
    decode_whole,
    wrap_raw,
)

__all__ = [
    "BaseLLM",
    "GeminiLLM",
    "HuggingFaceLLM",
    "LLMConfig",
    "LLMProvider",
    "LLMResponse",
    "OpenAILLM",
    "create_llm",
    "PromptBuilder",
    "PromptTemplates",
    "DecodeResult",
    "ResponseParser",
    "decode_embedded",
    "decode_fenced",
    "decode_whole",
    "wrap_raw",
]
