"""Chat Service: the POST /api/chat endpoint behind the chat widget.

Every message is classified locally, rendered into a structured-output
prompt, sent once to the generative service, parsed leniently, and
returned with crisis resources appended whenever it was flagged urgent.

Components:
- pipeline.py: ChatPipeline (classify -> prompt -> generate -> parse -> assemble)
- result_assembler.py: ResultAssembler and SAFETY_RESOURCES
- config.py: ChatServiceConfig.from_env()
- errors.py: ChatServiceError, ValidationError, UpstreamError
- handler.py: Flask endpoints (/api/chat, /health, /ready, static widget)

Usage:
    # As HTTP service
    python -m campuscalm.services.chat_service.handler
    POST /api/chat {"message": "..."}

    # Direct use
    from campuscalm.services.chat_service import ChatPipeline
    payload = await ChatPipeline(llm=my_llm).handle("I feel okay today")
"""

from .config import ChatServiceConfig
from .errors import ChatServiceError, UpstreamError, ValidationError
from .pipeline import ChatPipeline
from .result_assembler import ResultAssembler, SAFETY_RESOURCES

__all__ = [
    "ChatServiceConfig",
    "ChatServiceError",
    "UpstreamError",
    "ValidationError",
    "ChatPipeline",
    "ResultAssembler",
    "SAFETY_RESOURCES",
]
