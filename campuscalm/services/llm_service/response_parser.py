"""Best-effort recovery of a JSON object from untrusted model output.

Models are asked for JSON only but regularly wrap it in prose or code
fences. The parser tries an ordered list of decoder strategies and the
first one that yields a JSON object wins. The last strategy always
succeeds, so parse() never raises.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence

from campuscalm.shared.utils import fingerprint_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of a single decoder strategy."""
    ok: bool
    value: Optional[Dict[str, Any]] = None
    strategy: str = ""


Strategy = Callable[[str], DecodeResult]

FENCED_BLOCK = re.compile(r"```(?:json|JSON)?\s*([\s\S]*?)```")
EMBEDDED_OBJECT = re.compile(r"\{[\s\S]*\}")


def _reject_constant(name: str):
    # NaN, Infinity and -Infinity are not valid JSON
    raise ValueError(f"Non-standard JSON constant: {name}")


def _load_object(candidate: str, strategy: str) -> DecodeResult:
    try:
        value = json.loads(candidate, parse_constant=_reject_constant)
    except (ValueError, TypeError, RecursionError):
        return DecodeResult(ok=False, strategy=strategy)
    if not isinstance(value, dict):
        return DecodeResult(ok=False, strategy=strategy)
    return DecodeResult(ok=True, value=value, strategy=strategy)


def decode_whole(text: str) -> DecodeResult:
    """Decode the whole trimmed text."""
    return _load_object(text.strip(), "whole")


def decode_fenced(text: str) -> DecodeResult:
    """Decode the first fenced code block that holds a JSON object."""
    for match in FENCED_BLOCK.finditer(text):
        result = _load_object(match.group(1).strip(), "fenced")
        if result.ok:
            return result
    return DecodeResult(ok=False, strategy="fenced")


def decode_embedded(text: str) -> DecodeResult:
    """Decode the span from the first '{' to the last '}'."""
    match = EMBEDDED_OBJECT.search(text)
    if not match:
        return DecodeResult(ok=False, strategy="embedded")
    return _load_object(match.group(0), "embedded")


def wrap_raw(text: str) -> DecodeResult:
    """Give up on decoding and wrap the original text."""
    return DecodeResult(ok=True, value={"raw": text}, strategy="raw")


DEFAULT_STRATEGIES = (decode_whole, decode_fenced, decode_embedded, wrap_raw)


class ResponseParser:
    """Turns raw model text into a dict through an ordered strategy chain.

    Custom chains may drop or reorder strategies; wrap_raw is always tried
    last if no strategy in the chain succeeds.
    """

    def __init__(self, strategies: Optional[Sequence[Strategy]] = None):
        self.strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES

    def decode(self, raw: str) -> DecodeResult:
        if not isinstance(raw, str):
            raw = "" if raw is None else str(raw)

        for strategy in self.strategies:
            result = strategy(raw)
            if result.ok and isinstance(result.value, dict):
                return result
        return wrap_raw(raw)

    def parse(self, raw: str) -> Dict[str, Any]:
        """Parse raw model output.

        Args:
            raw: Text returned by the generative service

        Returns:
            A dict: the decoded JSON object, or {"raw": raw} on failure
        """
        result = self.decode(raw)

        if result.strategy == "raw":
            logger.warning(
                "RESPONSE_PARSE_DEGRADED",
                extra={
                    "raw_fp": fingerprint_text(result.value["raw"]),
                    "raw_length": len(result.value["raw"]),
                }
            )
        elif result.strategy != "whole":
            logger.info(
                "RESPONSE_PARSE_RECOVERED",
                extra={"strategy": result.strategy}
            )

        return result.value
