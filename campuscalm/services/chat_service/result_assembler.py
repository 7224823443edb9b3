"""Final response assembly and the crisis-resource safety floor.

Whatever the model returned, an urgent message always leaves with the
fixed crisis lines appended to parsed["resources"]. Entries are appended
every time, never deduplicated or replaced.
"""
import logging
from typing import Any, Dict, Optional, Sequence, Tuple

from campuscalm.shared.models import ClassificationResult, ResponsePayload

logger = logging.getLogger(__name__)


SAFETY_RESOURCES: Tuple[str, ...] = (
    "If you are in immediate danger call local emergency services (e.g. 112, 911) or the crisis lines below.",
    "India TeleMANAS: 14416 (mental health helpline).",
    "India KIRAN mental health helpline: 1800-599-0019.",
    "US Suicide & Crisis Lifeline: 988.",
)


class ResultAssembler:
    """Combines parsed reply, classification and raw text into a payload."""

    def __init__(self, safety_resources: Optional[Sequence[str]] = None):
        self.safety_resources = tuple(
            SAFETY_RESOURCES if safety_resources is None else safety_resources
        )

    def inject_resources(self, parsed: Dict[str, Any]) -> Dict[str, Any]:
        """Append the safety resources to parsed["resources"] in place."""
        resources = parsed.get("resources")
        if not resources:
            resources = []
        elif not isinstance(resources, list):
            resources = [resources]

        resources.extend(self.safety_resources)
        parsed["resources"] = resources
        return parsed

    def assemble(
        self,
        parsed: Dict[str, Any],
        classification: ClassificationResult,
        raw_model_response: str,
    ) -> ResponsePayload:
        """Build the response payload.

        Args:
            parsed: Output of ResponseParser; mutated when urgent
            classification: Local classification of the user message
            raw_model_response: Unmodified model text

        Returns:
            ResponsePayload
        """
        if classification.urgent:
            self.inject_resources(parsed)
            logger.info(
                "SAFETY_RESOURCES_INJECTED",
                extra={
                    "count": len(self.safety_resources),
                    "total_resources": len(parsed["resources"]),
                }
            )

        return ResponsePayload(
            parsed=parsed,
            mood=classification.mood,
            score=classification.score,
            urgent=classification.urgent,
            raw_model_response=raw_model_response,
        )
