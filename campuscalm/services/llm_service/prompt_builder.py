"""Structured-output prompt construction.

Renders a classified message into one of two prompts: a crisis variant
that asks for resources, and a normal variant that asks for a tone label
and relaxation tips. Both instruct the model to answer in JSON only; the
reply is still parsed leniently downstream.
"""

import logging
from dataclasses import dataclass
from string import Template
from typing import Optional, Union

from campuscalm.shared.models import ClassificationResult, Mood

logger = logging.getLogger(__name__)


URGENT_TEMPLATE = """You are an empathetic mental health companion for university students.
User message: \"\"\"$message\"\"\"
Sentiment score: $score -> mood: $mood
The user may be in crisis. Respond in a calm, non-judgmental and supportive tone.
Provide a short empathetic reply (1-3 sentences), then give 2 immediate grounding/comfort techniques the user can do right now (very short), and strongly encourage contacting emergency services or a trusted person.
Also include a short list of crisis resources (country-agnostic + India TeleMANAS 14416, KIRAN 1800-599-0019, US 988), and a 1-line follow-up question to keep the conversation going if the user wants to continue.
Return ONLY a JSON object with these keys:
{
  "reply": "<empathetic text>",
  "tips": ["...","..."],
  "resources": ["...","..."],
  "followup": "..."
}
Do NOT provide instructions for self-harm. Keep responses brief and supportive."""

NORMAL_TEMPLATE = """You are an empathetic mental health companion for university students.
User message: \"\"\"$message\"\"\"
Sentiment score: $score -> mood: $mood
Generate a compassionate, empathetic reply (2-4 sentences) tailored to the mood.
Then provide 3 short, practical relaxation tips (each 1-2 short phrases the user can try immediately).
Return a short, friendly follow-up question to continue the conversation.
Please reply in strict JSON with this structure:
{
  "reply": "<empathetic text>",
  "tone": "<tone label like 'calm' or 'encouraging'>",
  "tips": ["tip1","tip2","tip3"],
  "followup": "<one short question>"
}
Return JSON only (no extra text)."""


@dataclass(frozen=True)
class PromptTemplates:
    """Template pair keyed by urgency.

    Placeholders: $message, $score, $mood. Rendering uses
    safe_substitute, so a stray "$" in a custom template is left alone.
    """
    urgent: str = URGENT_TEMPLATE
    normal: str = NORMAL_TEMPLATE


class PromptBuilder:
    """Builds the prompt sent to the generative service."""

    def __init__(self, templates: Optional[PromptTemplates] = None):
        self.templates = templates or PromptTemplates()
        self._urgent = Template(self.templates.urgent)
        self._normal = Template(self.templates.normal)

    def build(
        self,
        message: str,
        mood: Union[Mood, str],
        score: int,
        urgent: bool,
    ) -> str:
        """Render the prompt for one message.

        Args:
            message: Raw user message, embedded verbatim
            mood: Mood label (enum or its string value)
            score: Integer sentiment score
            urgent: Selects the crisis template when True

        Returns:
            Prompt string
        """
        mood_label = mood.value if isinstance(mood, Mood) else str(mood)
        template = self._urgent if urgent else self._normal

        prompt = template.safe_substitute(
            message=message,
            score=score,
            mood=mood_label,
        )

        logger.debug(
            "PROMPT_BUILT",
            extra={
                "variant": "urgent" if urgent else "normal",
                "prompt_length": len(prompt),
            }
        )
        return prompt

    def build_for(self, message: str, classification: ClassificationResult) -> str:
        """Render the prompt from a ClassificationResult."""
        return self.build(
            message,
            classification.mood,
            classification.score,
            classification.urgent,
        )
