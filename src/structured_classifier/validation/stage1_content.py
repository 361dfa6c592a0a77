"""
Stage 1: Content Extraction.

Locate ``choices[0].message.content`` in the raw chat-completions response.
Hard fail: a missing content field is never replaced by a default.
"""

from typing import Any

import structlog

from structured_classifier.llm.exceptions import MalformedResponse
from structured_classifier.monitoring.metrics import validation_failures_total

logger = structlog.get_logger(__name__)


def _fail(error_type: str, message: str, found: Any = None) -> MalformedResponse:
    validation_failures_total.labels(stage="stage1", error_type=error_type).inc()
    return MalformedResponse(
        message,
        expected=["choices[0].message.content"],
        found=found,
    )


class Stage1ContentExtraction:
    """
    Stage 1 validator: pull the message content string out of the response.

    Raises MalformedResponse if any level of the path is missing or of the
    wrong type.
    """

    def validate(self, raw: Any) -> str:
        """
        Extract the first choice's message content.

        Args:
            raw: Decoded top-level JSON response

        Returns:
            Content string (the serialised classification object)

        Raises:
            MalformedResponse: If the content field is absent or not a string
        """
        if not isinstance(raw, dict):
            raise _fail(
                "not_json_object",
                f"Response is not a JSON object (got {type(raw).__name__})",
                found=type(raw).__name__,
            )

        choices = raw.get("choices")
        if not isinstance(choices, list) or not choices:
            raise _fail("missing_choices", "Response has no choices", found=sorted(raw))

        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        if not isinstance(message, dict):
            raise _fail("missing_message", "First choice has no message field")

        content = message.get("content")
        if content is None:
            raise _fail("missing_content", "missing content field", found=sorted(message))
        if not isinstance(content, str):
            raise _fail(
                "content_not_string",
                f"Content field is not a string (got {type(content).__name__})",
                found=type(content).__name__,
            )

        logger.debug("Stage 1: Extracted message content", content_length=len(content))
        return content
