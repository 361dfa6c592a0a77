"""
Stage 2: Result Decoding.

The server returns the structured object serialised as text. Parse that
text as JSON and decode it strictly into ClassificationResult.
"""

import json

import structlog
from pydantic import ValidationError as PydanticValidationError

from structured_classifier.llm.exceptions import MalformedResponse
from structured_classifier.models.classification import ClassificationResult
from structured_classifier.monitoring.metrics import validation_failures_total

logger = structlog.get_logger(__name__)

EXPECTED_FIELDS = ["label", "reason"]


class Stage2ResultDecoding:
    """
    Stage 2 validator: JSON text -> ClassificationResult.

    Raises MalformedResponse on invalid JSON, non-object JSON, missing,
    extra or non-string fields.
    """

    def validate(self, content: str) -> ClassificationResult:
        """
        Decode content into a ClassificationResult.

        Args:
            content: Message content from Stage 1

        Returns:
            Decoded result

        Raises:
            MalformedResponse: With the underlying parse/validation error
        """
        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as e:
            validation_failures_total.labels(
                stage="stage2", error_type="json_decode_error"
            ).inc()
            raise MalformedResponse(
                f"Content is not valid JSON: {e.msg}",
                raw_content=content,
                parse_error=f"{e.msg} at line {e.lineno} col {e.colno}",
                expected=EXPECTED_FIELDS,
            ) from e

        if not isinstance(parsed, dict):
            validation_failures_total.labels(
                stage="stage2", error_type="not_json_object"
            ).inc()
            raise MalformedResponse(
                f"Content is not a JSON object (got {type(parsed).__name__})",
                raw_content=content,
                expected=EXPECTED_FIELDS,
                found=type(parsed).__name__,
            )

        try:
            result = ClassificationResult.model_validate(parsed)
        except PydanticValidationError as e:
            validation_failures_total.labels(
                stage="stage2", error_type="result_validation_error"
            ).inc()
            error_messages = [
                f"{'.'.join(str(loc) for loc in err['loc']) or 'root'}: {err['msg']}"
                for err in e.errors()
            ]
            raise MalformedResponse(
                f"Content does not match the classification shape: {len(error_messages)} error(s)",
                raw_content=content,
                validation_errors=error_messages,
                expected=EXPECTED_FIELDS,
                found=sorted(parsed),
            ) from e

        logger.debug("Stage 2: Decoded classification result", label=result.label)
        return result
