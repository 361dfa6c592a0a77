"""
Stage 3: Label Membership (opt-in).

By default the client trusts the server to enforce the label enum. When
strict label checking is enabled, the decoded result is validated against
the same JSON Schema that was sent, so an out-of-set label is reported as
MalformedResponse.
"""

from typing import Sequence

import structlog
from jsonschema import Draft7Validator

from structured_classifier.llm.exceptions import MalformedResponse
from structured_classifier.llm.schema_builder import build_schema
from structured_classifier.models.classification import ClassificationResult
from structured_classifier.monitoring.metrics import validation_failures_total

logger = structlog.get_logger(__name__)


class Stage3LabelCheck:
    """Stage 3 validator: returned label must be one of the requested labels."""

    def validate(self, result: ClassificationResult, labels: Sequence[str]) -> None:
        """
        Validate the result against the request's output schema.

        Raises:
            MalformedResponse: If the label is not in ``labels``
        """
        validator = Draft7Validator(build_schema(labels))
        errors = list(validator.iter_errors(result.model_dump()))

        if errors:
            validation_failures_total.labels(
                stage="stage3", error_type="label_not_in_set"
            ).inc()
            error_messages = [
                f"{'.'.join(str(p) for p in error.path) or 'root'}: {error.message}"
                for error in errors[:10]
            ]
            logger.warning(
                "Server returned a label outside the requested set",
                label=result.label,
                labels=list(labels),
            )
            raise MalformedResponse(
                f"Label {result.label!r} is not one of the requested labels",
                validation_errors=error_messages,
                expected=list(labels),
                found=result.label,
            )

        logger.debug("Stage 3: Label is in the requested set", label=result.label)
