"""
Response Validator: staged validation of a chat-completions response.

- Stage 1: Content extraction (hard fail)
- Stage 2: JSON decode into ClassificationResult (hard fail)
- Stage 3: Label membership (hard fail, only when strict label checking is on)

Every failure is a MalformedResponse; nothing is defaulted.
"""

from typing import Any, Optional, Sequence

import structlog

from structured_classifier.models.classification import ClassificationResult
from .stage1_content import Stage1ContentExtraction
from .stage2_decode import Stage2ResultDecoding
from .stage3_label_check import Stage3LabelCheck

logger = structlog.get_logger(__name__)


class ResponseValidator:
    """
    Turn a raw server response into a ClassificationResult.

    With ``strict_labels=False`` (the default) the returned label is trusted:
    the server enforces the enum, and a server ignoring the schema can return
    a label outside the requested set undetected.
    """

    def __init__(self, strict_labels: bool = False):
        """
        Initialize response validator.

        Args:
            strict_labels: Reject labels outside the requested set
        """
        self.strict_labels = strict_labels
        self.stage1 = Stage1ContentExtraction()
        self.stage2 = Stage2ResultDecoding()
        self.stage3 = Stage3LabelCheck()

    def validate(
        self,
        raw: Any,
        labels: Optional[Sequence[str]] = None,
        strict_labels: Optional[bool] = None,
    ) -> ClassificationResult:
        """
        Run the validation stages.

        Args:
            raw: Decoded top-level JSON response
            labels: Requested labels (used only for strict label checking)
            strict_labels: Per-call override of the instance setting

        Returns:
            Validated ClassificationResult

        Raises:
            MalformedResponse: If any stage fails
        """
        strict = self.strict_labels if strict_labels is None else strict_labels

        content = self.stage1.validate(raw)
        result = self.stage2.validate(content)

        if strict and labels:
            self.stage3.validate(result, labels)

        logger.info("Response validated", label=result.label, strict_labels=strict)
        return result


def parse_response(
    raw: Any,
    labels: Optional[Sequence[str]] = None,
    strict_labels: bool = False,
) -> ClassificationResult:
    """Validate a raw chat-completions response with default stages."""
    return ResponseValidator(strict_labels=strict_labels).validate(raw, labels)
