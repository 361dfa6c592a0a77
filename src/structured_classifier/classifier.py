"""
Structured classifier: one schema-constrained classification per call.

Composes PromptBuilder -> BaseLLMClient -> ResponseValidator. Exactly one
request is sent per call; every failure reaches the caller unchanged.
"""

import time
from typing import Optional, Sequence

import structlog

from structured_classifier.llm.base_client import BaseLLMClient
from structured_classifier.llm.exceptions import (
    InvalidInput,
    MalformedResponse,
    TransportError,
)
from structured_classifier.llm.lmstudio_client import LMStudioClient
from structured_classifier.llm.prompt_builder import PromptBuilder
from structured_classifier.models.classification import (
    ClassificationRequest,
    ClassificationResult,
    ClassifierConfig,
)
from structured_classifier.monitoring.metrics import (
    classification_requests_total,
    classified_labels_total,
)
from structured_classifier.validation.pipeline import ResponseValidator


logger = structlog.get_logger(__name__)


class StructuredClassifier:
    """
    Classify text into exactly one of a closed set of labels.

    A client is created from the config when none is given; the classifier
    then owns it and closes it in ``close()``. A per-call config changes the
    request parameters and timeout, not the server the client points at.
    """

    def __init__(
        self,
        config: Optional[ClassifierConfig] = None,
        client: Optional[BaseLLMClient] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        validator: Optional[ResponseValidator] = None,
    ):
        self.config = config or ClassifierConfig()
        self._owns_client = client is None
        self.client = client or LMStudioClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            endpoint=self.config.endpoint,
        )
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.validator = validator or ResponseValidator(strict_labels=self.config.strict_labels)

    def classify(
        self,
        text: str,
        labels: Sequence[str],
        config: Optional[ClassifierConfig] = None,
    ) -> ClassificationResult:
        """
        Classify ``text`` into one of ``labels``.

        Args:
            text: Text to classify
            labels: Closed label set, in prompt order
            config: Per-call override of the instance config

        Returns:
            ClassificationResult

        Raises:
            InvalidInput: Empty text or unusable labels (nothing sent)
            TransportError: Connection failure, timeout or non-2xx status
            MalformedResponse: Server answered without a usable classification
        """
        config = config or self.config
        log = logger.bind(model=config.model, label_count=len(labels or ()))
        start_time = time.time()

        try:
            request = self.prompt_builder.build_request(text, labels, config)
            raw = self.client.complete(request.to_payload(), timeout=config.timeout)
            result = self.validator.validate(
                raw, labels=labels, strict_labels=config.strict_labels
            )
        except InvalidInput as e:
            classification_requests_total.labels(outcome="invalid_input").inc()
            log.warning("Classification rejected", error=e.message)
            raise
        except TransportError as e:
            classification_requests_total.labels(outcome="transport_error").inc()
            log.error("Classification transport failure", error=e.message, details=e.details)
            raise
        except MalformedResponse as e:
            classification_requests_total.labels(outcome="malformed_response").inc()
            log.error("Classification response malformed", error=e.message, details=e.details)
            raise

        classification_requests_total.labels(outcome="success").inc()
        classified_labels_total.labels(label=result.label).inc()
        log.info(
            "Classification completed",
            label=result.label,
            latency_ms=int((time.time() - start_time) * 1000),
        )
        return result

    def classify_request(self, request: ClassificationRequest) -> ClassificationResult:
        """Classify a ClassificationRequest, overlaying its model parameters."""
        return self.classify(request.text, request.labels, request.to_config(self.config))

    def close(self) -> None:
        """Close the client if this classifier created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def classify(
    text: str,
    labels: Sequence[str],
    config: Optional[ClassifierConfig] = None,
) -> ClassificationResult:
    """One-shot classification with a throwaway client."""
    with StructuredClassifier(config=config) as classifier:
        return classifier.classify(text, labels)
