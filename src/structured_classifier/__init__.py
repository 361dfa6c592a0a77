"""
Structured Classifier for locally hosted LLM inference servers.

Classifies free text into exactly one of a closed set of labels by
constraining an OpenAI-compatible chat-completions endpoint (LM Studio) to a
label-derived JSON Schema, then decoding and validating the answer.

Architecture: PromptBuilder (schema + request) -> LMStudioClient (httpx)
-> ResponseValidator (staged validation)
"""

from structured_classifier.classifier import StructuredClassifier, classify
from structured_classifier.llm.exceptions import (
    ClassifierError,
    InvalidInput,
    MalformedResponse,
    TransportError,
    TransportTimeout,
)
from structured_classifier.llm.prompt_builder import build_request
from structured_classifier.llm.schema_builder import build_schema
from structured_classifier.models.classification import (
    ClassificationRequest,
    ClassificationResult,
    ClassifierConfig,
)
from structured_classifier.validation.pipeline import parse_response

__version__ = "0.1.0"

__all__ = [
    "StructuredClassifier",
    "classify",
    "build_schema",
    "build_request",
    "parse_response",
    "ClassifierConfig",
    "ClassificationRequest",
    "ClassificationResult",
    "ClassifierError",
    "InvalidInput",
    "TransportError",
    "TransportTimeout",
    "MalformedResponse",
]
