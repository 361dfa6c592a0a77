"""
Pydantic data models for the structured classifier.

Includes:
- Classification models (ClassifierConfig, ClassificationRequest, ClassificationResult)
- Wire models (ChatMessage, ChatCompletionRequest and its response_format parts)
"""

from structured_classifier.models.classification import (
    ClassifierConfig,
    ClassificationRequest,
    ClassificationResult,
)
from structured_classifier.models.llm_models import (
    ChatMessage,
    NamedJsonSchema,
    ResponseFormat,
    ChatCompletionRequest,
)

__all__ = [
    # Classification models
    "ClassifierConfig",
    "ClassificationRequest",
    "ClassificationResult",
    # Wire models
    "ChatMessage",
    "NamedJsonSchema",
    "ResponseFormat",
    "ChatCompletionRequest",
]
