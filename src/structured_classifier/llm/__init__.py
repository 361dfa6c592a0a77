"""
LLM layer: schema, request assembly and transport.

Components:
- build_schema: JSON Schema for a closed label set
- PromptBuilder / build_request: chat-completions request assembly
- BaseLLMClient: Abstract base class for chat-completion clients
- LMStudioClient: httpx implementation for OpenAI-compatible servers
- exceptions: classifier error hierarchy
"""

from structured_classifier.llm.base_client import BaseLLMClient
from structured_classifier.llm.lmstudio_client import LMStudioClient
from structured_classifier.llm.prompt_builder import PromptBuilder, build_request
from structured_classifier.llm.schema_builder import build_schema
from structured_classifier.llm.exceptions import (
    ClassifierError,
    InvalidInput,
    TransportError,
    TransportTimeout,
    MalformedResponse,
)

__all__ = [
    "BaseLLMClient",
    "LMStudioClient",
    "PromptBuilder",
    "build_request",
    "build_schema",
    "ClassifierError",
    "InvalidInput",
    "TransportError",
    "TransportTimeout",
    "MalformedResponse",
]
