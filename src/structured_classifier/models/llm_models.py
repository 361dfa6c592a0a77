"""
Wire models for the OpenAI-compatible chat-completions request.

These models are internal to the LLM layer. They mirror the request body
the inference server expects and are serialised with ``to_payload()``.
"""

from typing import Any, Dict, Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """One role-tagged message."""
    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user", "assistant"]
    content: str


class NamedJsonSchema(BaseModel):
    """Named schema block of a ``json_schema`` response format."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., description="Schema name reported to the server")
    schema_: Dict[str, Any] = Field(..., alias="schema", description="JSON Schema object")


class ResponseFormat(BaseModel):
    """Structured-output constraint attached to the request."""
    model_config = ConfigDict(frozen=True)

    type: Literal["json_schema"] = "json_schema"
    json_schema: NamedJsonSchema


class ChatCompletionRequest(BaseModel):
    """
    Complete chat-completions request body.

    Built by PromptBuilder, sent as-is by the transport.
    """
    model_config = ConfigDict(frozen=True)

    model: str = Field(..., description="Model identifier (e.g., 'gemma-3-270m-it')")
    temperature: float = Field(..., ge=0.0, le=2.0, description="Sampling temperature")
    response_format: ResponseFormat
    messages: list[ChatMessage] = Field(..., min_length=1)

    @property
    def output_schema(self) -> Dict[str, Any]:
        """The embedded JSON schema."""
        return self.response_format.json_schema.schema_

    @property
    def system_message(self) -> str:
        return next(m.content for m in self.messages if m.role == "system")

    @property
    def user_message(self) -> str:
        return next(m.content for m in self.messages if m.role == "user")

    def to_payload(self) -> Dict[str, Any]:
        """Serialise to the JSON-ready dict sent over the wire."""
        return self.model_dump(by_alias=True, mode="json")
