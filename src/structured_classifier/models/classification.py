"""
Classification data models.

ClassificationRequest and ClassifierConfig describe what the caller asks for;
ClassificationResult is what the model must answer with. The result model is
strict: both fields required, no extra keys, no type coercion.
"""

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_BASE_URL = "http://localhost:1234"
DEFAULT_CHAT_ENDPOINT = "/v1/chat/completions"
DEFAULT_MODEL = "gemma-3-270m-it"
DEFAULT_TEMPERATURE = 0.2
DEFAULT_TIMEOUT = 30.0
DEFAULT_SCHEMA_NAME = "classification"


class ClassifierConfig(BaseModel):
    """
    Explicit configuration for one classification call.

    Passed into the request assembler and the transport instead of
    process-wide constants, so the core stays environment-independent.
    """
    model_config = ConfigDict(frozen=True)

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Inference server root URL")
    endpoint: str = Field(default=DEFAULT_CHAT_ENDPOINT, description="Chat-completions path")
    model: str = Field(default=DEFAULT_MODEL, min_length=1, description="Model identifier")
    temperature: float = Field(
        default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0, description="Sampling temperature"
    )
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds")
    schema_name: str = Field(
        default=DEFAULT_SCHEMA_NAME, min_length=1, description="Name attached to the JSON schema"
    )
    strict_labels: bool = Field(
        default=False,
        description="Reject a returned label that is not one of the requested labels"
    )


class ClassificationRequest(BaseModel):
    """
    A single classification job: text, the closed label set and model parameters.

    Input rules (non-empty text, non-empty unique labels) are enforced by the
    request assembler, which raises InvalidInput rather than a pydantic error.
    """
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Free text to classify")
    labels: list[str] = Field(..., description="Candidate labels, in prompt order")
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    model: str = Field(default=DEFAULT_MODEL)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    def to_config(self, base: ClassifierConfig | None = None) -> ClassifierConfig:
        """Overlay this request's model parameters on a base config."""
        base = base or ClassifierConfig()
        return base.model_copy(
            update={
                "model": self.model,
                "temperature": self.temperature,
                "timeout": self.timeout,
            }
        )


class ClassificationResult(BaseModel):
    """
    The model's answer: exactly one label and a short justification.

    The label is constrained by the schema sent to the server. It is not
    compared with the requested labels unless strict label checking is on.
    """
    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)

    label: str = Field(..., description="Chosen label")
    reason: str = Field(..., description="Brief justification")
