"""
Request assembler for classification calls.

Responsible for:
- Rejecting unusable input before anything is sent
- Rendering the system and user prompts (Jinja2 templates)
- Attaching the label-derived JSON Schema as a structured-output constraint
- Constructing the complete ChatCompletionRequest

Pure construction: nothing here touches the network.
"""

import json
from pathlib import Path
from typing import Optional, Sequence

import structlog
from jinja2 import DictLoader, Environment, FileSystemLoader

from structured_classifier.llm.exceptions import InvalidInput
from structured_classifier.llm.schema_builder import build_schema
from structured_classifier.models.classification import ClassifierConfig
from structured_classifier.models.llm_models import (
    ChatCompletionRequest,
    ChatMessage,
    NamedJsonSchema,
    ResponseFormat,
)


logger = structlog.get_logger(__name__)

SYSTEM_TEMPLATE_NAME = "system_prompt.txt"
USER_TEMPLATE_NAME = "user_prompt_template.txt"

DEFAULT_TEMPLATES = {
    SYSTEM_TEMPLATE_NAME: (
        "You are a careful text classifier. "
        "Choose exactly one label from the list and explain briefly."
    ),
    USER_TEMPLATE_NAME: "Labels: {{ labels_json }}\nText:\n{{ text }}",
}


def validate_inputs(text: str, labels: Sequence[str]) -> None:
    """
    Check that text and labels can be classified.

    Raises:
        InvalidInput: Empty/whitespace text, empty label set, blank or
            duplicate labels
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidInput(
            "Text to classify is empty or whitespace-only",
            details={"field": "text"}
        )
    if not labels:
        raise InvalidInput(
            "Label set is empty; at least one label is required",
            details={"field": "labels"}
        )

    seen: set[str] = set()
    for index, label in enumerate(labels):
        if not isinstance(label, str) or not label.strip():
            raise InvalidInput(
                f"Label at position {index} is blank",
                details={"field": "labels", "index": index}
            )
        if label in seen:
            raise InvalidInput(
                f"Duplicate label: {label!r}",
                details={"field": "labels", "label": label}
            )
        seen.add(label)


class PromptBuilder:
    """
    Build chat-completion requests for a text and a closed label set.

    Templates default to the packaged prompts. Pass ``templates_dir`` to load
    ``system_prompt.txt`` and ``user_prompt_template.txt`` from disk instead;
    the user template receives ``labels``, ``labels_json`` and ``text``.
    """

    def __init__(self, templates_dir: Optional[Path] = None):
        """
        Initialize prompt builder.

        Args:
            templates_dir: Directory with prompt templates, or None for defaults
        """
        self.templates_dir = Path(templates_dir) if templates_dir else None

        loader = (
            FileSystemLoader(str(self.templates_dir))
            if self.templates_dir
            else DictLoader(DEFAULT_TEMPLATES)
        )
        self.jinja_env = Environment(
            loader=loader,
            autoescape=False,  # Prompts, not HTML: text must pass through verbatim
            keep_trailing_newline=False,
        )

        try:
            self.system_template = self.jinja_env.get_template(SYSTEM_TEMPLATE_NAME)
            self.user_template = self.jinja_env.get_template(USER_TEMPLATE_NAME)
        except Exception as e:
            logger.error(
                "Failed to load prompt templates",
                templates_dir=str(self.templates_dir),
                error=str(e)
            )
            raise

        logger.debug(
            "PromptBuilder initialized",
            templates_dir=str(self.templates_dir) if self.templates_dir else "default"
        )

    def build_system_prompt(self) -> str:
        """Render the fixed system instruction."""
        return self.system_template.render().strip()

    def build_user_prompt(self, text: str, labels: Sequence[str]) -> str:
        """Render the user message with the label list and the text verbatim."""
        return self.user_template.render(
            labels=list(labels),
            labels_json=json.dumps(list(labels), ensure_ascii=False),
            text=text,
        )

    def build_request(
        self,
        text: str,
        labels: Sequence[str],
        config: Optional[ClassifierConfig] = None,
    ) -> ChatCompletionRequest:
        """
        Build the complete chat-completion request.

        Args:
            text: Text to classify (embedded untouched)
            labels: Closed label set, in prompt order
            config: Model parameters; defaults to ClassifierConfig()

        Returns:
            ChatCompletionRequest ready to be sent

        Raises:
            InvalidInput: If text or labels are unusable
        """
        validate_inputs(text, labels)
        config = config or ClassifierConfig()

        request = ChatCompletionRequest(
            model=config.model,
            temperature=config.temperature,
            response_format=ResponseFormat(
                json_schema=NamedJsonSchema(
                    name=config.schema_name,
                    schema=build_schema(labels),
                )
            ),
            messages=[
                ChatMessage(role="system", content=self.build_system_prompt()),
                ChatMessage(role="user", content=self.build_user_prompt(text, labels)),
            ],
        )

        logger.debug(
            "Built classification request",
            model=config.model,
            temperature=config.temperature,
            label_count=len(labels),
            text_length=len(text),
        )
        return request


_default_builder: Optional[PromptBuilder] = None


def build_request(
    text: str,
    labels: Sequence[str],
    config: Optional[ClassifierConfig] = None,
) -> ChatCompletionRequest:
    """Build a request with the packaged prompt templates."""
    global _default_builder
    if _default_builder is None:
        _default_builder = PromptBuilder()
    return _default_builder.build_request(text, labels, config)
