"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
from typing import Any, Callable, Dict, Optional

import httpx
import pytest
import structlog

from structured_classifier.config import Settings
from structured_classifier.llm.lmstudio_client import LMStudioClient
from structured_classifier.models.classification import ClassifierConfig


@pytest.fixture(scope="session", autouse=True)
def configure_test_logging():
    """Route structlog through stdlib logging so stdout stays clean and caplog works."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing."""
    return Settings(
        APP_NAME="Structured Classifier (Test)",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        LMSTUDIO_BASE_URL="http://localhost:1234",
        LMSTUDIO_MODEL="gemma-3-270m-it",
        LMSTUDIO_TIMEOUT=30,
        LLM_TEMPERATURE=0.2,
        STRICT_LABEL_CHECK=False,
    )


@pytest.fixture
def classifier_config() -> ClassifierConfig:
    """Default classifier config pointing at a local server."""
    return ClassifierConfig(base_url="http://lmstudio.test")


@pytest.fixture
def sample_labels() -> list[str]:
    return ["feature", "bug", "confusion"]


@pytest.fixture
def sample_text() -> str:
    return (
        "things really get weird, though not particularly scary: "
        "the movie is all portent and no content."
    )


@pytest.fixture
def make_completion() -> Callable[..., Dict[str, Any]]:
    """Factory fixture for chat-completions response bodies.

    Usage:
        def test_something(make_completion):
            raw = make_completion({"label": "bug", "reason": "x"})
    """
    def _create(content: Any, model: str = "gemma-3-270m-it") -> Dict[str, Any]:
        if not isinstance(content, str):
            content = json.dumps(content)
        return {
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "model": model,
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": content},
                    "finish_reason": "stop",
                }
            ],
            "usage": {"prompt_tokens": 60, "completion_tokens": 20, "total_tokens": 80},
        }

    return _create


@pytest.fixture
def mock_lmstudio() -> Callable[..., tuple[LMStudioClient, list[httpx.Request]]]:
    """Factory fixture for an LMStudioClient backed by httpx.MockTransport.

    Returns the client and the list of requests it received.

    Usage:
        def test_something(mock_lmstudio):
            client, requests = mock_lmstudio(json_body={...})
            client, requests = mock_lmstudio(status_code=500, text="boom")
            client, requests = mock_lmstudio(error=httpx.ConnectError)
            client, requests = mock_lmstudio(content=b"\xff")
    """
    clients: list[LMStudioClient] = []

    def _create(
        json_body: Any = None,
        status_code: int = 200,
        text: Optional[str] = None,
        content: Optional[bytes] = None,
        error: Optional[type[httpx.RequestError]] = None,
    ) -> tuple[LMStudioClient, list[httpx.Request]]:
        received: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            received.append(request)
            if error is not None:
                raise error("simulated failure", request=request)
            if text is not None:
                return httpx.Response(status_code, text=text)
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=json_body)

        client = LMStudioClient(
            base_url="http://lmstudio.test",
            timeout=5.0,
            transport=httpx.MockTransport(handler),
        )
        clients.append(client)
        return client, received

    yield _create

    for client in clients:
        client.close()
