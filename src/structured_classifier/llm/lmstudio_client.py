"""
LM Studio client for OpenAI-compatible chat completions.

Communicates with a locally hosted server using a synchronous httpx Client.
Supports:
- Structured output via response_format json_schema
- Exactly one attempt per request (no retry)
- Health check and model listing via GET /v1/models
"""

import json
import time
from typing import Any, Dict, Optional

import httpx
import structlog

from structured_classifier.llm.base_client import BaseLLMClient
from structured_classifier.llm.exceptions import (
    MalformedResponse,
    TransportError,
    TransportTimeout,
)
from structured_classifier.models.classification import (
    DEFAULT_BASE_URL,
    DEFAULT_CHAT_ENDPOINT,
    DEFAULT_TIMEOUT,
)
from structured_classifier.monitoring.metrics import llm_latency_seconds


logger = structlog.get_logger(__name__)


class LMStudioClient(BaseLLMClient):
    """
    Chat-completions client for LM Studio (or any OpenAI-compatible server).

    API Endpoints:
    - POST /v1/chat/completions: Generate a completion
    - GET /v1/models: List loaded models

    The underlying httpx.Client is created lazily and reused across calls;
    this does not change the single-shot behaviour of each call.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        endpoint: str = DEFAULT_CHAT_ENDPOINT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize LM Studio client.

        Args:
            base_url: Server URL
            timeout: Request timeout in seconds
            endpoint: Chat-completions path
            transport: Optional httpx transport (e.g., httpx.MockTransport in tests)
        """
        super().__init__(base_url, timeout)
        self.endpoint = "/" + endpoint.lstrip("/")
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
            logger.debug("Created new httpx Client", base_url=self.base_url)
        return self._client

    def complete(
        self, payload: Dict[str, Any], timeout: Optional[float] = None
    ) -> Dict[str, Any]:
        """
        POST the payload to the chat-completions endpoint.

        Response (relevant part):
        {
            "choices": [
                {"message": {"role": "assistant", "content": "{\\"label\\": ...}"}}
            ]
        }
        """
        model = payload.get("model", "unknown")
        timeout = self.timeout if timeout is None else timeout
        start_time = time.time()

        logger.info(
            "Sending chat completion request",
            url=f"{self.base_url}{self.endpoint}",
            model=model,
            temperature=payload.get("temperature"),
        )

        try:
            response = self._get_client().post(self.endpoint, json=payload, timeout=timeout)
            response.raise_for_status()

        except httpx.TimeoutException as e:
            llm_latency_seconds.labels(model=model, success="false").observe(
                time.time() - start_time
            )
            logger.warning("Chat completion request timeout", timeout=timeout, error=str(e))
            raise TransportTimeout(
                f"Request timeout after {timeout}s",
                details={"timeout": timeout, "error_type": type(e).__name__}
            ) from e

        except httpx.HTTPStatusError as e:
            llm_latency_seconds.labels(model=model, success="false").observe(
                time.time() - start_time
            )
            status_code = e.response.status_code
            logger.error(
                "Inference server HTTP error",
                status_code=status_code,
                error_text=e.response.text[:300],
            )
            raise TransportError(
                f"Inference server returned HTTP {status_code}",
                details={"status_code": status_code, "error": e.response.text[:500]}
            ) from e

        except httpx.RequestError as e:
            llm_latency_seconds.labels(model=model, success="false").observe(
                time.time() - start_time
            )
            logger.warning("Inference server network error", error=str(e))
            raise TransportError(
                f"Network error: {str(e)}",
                details={"error_type": type(e).__name__, "url": str(e.request.url)}
            ) from e

        latency = time.time() - start_time
        llm_latency_seconds.labels(model=model, success="true").observe(latency)

        data = self._decode_json(response)

        if not isinstance(data, dict):
            raise MalformedResponse(
                f"Server response is not a JSON object (got {type(data).__name__})",
                raw_content=response.text,
                expected=["object"],
                found=type(data).__name__,
            )

        logger.info(
            "Chat completion successful",
            model=data.get("model", model),
            latency_ms=int(latency * 1000),
            usage=data.get("usage"),
        )
        return data

    def health_check(self) -> bool:
        """
        Check server health via GET /v1/models.

        Returns True if the server responds with 2xx, False otherwise.
        """
        try:
            response = self._get_client().get("/v1/models", timeout=5.0)
            response.raise_for_status()
            logger.debug("Inference server health check passed")
            return True
        except httpx.HTTPError as e:
            logger.warning("Inference server health check failed", error=str(e))
            return False

    def list_models(self) -> list[str]:
        """
        List model identifiers via GET /v1/models.

        Returns:
            List of model ids (e.g., ["gemma-3-270m-it"])
        """
        try:
            response = self._get_client().get("/v1/models", timeout=10.0)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Failed to list models", error=str(e))
            raise TransportError(
                f"Failed to list models: {str(e)}",
                details={"error_type": type(e).__name__}
            ) from e

        data = self._decode_json(response)
        entries = data.get("data") if isinstance(data, dict) else None
        if not isinstance(entries, list) or not all(isinstance(m, dict) for m in entries):
            raise MalformedResponse(
                "Model list is not an object with a list of model objects under 'data'",
                raw_content=response.text,
                expected=["data[].id"],
                found=type(entries if isinstance(data, dict) else data).__name__,
            )

        models = [m["id"] for m in entries if isinstance(m.get("id"), str)]
        logger.debug("Listed available models", count=len(models), models=models)
        return models

    def _decode_json(self, response: httpx.Response) -> Any:
        """Decode a 2xx body, reporting undecodable bytes or invalid JSON as MalformedResponse."""
        try:
            return response.json()
        except json.JSONDecodeError as e:
            logger.error("Failed to parse server response JSON", error=str(e))
            raise MalformedResponse(
                "Server response body is not valid JSON",
                raw_content=response.text,
                parse_error=f"{e.msg} at line {e.lineno} col {e.colno}",
            ) from e
        except UnicodeDecodeError as e:
            logger.error("Server response body is not valid text", error=str(e))
            raise MalformedResponse(
                "Server response body is not valid UTF-8",
                raw_content=response.content.decode("utf-8", errors="replace"),
                parse_error=str(e),
            ) from e

    def close(self) -> None:
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            self._client.close()
            logger.debug("Closed LM Studio client connection")
