"""
Abstract base client for chat-completion inference servers.

Defines the interface the classifier uses to talk to a server, so the
transport can be swapped (or faked in tests) without touching request
assembly or response validation.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import structlog


logger = structlog.get_logger(__name__)


class BaseLLMClient(ABC):
    """
    Abstract base class for synchronous chat-completion clients.

    Responsibilities:
    - Send one JSON request to the chat-completions endpoint
    - Return the decoded top-level JSON response
    - Map network, timeout and HTTP status failures to TransportError

    Does NOT handle:
    - Request construction (that's PromptBuilder's job)
    - Content extraction and decoding (that's ResponseValidator's job)
    - Retries: exactly one attempt is made per call
    """

    def __init__(self, base_url: str, timeout: float = 30.0):
        """
        Initialize base client.

        Args:
            base_url: Root URL of the inference server (e.g., http://localhost:1234)
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

        logger.debug(
            "Initialized LLM client",
            client_class=self.__class__.__name__,
            base_url=self.base_url,
            timeout=timeout,
        )

    @abstractmethod
    def complete(
        self, payload: Dict[str, Any], timeout: Optional[float] = None
    ) -> Dict[str, Any]:
        """
        Send a chat-completion request and return the raw JSON response.

        Args:
            payload: Request body as produced by ChatCompletionRequest.to_payload()
            timeout: Per-call timeout in seconds, defaults to the client timeout

        Returns:
            Decoded top-level JSON object

        Raises:
            TransportError: Connection failure or non-2xx status
            TransportTimeout: No answer within the timeout
            MalformedResponse: 2xx body that is not a JSON object
        """
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """
        Check if the inference server is reachable.

        Returns:
            True if the server answers, False otherwise

        Note:
            Must NOT raise.
        """
        pass

    def close(self) -> None:
        """Release held connections. Default implementation does nothing."""
        logger.debug("Closing LLM client", client_class=self.__class__.__name__)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}s)"
        )
