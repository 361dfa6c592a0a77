"""
Custom exceptions for the structured classifier.

Three failure kinds are kept distinct so the caller can decide what to do
with each of them:

- InvalidInput: the caller's text or labels are unusable (no network call made)
- TransportError: the inference server could not be reached or refused the request
- MalformedResponse: the server answered, but not with a usable classification

The classifier never recovers from any of these itself.
"""

from typing import Any


class ClassifierError(Exception):
    """
    Base exception for all classifier errors.

    Catch this to handle any classification failure with a single
    except clause.
    """
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidInput(ClassifierError):
    """
    Raised when the text or label set cannot be classified.

    Examples:
    - Empty or whitespace-only text
    - Empty label set
    - Blank or duplicate labels

    Detected before any request is sent.
    """
    pass


class TransportError(ClassifierError):
    """
    Raised when the exchange with the inference server fails.

    Includes connection refused, DNS failures, network errors and non-2xx
    HTTP status codes. The underlying httpx exception is chained as
    ``__cause__``.
    """
    pass


class TransportTimeout(TransportError):
    """
    Raised when the server does not answer within the configured timeout.
    """
    pass


class MalformedResponse(ClassifierError):
    """
    Raised when the server answered but the content is not a classification.

    Examples:
    - choices[0].message.content missing
    - content is not valid JSON
    - label or reason missing, extra fields present
    - label outside the requested set (only with strict label checking)
    """

    def __init__(
        self,
        message: str,
        raw_content: str | None = None,
        parse_error: str | None = None,
        validation_errors: list[str] | None = None,
        expected: list[str] | None = None,
        found: Any | None = None,
    ):
        """
        Initialize malformed response error.

        Args:
            message: Error description
            raw_content: Offending content (first 500 chars kept for debugging)
            parse_error: Original decode error message
            validation_errors: Field-level validation messages
            expected: Fields or values that were expected
            found: What was actually found
        """
        details: dict[str, Any] = {}
        if raw_content:
            details["content_snippet"] = raw_content[:500]
        if parse_error:
            details["parse_error"] = parse_error
        if validation_errors:
            details["validation_errors"] = validation_errors
        if expected:
            details["expected"] = expected
        if found is not None:
            details["found"] = found

        super().__init__(message, details)
