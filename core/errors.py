"""
Errors raised while talking to the Gamma API.

Non-2xx responses are not raised by the client: they come back as a
``Failure`` outcome and the tool layer turns them into ``UpstreamError``.
"""

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.models import Failure


class GammaError(Exception):
    """Base class for every error this package raises."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(GammaError):
    """Raised when a required setting (the API key) is missing."""


class TransportError(GammaError):
    """Raised when the HTTP call could not complete (DNS, refused, timeout)."""


class MalformedResponseError(GammaError):
    """Raised when a successful response body is not the JSON we expected."""


class UpstreamError(GammaError):
    """Raised at the tool boundary for a non-2xx Gamma API response."""

    def __init__(self, failure: "Failure") -> None:
        self.failure = failure
        message = f"Gamma API request failed: {failure.status_code} {failure.reason}"
        if failure.detail is not None:
            message += f" - {json.dumps(failure.detail)}"
        super().__init__(message)
