# =============================================================================
# core/models.py  -  Request and outcome shapes
# =============================================================================
#
# Two kinds of value flow through the client:
#
#   GammaRequest  ->  what to call (path, method, query, body, response kind)
#   Outcome       ->  what came back, as exactly one of:
#                       JsonResult | BinaryResult | EmptyResult | Failure
#
# Both are built fresh for every tool call and never mutated afterwards, so
# the dataclasses are frozen.
#
# WHY A TAGGED UNION INSTEAD OF EXCEPTIONS FOR HTTP ERRORS?
#   A 404 from Gamma is an ordinary answer, not a bug in this process.  The
#   client returns it as a Failure value and the tool layer decides how to
#   present it.  Only things that stop us from getting an answer at all
#   (missing key, network down, garbage body) are raised.
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

# Query values accepted by GammaRequest.  None means "leave the key out".
QueryValue = Union[str, int, float, bool, None]


class ResponseKind(str, Enum):
    """How a successful response body should be read."""

    JSON = "json"
    BINARY = "binary"


@dataclass(frozen=True)
class GammaRequest:
    """One logical Gamma API call."""

    path: str                                   # "/v0.2/generations"
    method: Optional[str] = None                # None -> inferred, see http_method
    params: dict[str, QueryValue] = field(default_factory=dict)
    body: Any = None                            # JSON-serializable, None = no body
    response_kind: ResponseKind = ResponseKind.JSON

    @property
    def http_method(self) -> str:
        """The explicit method, else POST when there is a body, else GET."""
        if self.method:
            return self.method.upper()
        return "POST" if self.body is not None else "GET"

    @property
    def accept(self) -> str:
        if self.response_kind is ResponseKind.BINARY:
            return "*/*"
        return "application/json"


# -----------------------------------------------------------------------------
# Outcomes
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class JsonResult:
    payload: Any


@dataclass(frozen=True)
class BinaryResult:
    content: bytes


@dataclass(frozen=True)
class EmptyResult:
    """HTTP 204: the call succeeded and there is nothing to read."""


@dataclass(frozen=True)
class Failure:
    """A non-2xx response, with the decoded error body when there was one."""

    status_code: int
    reason: str
    detail: Any = None


Outcome = Union[JsonResult, BinaryResult, EmptyResult, Failure]
