# =============================================================================
# core/gamma_client.py  -  HTTP adapter for the Gamma Generations API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   GammaClient.execute() turns a GammaRequest into exactly one HTTP call and
#   normalize_response() turns the httpx.Response into an Outcome.
#
# THE FLOW:
#   1. Build the absolute URL (base URL + path) and drop unset query values
#   2. Add headers: X-API-KEY, Accept, and Content-Type when there is a body
#   3. Send the request (one attempt, no retries)
#   4. Classify the response:
#        non-2xx  -> Failure (error body decoded if it is JSON)
#        204      -> EmptyResult
#        binary   -> BinaryResult
#        else     -> JsonResult (invalid JSON raises MalformedResponseError)
#
# AUTH:
#   The public Gamma API expects the key in an X-API-KEY header and serves
#   the generation endpoints under /v0.2.  Bearer tokens are not accepted
#   there, so this client only speaks the X-API-KEY dialect.
# =============================================================================

import json
import logging
from typing import Any, Optional

import httpx

from core.config import Settings
from core.errors import MalformedResponseError, TransportError
from core.models import (
    BinaryResult,
    EmptyResult,
    Failure,
    GammaRequest,
    JsonResult,
    Outcome,
    QueryValue,
    ResponseKind,
)

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-KEY"


def _query_value(value: QueryValue) -> str:
    # JSON-style booleans: expand=true, not expand=True
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(params: dict[str, QueryValue]) -> dict[str, str]:
    """Stringify query values, leaving out keys whose value is None."""
    return {key: _query_value(value) for key, value in params.items() if value is not None}


def build_url(base_url: str, path: str) -> httpx.URL:
    """Resolve ``path`` against ``base_url`` the way a browser resolves a link."""
    return httpx.URL(base_url).join(path)


def _read_error_detail(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        logger.warning("Failed to parse Gamma API error payload: %s", exc)
        return None


def normalize_response(response: httpx.Response, kind: ResponseKind) -> Outcome:
    """Classify a finished response into one of the Outcome variants."""
    if not response.is_success:
        return Failure(
            status_code=response.status_code,
            reason=response.reason_phrase,
            detail=_read_error_detail(response),
        )

    if response.status_code == httpx.codes.NO_CONTENT:
        return EmptyResult()

    if kind is ResponseKind.BINARY:
        return BinaryResult(content=response.content)

    try:
        return JsonResult(payload=response.json())
    except ValueError as exc:
        raise MalformedResponseError(
            f"Gamma API returned a {response.status_code} response that is not valid JSON: {exc}"
        ) from exc


class GammaClient:
    """Issues GammaRequests against the API described by a Settings object."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self._transport = transport

    def build_headers(self, request: GammaRequest) -> dict[str, str]:
        headers = {
            API_KEY_HEADER: self.settings.api_key,
            "Accept": request.accept,
        }
        if request.body is not None:
            headers["Content-Type"] = "application/json"
        return headers

    async def execute(self, request: GammaRequest) -> Outcome:
        """Send ``request`` once and return its normalized outcome.

        Raises:
            TransportError: the call did not produce an HTTP response.
            MalformedResponseError: a 2xx JSON response could not be decoded.
        """
        url = build_url(self.settings.base_url, request.path)
        method = request.http_method
        content = json.dumps(request.body) if request.body is not None else None

        logger.debug("Gamma API %s %s params=%s", method, url, request.params)
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    url,
                    params=build_query(request.params),
                    headers=self.build_headers(request),
                    content=content,
                )
        except httpx.RequestError as exc:
            logger.error("Gamma API %s %s failed: %s", method, url, exc)
            raise TransportError(f"Gamma API request could not be completed: {exc}") from exc

        logger.debug("Gamma API %s %s -> %s", method, url, response.status_code)
        return normalize_response(response, request.response_kind)
