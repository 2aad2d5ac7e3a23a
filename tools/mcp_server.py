# =============================================================================
# tools/mcp_server.py  -  FastMCP tool server for the Gamma Generations API
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Registers the four Gamma tools on a FastMCP server.  Each tool is a thin
#   wrapper: it turns its arguments into a GammaRequest, hands it to
#   core.gamma_client, and renders the Outcome for the host.
#
# HOW IT WORKS (the flow):
#   1. The host calls a tool by name over stdio (e.g., "gamma_get_generation")
#   2. FastMCP validates the arguments against the function signature
#   3. The tool builds a GammaRequest and awaits GammaClient.execute()
#   4. The Outcome is rendered:
#        JsonResult   -> JSON text
#        BinaryResult -> base64 text
#        EmptyResult  -> empty text
#        Failure      -> ToolError (the host sees an error-flagged result)
#
# SETTINGS ARE READ PER CALL:
#   get_client() resolves the API key and base URL on every tool call, so a
#   rotated key in the environment is picked up without a restart.
#
# RUNNING THIS SERVER:
#   a) Via the console script:   gamma-mcp
#   b) Standalone module:        python -m tools.mcp_server
# =============================================================================

import base64
import json
import logging
import sys
from typing import Annotated, Optional
from urllib.parse import quote

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import BaseModel, Field

from core.config import SERVER_DISPLAY_NAME, load_settings, resolve_log_level, resolve_server_name
from core.errors import GammaError, UpstreamError
from core.gamma_client import GammaClient
from core.models import (
    BinaryResult,
    EmptyResult,
    Failure,
    GammaRequest,
    JsonResult,
    Outcome,
    ResponseKind,
)
from tools.schemas import (
    CardOptions,
    CardSplit,
    ExportFormat,
    ImageOptions,
    OutputFormat,
    SharingOptions,
    TextMode,
    TextOptions,
)

__version__ = "0.1.0"

API_VERSION_PREFIX = "/v0.2"

# Before the server name and log level are read below.
load_dotenv()

# =============================================================================
# Logging Setup
# =============================================================================
# STDOUT is the MCP transport.  Anything printed there corrupts the JSON-RPC
# stream, so all logging goes to STDERR.
#
# Colors: CYAN for incoming calls, GREEN for responses, YELLOW for status.
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

# Longest response text echoed to the log; asset payloads can be megabytes.
_LOG_PREVIEW_CHARS = 500

logging.basicConfig(
    level=resolve_log_level(),
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items() if v is not None)
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log (a preview of) the tool response in GREEN, then return it."""
    preview = text if len(text) <= _LOG_PREVIEW_CHARS else f"{text[:_LOG_PREVIEW_CHARS]}… ({len(text)} chars)"
    logging.info(f"{_GREEN}  ← {tool_name} response: {preview}{_RESET}")
    return text


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP(
    resolve_server_name(),
    instructions=f"{SERVER_DISPLAY_NAME} exposes tools for the Gamma Generations API.",
)


def get_client() -> GammaClient:
    """Build a client from the current environment (raises ConfigurationError)."""
    return GammaClient(load_settings())


def render_outcome(outcome: Outcome) -> str:
    """Render a successful Outcome as the text payload of a tool result.

    Raises:
        UpstreamError: ``outcome`` is a Failure.
    """
    if isinstance(outcome, Failure):
        raise UpstreamError(outcome)
    if isinstance(outcome, JsonResult):
        return json.dumps(outcome.payload, ensure_ascii=False)
    if isinstance(outcome, BinaryResult):
        return base64.b64encode(outcome.content).decode("ascii")
    if isinstance(outcome, EmptyResult):
        return ""
    raise TypeError(f"Unknown outcome type: {type(outcome).__name__}")


async def _call_gamma(tool_name: str, request: GammaRequest) -> str:
    """Run ``request`` and render it; every GammaError becomes a ToolError."""
    try:
        outcome = await get_client().execute(request)
        text = render_outcome(outcome)
    except GammaError as exc:
        _log_status(f"{tool_name} failed: {exc.message}")
        raise ToolError(exc.message) from exc

    if isinstance(outcome, BinaryResult):
        # Size only; asset bytes never go to the log.
        logging.info(f"{_GREEN}  ← {tool_name} response: <{len(outcome.content)} bytes, base64>{_RESET}")
        return text
    return _log_response(tool_name, text)


def _segment(value: str) -> str:
    """Percent-encode one path segment (slashes included)."""
    return quote(value, safe="")


# =============================================================================
# TOOL 1: gamma_create_generation
# =============================================================================
# The only write operation.  Unset arguments are left out of the request body
# entirely so Gamma applies its own defaults.
# =============================================================================
async def create_generation(
    inputText: Annotated[
        str,
        Field(
            description=(
                "The text used to generate the Gamma content. Character limit is 1-750,000. "
                "It can be a short prompt or lengthy, structured text."
            )
        ),
    ],
    textMode: Annotated[
        Optional[TextMode],
        Field(description="Determines how inputText is modified: generate (default), condense, or preserve."),
    ] = None,
    format: Annotated[
        Optional[OutputFormat],
        Field(description="Requested output format: presentation (default), document, or social."),
    ] = None,
    themeName: Annotated[
        Optional[str], Field(description="Defines the theme for the output (colors, fonts).")
    ] = None,
    numCards: Annotated[
        Optional[int],
        Field(description="Number of cards to create if cardSplit is auto. Pro users: 1-50, Ultra users: 1-75."),
    ] = None,
    cardSplit: Annotated[
        Optional[CardSplit],
        Field(description="Controls how content is divided into cards: auto (default) or inputTextBreaks."),
    ] = None,
    additionalInstructions: Annotated[
        Optional[str],
        Field(description="Additional specifications for content, layouts, etc. Character limit is 1-500."),
    ] = None,
    exportAs: Annotated[
        Optional[ExportFormat],
        Field(description="Allows direct export of the generated Gamma as pdf or pptx."),
    ] = None,
    textOptions: Annotated[Optional[TextOptions], Field(description="Text generation options.")] = None,
    imageOptions: Annotated[Optional[ImageOptions], Field(description="Image generation options.")] = None,
    cardOptions: Annotated[Optional[CardOptions], Field(description="Card layout options.")] = None,
    sharingOptions: Annotated[Optional[SharingOptions], Field(description="Sharing access options.")] = None,
) -> str:
    """Create a new Gamma deck generation from a prompt, template, or structured payload.

    Returns the Gamma API response as JSON text; it contains the
    generationId to poll with gamma_get_generation.
    """
    _log_request(
        "gamma_create_generation",
        inputText=inputText[:80],
        textMode=textMode,
        format=format,
        themeName=themeName,
        numCards=numCards,
        cardSplit=cardSplit,
        exportAs=exportAs,
    )

    if not inputText:
        _log_status("Rejected: empty inputText")
        raise ToolError("inputText must be provided to create a Gamma generation.")

    body = {
        "inputText": inputText,
        "textMode": textMode,
        "format": format,
        "themeName": themeName,
        "numCards": numCards,
        "cardSplit": cardSplit,
        "additionalInstructions": additionalInstructions,
        "exportAs": exportAs,
        "textOptions": textOptions,
        "imageOptions": imageOptions,
        "cardOptions": cardOptions,
        "sharingOptions": sharingOptions,
    }
    body = {
        key: value.model_dump(exclude_none=True) if isinstance(value, BaseModel) else value
        for key, value in body.items()
        if value is not None
    }

    request = GammaRequest(path=f"{API_VERSION_PREFIX}/generations", method="POST", body=body)
    return await _call_gamma("gamma_create_generation", request)


# =============================================================================
# TOOL 2: gamma_get_generation
# =============================================================================
async def get_generation(
    generationId: Annotated[str, Field(description="Identifier returned when the generation was created.")],
    expand: Annotated[
        Optional[bool], Field(description="Include rendered assets and slides when available.")
    ] = None,
) -> str:
    """Retrieve the current state of a Gamma generation by identifier."""
    _log_request("gamma_get_generation", generationId=generationId, expand=expand)

    request = GammaRequest(
        path=f"{API_VERSION_PREFIX}/generations/{_segment(generationId)}",
        method="GET",
        params={"expand": True if expand else None},
    )
    return await _call_gamma("gamma_get_generation", request)


# =============================================================================
# TOOL 3: gamma_list_generations
# =============================================================================
# Returns one page as Gamma sends it.  Walking further pages is up to the
# caller via the page argument.
# =============================================================================
async def list_generations(
    status: Annotated[
        Optional[str],
        Field(description="Optional filter for generation status (queued, processing, ready, failed)."),
    ] = None,
    limit: Annotated[
        Optional[int], Field(description="Maximum number of generations to return (default 20).")
    ] = None,
    page: Annotated[Optional[int], Field(description="Pagination cursor/page number when supported.")] = None,
) -> str:
    """List recent Gamma generations with optional status filtering."""
    _log_request("gamma_list_generations", status=status, limit=limit, page=page)

    request = GammaRequest(
        path=f"{API_VERSION_PREFIX}/generations",
        method="GET",
        params={"status": status, "limit": limit, "page": page},
    )
    return await _call_gamma("gamma_list_generations", request)


# =============================================================================
# TOOL 4: gamma_get_asset
# =============================================================================
# Binary download.  MCP text content cannot carry raw bytes, so the asset is
# returned base64-encoded.
# =============================================================================
async def get_asset(
    generationId: Annotated[str, Field(description="Identifier of the generation that produced the asset.")],
    assetId: Annotated[str, Field(description="Asset identifier obtained from the generation detail payload.")],
) -> str:
    """Download an asset (such as a PDF or image) associated with a completed Gamma generation.

    Returns the asset bytes as base64 text.
    """
    _log_request("gamma_get_asset", generationId=generationId, assetId=assetId)

    request = GammaRequest(
        path=f"{API_VERSION_PREFIX}/generations/{_segment(generationId)}/assets/{_segment(assetId)}",
        method="GET",
        response_kind=ResponseKind.BINARY,
    )
    return await _call_gamma("gamma_get_asset", request)


# =============================================================================
# Tool registration
# =============================================================================
# Registered here instead of with @mcp.tool() so the module-level names stay
# plain async functions that tests can await directly.
# =============================================================================
mcp.tool(name="gamma_create_generation")(create_generation)
mcp.tool(name="gamma_get_generation")(get_generation)
mcp.tool(name="gamma_list_generations")(list_generations)
mcp.tool(name="gamma_get_asset")(get_asset)


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    mcp.run()
