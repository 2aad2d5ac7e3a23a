# =============================================================================
# tools/__init__.py
# =============================================================================
# The MCP face of the project.
#
# ARCHITECTURAL ROLE:
#   tools/ translates between MCP tool calls and core/:
#     1. Validates tool arguments (FastMCP + the pydantic models in schemas.py)
#     2. Builds a GammaRequest and runs it through core.gamma_client
#     3. Renders the Outcome as text, or raises ToolError for failures
#
#   Business rules about the Gamma API (auth, URLs, response decoding) stay
#   in core/.  Nothing here opens a socket directly.
# =============================================================================
