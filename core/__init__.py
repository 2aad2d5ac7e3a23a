# =============================================================================
# core/__init__.py
# =============================================================================
# Everything needed to talk to the Gamma API: settings, request/outcome
# models, errors and the HTTP client.
#
# Nothing in this package imports FastMCP.  The tools/ layer decides how an
# Outcome is shown to the MCP host; core/ only produces it.
# =============================================================================
