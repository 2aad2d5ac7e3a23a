# =============================================================================
# main.py  -  Entry point for the Gamma MCP server
# =============================================================================
#
# HOW TO RUN:
#   gamma-mcp                (console script installed by pyproject.toml)
#   python main.py
#
# WHAT HAPPENS:
#   1. Importing tools.mcp_server loads .env and configures logging
#   2. Settings are resolved once, so a missing API key stops the process
#      before the host ever sees a tool list
#   3. The FastMCP server starts on stdio and serves tool calls until the
#      host closes the pipe
# =============================================================================

import logging

from core.config import load_settings
from core.errors import ConfigurationError
from tools.mcp_server import mcp

logger = logging.getLogger(__name__)


def main() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        logger.critical(exc.message)
        raise SystemExit(1) from exc

    logger.info("Starting %s against %s", mcp.name, settings.base_url)
    mcp.run()


if __name__ == "__main__":
    main()
