# =============================================================================
# core/config.py  -  Settings resolution from the environment
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns environment variables into a Settings value object: the Gamma API
#   base URL and the API key.
#
# LOOKUP ORDER (first non-blank value wins):
#   base URL:  GAMMA_MCP_GAMMA_BASE_URL  ->  GAMMA_BASE_URL  ->  default
#   API key:   GAMMA_MCP_GAMMA_API_KEY   ->  GAMMA_API_KEY   ->  error
#
#   The GAMMA_MCP_ prefixed names let several MCP servers share one
#   environment without colliding.  The bare names are kept for older setups.
#
# NO GLOBAL STATE:
#   Nothing is read at import time.  Callers build a Settings with
#   load_settings() and hand it to the client, so tests can pass their own
#   environment mapping instead of patching os.environ.
# =============================================================================

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from core.errors import ConfigurationError

SERVER_ID = "gamma-mcp"
SERVER_DISPLAY_NAME = "Gamma MCP"
ENV_PREFIX = "GAMMA_MCP"

DEFAULT_BASE_URL = "https://public-api.gamma.app"

# Seconds.  Applies to connect, read, write and pool acquisition alike.
DEFAULT_TIMEOUT = 60.0

API_KEY_VAR = f"{ENV_PREFIX}_GAMMA_API_KEY"
BASE_URL_VAR = f"{ENV_PREFIX}_GAMMA_BASE_URL"
LEGACY_API_KEY_VAR = "GAMMA_API_KEY"
LEGACY_BASE_URL_VAR = "GAMMA_BASE_URL"
SERVER_NAME_VAR = "MCP_NAME"
LOG_LEVEL_VAR = f"{ENV_PREFIX}_LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    """Resolved connection settings for one or more Gamma API calls."""

    base_url: str
    api_key: str
    timeout: float = DEFAULT_TIMEOUT

    def __repr__(self) -> str:
        # Keep the key out of logs and tracebacks.
        return f"Settings(base_url={self.base_url!r}, api_key='***', timeout={self.timeout!r})"


def _first_set(environ: Mapping[str, str], *names: str) -> Optional[str]:
    """Return the first trimmed, non-empty value among ``names``."""
    for name in names:
        value = (environ.get(name) or "").strip()
        if value:
            return value
    return None


def resolve_base_url(environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    return _first_set(env, BASE_URL_VAR, LEGACY_BASE_URL_VAR) or DEFAULT_BASE_URL


def resolve_api_key(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the API key, or raise ConfigurationError when none is set."""
    env = os.environ if environ is None else environ
    value = _first_set(env, API_KEY_VAR, LEGACY_API_KEY_VAR)
    if value is None:
        raise ConfigurationError(
            f"{SERVER_DISPLAY_NAME} requires the {API_KEY_VAR} environment variable to be set."
        )
    return value


def resolve_server_name(environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    return _first_set(env, SERVER_NAME_VAR) or SERVER_ID


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from ``environ`` (defaults to ``os.environ``).

    The key is resolved first so a missing key fails before anything else
    is looked at.
    """
    api_key = resolve_api_key(environ)
    return Settings(base_url=resolve_base_url(environ), api_key=api_key)


def resolve_log_level(environ: Optional[Mapping[str, str]] = None) -> int:
    """Return the logging level named by GAMMA_MCP_LOG_LEVEL, INFO if unset or unknown."""
    env = os.environ if environ is None else environ
    name = (_first_set(env, LOG_LEVEL_VAR) or "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO
