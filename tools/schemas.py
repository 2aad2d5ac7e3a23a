# =============================================================================
# tools/schemas.py  -  Option objects for gamma_create_generation
# =============================================================================
#
# FastMCP builds the tool's JSON schema from these pydantic models, so the
# host sees the allowed values for every enum-like field.  Field names match
# the Gamma API request body exactly (camelCase) and are sent as-is.
# =============================================================================

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

TextMode = Literal["generate", "condense", "preserve"]
OutputFormat = Literal["presentation", "document", "social"]
CardSplit = Literal["auto", "inputTextBreaks"]
ExportFormat = Literal["pdf", "pptx"]

# Spellings hosts commonly send for Japanese.  Gamma only accepts "ja".
_JAPANESE_ALIASES = frozenset({"ja", "jp", "ja-jp", "japanese", "日本語"})


def normalize_language(value: str) -> str:
    """Map Japanese aliases to ``ja``; anything else is returned unchanged."""
    if value.strip().lower() in _JAPANESE_ALIASES:
        return "ja"
    return value


class TextOptions(BaseModel):
    """Text generation options."""

    amount: Optional[Literal["brief", "medium", "detailed", "extensive"]] = None
    tone: Optional[str] = None
    audience: Optional[str] = None
    language: Optional[str] = None

    @field_validator("language")
    @classmethod
    def _normalize_language(cls, value: Optional[str]) -> Optional[str]:
        return normalize_language(value) if value else value


class ImageOptions(BaseModel):
    """Image generation options."""

    source: Optional[
        Literal[
            "aiGenerated",
            "pictographic",
            "unsplash",
            "giphy",
            "webAllImages",
            "webFreeToUse",
            "webFreeToUseCommercially",
            "placeholder",
            "noImages",
        ]
    ] = None
    model: Optional[str] = None
    style: Optional[str] = None


class CardOptions(BaseModel):
    """Card layout options."""

    dimensions: Optional[str] = Field(default=None, description="Card dimensions, e.g. 16x9.")


class SharingOptions(BaseModel):
    """Sharing access options."""

    workspaceAccess: Optional[Literal["noAccess", "view", "comment", "edit", "fullAccess"]] = None
    externalAccess: Optional[Literal["noAccess", "view", "comment", "edit"]] = None
