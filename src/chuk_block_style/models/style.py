"""
Style definition model - one CSS-like property and its value grammar.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class StyleDefinition(BaseModel):
    """
    Definition of a style property.

    Immutable once created. The syntax is the raw grammar; expanded
    shapes and separators are derived by the registry on demand.
    """

    key: str = Field(..., description="Property key, e.g. border-top-width")
    syntax: str = Field(..., description="Raw value grammar")
    description: str = Field(default="", description="Human readable description")
    longhand: list[str] | None = Field(
        default=None,
        description="Longhand properties this shorthand expands into",
    )
    icons: dict[str, str] | None = Field(
        default=None,
        description="Icon per keyword variant",
    )
    initial: str | None = Field(default=None, description="Declared default value")

    model_config = {"frozen": True}

    @property
    def is_shorthand(self) -> bool:
        """Return True if this property has longhands."""
        return bool(self.longhand)
