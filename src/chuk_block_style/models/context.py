"""
Rendering context models - devices, orientations and pseudo-states.

Each axis carries the generic "all" entry which matches any concrete
selection during cascade resolution.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from chuk_block_style.constants import ALL_KEY


class DeviceDefinition(BaseModel):
    """A device class with its media query bounds."""

    key: str
    name: str
    media_min: int | None = Field(default=None, description="min-width in px")
    media_max: int | None = Field(default=None, description="max-width in px")
    width: int | None = None
    height: int | None = None
    category: str = "all"

    model_config = {"frozen": True}

    def media_query(self) -> str:
        """Build the media query for this device, empty for the generic device."""
        parts = []
        if self.media_min is not None:
            parts.append(f"(min-width: {self.media_min}px)")
        if self.media_max is not None:
            parts.append(f"(max-width: {self.media_max}px)")
        if not parts:
            return ""
        return "@media " + " and ".join(parts)


class OrientationDefinition(BaseModel):
    """A screen orientation."""

    key: str
    name: str

    model_config = {"frozen": True}


class PseudoDefinition(BaseModel):
    """An interaction state rendered as a CSS pseudo-class."""

    key: str
    name: str

    model_config = {"frozen": True}


class StyleContext(BaseModel):
    """The (device, orientation, pseudo) triple a value applies to."""

    device: str = ALL_KEY
    orientation: str = ALL_KEY
    pseudo: str = ALL_KEY

    model_config = {"frozen": True}

    def as_tuple(self) -> tuple[str, str, str]:
        return (self.device, self.orientation, self.pseudo)

    @property
    def is_generic(self) -> bool:
        return self.as_tuple() == (ALL_KEY, ALL_KEY, ALL_KEY)
