"""
Pydantic models for the block style engine.

This module provides:
- TokenDefinition / UnitDefinition / TokenParam: grammar vocabulary
- OptionDescriptor: editor widget description for a token
- StyleDefinition: a property and its value grammar
- Device/Orientation/PseudoDefinition and StyleContext: rendering contexts
"""

from chuk_block_style.models.context import (
    DeviceDefinition,
    OrientationDefinition,
    PseudoDefinition,
    StyleContext,
)
from chuk_block_style.models.style import StyleDefinition
from chuk_block_style.models.token import (
    OptionDescriptor,
    TokenDefinition,
    TokenParam,
    UnitDefinition,
)

__all__ = [
    "DeviceDefinition",
    "OptionDescriptor",
    "OrientationDefinition",
    "PseudoDefinition",
    "StyleContext",
    "StyleDefinition",
    "TokenDefinition",
    "TokenParam",
    "UnitDefinition",
]
