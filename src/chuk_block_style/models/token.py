"""
Token models - the vocabulary value grammars are written in.

A token such as ``<length [0,10]>`` names a class of literal values.
Primitive tokens map onto a token type; composed tokens are aliases for
a grammar fragment built from other tokens.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from chuk_block_style.constants import COMPOSED_TOKEN, OptionCategory, UnitType


class TokenDefinition(BaseModel):
    """A named token and the grammar it stands for."""

    key: str = Field(..., description="Token name including brackets, e.g. <length>")
    syntax: str = Field(..., description="Raw grammar this token expands to")
    type: str = Field(
        default=COMPOSED_TOKEN,
        description="Token type name for primitives, 'composed' for aliases",
    )
    default: str | None = Field(default=None, description="Default literal value")

    model_config = {"frozen": True}

    @property
    def is_composed(self) -> bool:
        """Return True if this token is an alias for other tokens."""
        return self.type == COMPOSED_TOKEN


class UnitDefinition(BaseModel):
    """A CSS unit and the dimension family it measures."""

    key: str = Field(..., description="Unit suffix, e.g. px or %")
    type: UnitType = Field(..., description="Dimension family")
    category: str = Field(default="absolute", description="absolute, relative, angle, ...")
    supported: bool = Field(default=True, description="Widely supported by browsers")

    model_config = {"frozen": True}


class TokenParam(BaseModel):
    """Numeric range or argument syntax attached to a token reference."""

    min: float | None = None
    max: float | None = None
    step: float | None = None
    syntax: str | None = Field(default=None, description="Argument grammar of a function token")

    model_config = {"frozen": True}

    def contains(self, number: float) -> bool:
        """Check a number against the range bounds."""
        if self.min is not None and number < self.min:
            return False
        if self.max is not None and number > self.max:
            return False
        return True


class OptionDescriptor(BaseModel):
    """What an editor needs to build a widget for one slot alternative."""

    name: str
    value: str
    category: OptionCategory
    type: str = Field(..., description="Canonical token, e.g. <length> or fit-content()")
    min: float | None = None
    max: float | None = None
    step: float | None = None
    unit: str | None = None
    syntax: str | None = None
    icon: str | None = None

    model_config = {"frozen": True}
