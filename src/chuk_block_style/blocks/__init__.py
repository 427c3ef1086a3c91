"""
Block styles - per-block value maps, writes and validation.
"""

from chuk_block_style.blocks.manager import BlockStyleManager, BlockStyles, write_coordinate
from chuk_block_style.blocks.validator import (
    StyleValueValidator,
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
)

__all__ = [
    "BlockStyleManager",
    "BlockStyles",
    "StyleValueValidator",
    "ValidationIssue",
    "ValidationResult",
    "ValidationSeverity",
    "write_coordinate",
]
