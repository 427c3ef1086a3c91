"""
Style Validator - checks property keys and values against definitions.

Validates:
- The property key is registered
- The value matches at least one shape of the property's grammar
  (same component count, same separators, every component accepted
  by its token type, ranges included)
- The empty string, which means "explicitly cleared", is always valid

Failures are reported as ValidationResult objects, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from chuk_block_style.constants import ErrorMessages
from chuk_block_style.core.separators import join_components, split_components
from chuk_block_style.styles.registry import StyleRegistry


class ValidationSeverity(str, Enum):
    """Severity level for validation issues."""

    ERROR = "error"  # Write is rejected
    WARNING = "warning"  # Write accepted but may not render as expected
    INFO = "info"  # Informational only


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: ValidationSeverity
    code: str
    message: str
    location: str | None = None

    def __str__(self) -> str:
        prefix = f"[{self.severity.value.upper()}]"
        location = f" at {self.location}" if self.location else ""
        return f"{prefix} {self.code}: {self.message}{location}"

    def to_dict(self) -> dict[str, str | None]:
        return {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "location": self.location,
        }


class ValidationResult:
    """Result of validating a style write."""

    def __init__(self) -> None:
        self.issues: list[ValidationIssue] = []
        self.shape: str | None = None

    def add_error(self, code: str, message: str, location: str | None = None) -> None:
        """Add an error issue."""
        self.issues.append(ValidationIssue(ValidationSeverity.ERROR, code, message, location))

    def add_warning(self, code: str, message: str, location: str | None = None) -> None:
        """Add a warning issue."""
        self.issues.append(ValidationIssue(ValidationSeverity.WARNING, code, message, location))

    def add_info(self, code: str, message: str, location: str | None = None) -> None:
        """Add an info issue."""
        self.issues.append(ValidationIssue(ValidationSeverity.INFO, code, message, location))

    def extend(self, other: ValidationResult) -> None:
        self.issues.extend(other.issues)
        if other.shape is not None:
            self.shape = other.shape

    @property
    def is_valid(self) -> bool:
        """Return True if no errors (warnings/info are OK)."""
        return not any(i.severity == ValidationSeverity.ERROR for i in self.issues)

    @property
    def errors(self) -> list[ValidationIssue]:
        """Get all error issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        """Get all warning issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    def __bool__(self) -> bool:
        """Boolean conversion returns is_valid."""
        return self.is_valid

    def __str__(self) -> str:
        if not self.issues:
            return "Validation passed: no issues found"
        return "\n".join(str(issue) for issue in self.issues)


class StyleValueValidator:
    """Validates property values against the shapes of their grammar."""

    def __init__(self, registry: StyleRegistry):
        self.registry = registry
        self._split_cache: dict[str, list[tuple[str, list[str], list[str]]]] = {}

    def _split_shapes(self, key: str) -> list[tuple[str, list[str], list[str]]]:
        # Shapes of a registered key never change; unknown keys are not cached
        if key not in self._split_cache:
            shapes = self.registry.get_shapes(key)
            if shapes is None:
                return []
            self._split_cache[key] = [(shape, *split_components(shape)) for shape in shapes]
        return self._split_cache[key]

    def matching_shape(self, key: str, value: str) -> str | None:
        """
        Find the first shape a value satisfies.

        Returns:
            The shape, or None if no shape accepts the value
        """
        components, separators = split_components(value.strip())
        if not components:
            return None
        token_types = self.registry.token_types
        units = self.registry.units
        for shape, shape_components, shape_separators in self._split_shapes(key):
            if len(shape_components) != len(components) or shape_separators != separators:
                continue
            if all(
                token_types.accepts(component, token, units)
                for component, token in zip(components, shape_components, strict=True)
            ):
                return shape
        return None

    def validate_key(self, key: str) -> ValidationResult:
        """Check that a property key is registered."""
        result = ValidationResult()
        if not isinstance(key, str) or not key:
            result.add_error("INVALID_KEY", f"Property key must be a non-empty string, got {key!r}")
        elif not self.registry.has_style(key):
            result.add_error("UNKNOWN_PROPERTY", ErrorMessages.UNKNOWN_PROPERTY.format(key=key), key)
        return result

    def validate(self, key: str, value: str) -> ValidationResult:
        """
        Validate a value for a property.

        Args:
            key: Property key
            value: Literal value; "" means explicitly cleared

        Returns:
            ValidationResult; on success ``shape`` holds the matched shape
        """
        result = self.validate_key(key)
        if not result:
            return result

        if not isinstance(value, str):
            result.add_error("INVALID_VALUE", f"Value must be a string, got {type(value).__name__}", key)
            return result
        if value == "":
            result.add_info("CLEARED", "Empty value clears the property", key)
            return result

        shape = self.matching_shape(key, value)
        if shape is None:
            result.add_error(
                "INVALID_VALUE", ErrorMessages.INVALID_VALUE.format(value=value, key=key), key
            )
        else:
            result.shape = shape
        return result

    def normalize_value(self, value: str) -> str:
        """
        Replace each component of a value with the token it corresponds to.

        Example:
            normalize_value("10px auto") -> "<length> auto"
        """
        components, separators = split_components(value.strip())
        tokens = [
            self.registry.token_types.value_token(component, self.registry.units) or component
            for component in components
        ]
        return join_components(tokens, separators)
