"""
Definition loader - reads the seed tables for tokens, units, contexts and
style properties.

Definitions can come from:
1. Built-in library (shipped with package)
2. Project definitions (user's project directory, same layout)

Both use the same layout::

    tokens.yaml
    units.yaml
    contexts.yaml
    properties/*.yaml

Loading is partial-failure tolerant: a malformed file or entry is logged
and skipped while the rest of the library loads. Project entries never
replace library entries; a colliding key is rejected like any duplicate.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from chuk_block_style.constants import ContextAxis
from chuk_block_style.models.context import (
    DeviceDefinition,
    OrientationDefinition,
    PseudoDefinition,
)
from chuk_block_style.models.style import StyleDefinition
from chuk_block_style.models.token import TokenDefinition, UnitDefinition
from chuk_block_style.styles.contexts import ContextRegistry
from chuk_block_style.styles.registry import StyleRegistry
from chuk_block_style.tokens import TokenTypeRegistry

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_LIBRARY_PATH = Path(__file__).parent / "library"

_CONTEXT_SECTIONS: dict[ContextAxis, tuple[str, type[BaseModel]]] = {
    ContextAxis.DEVICE: ("devices", DeviceDefinition),
    ContextAxis.ORIENTATION: ("orientations", OrientationDefinition),
    ContextAxis.PSEUDO: ("pseudos", PseudoDefinition),
}


class DefinitionLoader:
    """
    Discovers and loads seed definitions from YAML.

    The library is read first, then the project directory if configured.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the loader.

        Args:
            library_path: Path to built-in definition library
            project_path: Path to project definitions directory
        """
        self.library_path = library_path or DEFAULT_LIBRARY_PATH
        self.project_path = project_path
        self._cache: dict[Path, dict[str, Any] | None] = {}

    def _roots(self) -> list[Path]:
        roots = [self.library_path]
        if self.project_path and self.project_path.exists():
            roots.append(self.project_path)
        return roots

    # -- raw entries -------------------------------------------------------

    def load_tokens(self) -> list[TokenDefinition]:
        """Token definitions from every root, library first."""
        return self._load_section("tokens.yaml", "tokens", TokenDefinition)

    def load_units(self) -> list[UnitDefinition]:
        """Unit definitions from every root, library first."""
        return self._load_section("units.yaml", "units", UnitDefinition)

    def load_properties(self) -> list[StyleDefinition]:
        """Style definitions from every properties/*.yaml, sorted by file name."""
        definitions: list[StyleDefinition] = []
        for root in self._roots():
            properties_dir = root / "properties"
            if not properties_dir.exists():
                continue
            for path in sorted(properties_dir.glob("*.yaml")):
                definitions.extend(self._load_entries(path, "properties", StyleDefinition))
        return definitions

    def load_contexts(self) -> dict[ContextAxis, list[BaseModel]]:
        """Context entries per axis."""
        contexts: dict[ContextAxis, list[BaseModel]] = {axis: [] for axis in ContextAxis}
        for axis, (section, model) in _CONTEXT_SECTIONS.items():
            contexts[axis] = self._load_section("contexts.yaml", section, model)
        return contexts

    # -- registries --------------------------------------------------------

    def build_registry(self, token_types: TokenTypeRegistry | None = None) -> StyleRegistry:
        """
        Build a style registry from the loaded definitions.

        Tokens and units are registered before properties so grammars
        expand against the full vocabulary.
        """
        registry = StyleRegistry(token_types)
        tokens = registry.register_token_definitions(self.load_tokens())
        units = registry.register_units(self.load_units())
        styles = registry.register_style_definitions(self.load_properties())
        logger.info(
            f"Loaded {len(tokens)} tokens, {len(units)} units, {len(styles)} style definitions"
        )
        return registry

    def build_contexts(self) -> ContextRegistry:
        """Build a context registry from contexts.yaml."""
        contexts = ContextRegistry()
        for axis, entries in self.load_contexts().items():
            contexts.register_many(axis, entries)  # type: ignore[arg-type]
        return contexts

    # -- helpers -----------------------------------------------------------

    def _load_section(self, filename: str, section: str, model: type[ModelT]) -> list[ModelT]:
        entries: list[ModelT] = []
        for root in self._roots():
            path = root / filename
            if path.exists():
                entries.extend(self._load_entries(path, section, model))
        return entries

    def _load_entries(self, path: Path, section: str, model: type[ModelT]) -> list[ModelT]:
        data = self._read_yaml(path)
        if not data:
            return []
        raw_entries = data.get(section) or []
        if not isinstance(raw_entries, list):
            logger.warning(f"Section '{section}' in {path} is not a list, skipping")
            return []

        entries: list[ModelT] = []
        for index, raw in enumerate(raw_entries):
            try:
                entries.append(model.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping invalid {section} entry #{index} in {path}: {e}")
        return entries

    def _read_yaml(self, path: Path) -> dict[str, Any] | None:
        """Load a YAML file, None (logged) if unreadable or malformed."""
        if path in self._cache:
            return self._cache[path]
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load {path}: {e}")
            data = None
        if data is not None and not isinstance(data, dict):
            logger.warning(f"Expected a mapping at the top of {path}, skipping")
            data = None
        self._cache[path] = data
        return data
