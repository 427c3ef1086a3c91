"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_block_style.blocks import BlockStyleManager
from chuk_block_style.styles import ContextRegistry, DefinitionLoader, StyleRegistry


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def library_path() -> Path:
    """Path to the built-in definition library."""
    return Path(__file__).parent.parent / "src" / "chuk_block_style" / "styles" / "library"


@pytest.fixture
def loader(library_path: Path) -> DefinitionLoader:
    """Loader over the built-in library only."""
    return DefinitionLoader(library_path)


@pytest.fixture
def registry(loader: DefinitionLoader) -> StyleRegistry:
    """Fresh (unfrozen) registry built from the library."""
    return loader.build_registry()


@pytest.fixture
def contexts(loader: DefinitionLoader) -> ContextRegistry:
    """Context registry built from the library."""
    return loader.build_contexts()


@pytest.fixture
def manager(registry: StyleRegistry, contexts: ContextRegistry) -> BlockStyleManager:
    """Block manager over the library registry."""
    return BlockStyleManager(registry, contexts)
