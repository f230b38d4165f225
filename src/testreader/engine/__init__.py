from __future__ import annotations

from .definition_engine import DefinitionEngine
from .definition_store import DefinitionStore

__all__ = ["DefinitionEngine", "DefinitionStore"]
