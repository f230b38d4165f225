from __future__ import annotations

from .only_builder import OnlyBuilder
from .resolver import resolve_selection
from .skip import Skip
from .skip_builder import SkipBuilder

__all__ = ["OnlyBuilder", "Skip", "SkipBuilder", "resolve_selection"]
