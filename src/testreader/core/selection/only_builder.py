from __future__ import annotations

"""
Only Builder.

Dual of the skip builder, exposed as `<namespace>.only`. Everything the
matchers do not select is skipped silently, so excluded entities never
show up in reports.
"""

from typing import Any

from testreader.core.selection.skip import Skip
from testreader.core.selection.skip_builder import normalize_matchers
from testreader.domain.selection_models import ONLY


class OnlyBuilder:

    def __init__(self, skip: Skip) -> None:
        self._skip = skip

    @property
    def also(self) -> "OnlyBuilder":
        return self

    def in_(self, matchers: Any) -> "OnlyBuilder":
        """Run the next entity only in browsers matching `matchers`."""
        self._skip.record(ONLY, normalize_matchers(matchers), silent=True)
        return self

    def not_in(self, matchers: Any) -> "OnlyBuilder":
        """Run the next entity in every browser except those matching `matchers`."""
        self._skip.record(ONLY, normalize_matchers(matchers), negate=True, silent=True)
        return self
