from __future__ import annotations

"""
Skip Builder.

DSL object exposed to definition files as `<namespace>.skip`:

    testreader.skip.in_("firefox", "flaky on firefox")
    testreader.skip.not_in(re.compile("chrome"))
    testreader.skip.all("broken everywhere")

Each call targets the next suite or test declared in the current scope.
`also` chains several directives onto the same entity.
"""

import re
from typing import Any, Optional, Tuple

from testreader.core.selection.skip import Skip
from testreader.domain.selection_models import SKIP, Matcher


class SkipBuilder:
    """
    Records explicit, reported skips.
    """

    def __init__(self, skip: Skip) -> None:
        self._skip = skip

    @property
    def also(self) -> "SkipBuilder":
        return self

    def in_(self, matchers: Any, reason: str = "", silent: bool = False) -> "SkipBuilder":
        """Skip the next entity in browsers matching `matchers`."""
        self._skip.record(SKIP, normalize_matchers(matchers), reason=reason, silent=silent)
        return self

    def not_in(self, matchers: Any, reason: str = "", silent: bool = False) -> "SkipBuilder":
        """Skip the next entity in every browser NOT matching `matchers`."""
        self._skip.record(SKIP, normalize_matchers(matchers), negate=True, reason=reason, silent=silent)
        return self

    def all(self, reason: str = "") -> "SkipBuilder":
        """Skip the next entity in all browsers."""
        self._skip.record(SKIP, None, reason=reason)
        return self


def normalize_matchers(matchers: Any) -> Optional[Tuple[Matcher, ...]]:
    """
    Coerce DSL input into a tuple of browser matchers.

    Raises:
        TypeError: If the input is not a string, a compiled regex or a list of those.
    """
    items = matchers if isinstance(matchers, (list, tuple)) else [matchers]
    for item in items:
        if not isinstance(item, (str, re.Pattern)):
            raise TypeError(
                f"Browser matchers must be a string, a compiled regex or a list of those, "
                f"got {type(item).__name__}"
            )
    return tuple(items)
