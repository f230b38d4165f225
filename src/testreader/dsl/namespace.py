from __future__ import annotations

"""
DSL Namespace.

The namespace is the object definition files reach for under the
configured name (default `testreader`): `testreader.skip`,
`testreader.only`, `testreader.ctx` and any controller installed through
the test parser API.

It lives in a caller-owned scope mapping that the definition engine
injects into every file it executes. Rules:

- prepare(scope) installs an empty namespace once; later calls reuse it.
- Compiler instances overwrite the builders they own on construction.
- teardown(scope) is the caller's job; the compiler never removes it.
"""

from typing import Any, List, MutableMapping, Optional

from testreader.domain.constants import DEFAULT_NAMESPACE
from testreader.domain.errors import ConfigurationError
from testreader.domain.tree_models import SuiteNode


class DslNamespace:
    """
    Attribute bag exposed to definition files, plus the suite context stack.
    """

    def __init__(self) -> None:
        self._suite_stack: List[SuiteNode] = []

    # --- Suite context stack ---

    @property
    def current_suite(self) -> Optional[SuiteNode]:
        return self._suite_stack[-1] if self._suite_stack else None

    def push_suite(self, suite: SuiteNode) -> None:
        self._suite_stack.append(suite)

    def pop_suite(self) -> Optional[SuiteNode]:
        return self._suite_stack.pop() if self._suite_stack else None

    def reset_stack(self, root: Optional[SuiteNode] = None) -> None:
        self._suite_stack = [root] if root is not None else []

    def __repr__(self) -> str:
        names = sorted(k for k in vars(self) if not k.startswith("_"))
        return f"DslNamespace({names})"


def prepare(scope: MutableMapping[str, Any], name: str = DEFAULT_NAMESPACE) -> DslNamespace:
    """
    Install an empty namespace under `scope[name]` unless one is present.

    Returns:
        DslNamespace: The installed (or pre-existing) namespace.

    Raises:
        ConfigurationError: If the name is bound to something else.
    """
    existing = scope.get(name)
    if existing is None:
        existing = scope[name] = DslNamespace()
    elif not isinstance(existing, DslNamespace):
        raise ConfigurationError(f"Scope entry '{name}' is already taken by {type(existing).__name__}.")
    return existing


def teardown(scope: MutableMapping[str, Any], name: str = DEFAULT_NAMESPACE) -> None:
    scope.pop(name, None)
