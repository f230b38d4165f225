from __future__ import annotations

"""
File-Scoped Suite View.

A SuiteSubset is handed to run orchestration for each definition file. It
behaves like a root suite but only enumerates the nodes that file
contributed, while structural operations delegate to the real root so the
global tree stays the single source of truth.
"""

from typing import Any, Callable, Iterator, List, Optional

from testreader.domain.tree_models import Child, HookNode, SuiteNode, TestNode


class SuiteSubset:
    """
    Live, read-restricted view of a root suite bound to one file.
    """

    root = True
    title = ""

    def __init__(self, parent: SuiteNode, file: str) -> None:
        self._parent = parent
        self._file = file

    @classmethod
    def create(cls, parent: SuiteNode, file: str) -> "SuiteSubset":
        return cls(parent, file)

    @property
    def file(self) -> str:
        return self._file

    @property
    def parent(self) -> Optional[SuiteNode]:
        return None

    # --- Filtered enumeration ---

    @property
    def children(self) -> List[Child]:
        return [c for c in self._parent.children if c.file == self._file]

    @property
    def suites(self) -> List[SuiteNode]:
        return [c for c in self.children if isinstance(c, SuiteNode)]

    @property
    def tests(self) -> List[TestNode]:
        return [c for c in self.children if isinstance(c, TestNode)]

    @property
    def before_each_hooks(self) -> List[HookNode]:
        return [h for h in self._parent.before_each_hooks if h.file == self._file]

    @property
    def after_each_hooks(self) -> List[HookNode]:
        return [h for h in self._parent.after_each_hooks if h.file == self._file]

    def iter_tests(self) -> Iterator[TestNode]:
        for child in self.children:
            if isinstance(child, TestNode):
                yield child
            elif isinstance(child, SuiteNode):
                yield from child.iter_tests()

    def full_title(self) -> str:
        return ""

    def __iter__(self) -> Iterator[Child]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    # --- Delegated mutation ---

    def add_suite(self, suite: SuiteNode) -> "SuiteSubset":
        suite.file = suite.file or self._file
        self._parent.add_suite(suite)
        return self

    def add_test(self, test: TestNode) -> "SuiteSubset":
        test.file = test.file or self._file
        self._parent.add_test(test)
        return self

    def before_each(self, fn: Callable[..., Any]) -> "SuiteSubset":
        self._parent.before_each(fn, self._file)
        return self

    def after_each(self, fn: Callable[..., Any]) -> "SuiteSubset":
        self._parent.after_each(fn, self._file)
        return self

    def __repr__(self) -> str:
        return f"SuiteSubset(file={self._file!r}, size={len(self)})"
