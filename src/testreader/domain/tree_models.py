from __future__ import annotations

"""
Definition Tree Data Models.

Provides the node types of the suite/test/hook tree built while definition
files execute. Suites are event emitters: structural mutations notify
listeners synchronously so the compiler can validate, identify and stamp
nodes the moment they are added.
"""

from typing import Any, Callable, Iterator, List, Optional, Union

from testreader.domain.constants import (
    AFTER_ALL,
    AFTER_EACH,
    BEFORE_ALL,
    BEFORE_EACH,
    EngineEvents,
)
from testreader.infra.events import EventEmitter

IdFactory = Callable[[], str]


# -----------------------------------------------------------------------------
# IDENTITY SUPPORT
# -----------------------------------------------------------------------------

class _Identifiable:
    """Lazy, write-once identity shared by suites and tests."""

    _id: Optional[str] = None
    _id_factory: Optional[IdFactory] = None

    def bind_id(self, factory: IdFactory) -> None:
        """Attach the id factory. Only the first binding is kept."""
        if self._id_factory is None:
            self._id_factory = factory

    @property
    def id(self) -> Optional[str]:
        if self._id is None and self._id_factory is not None:
            self._id = self._id_factory()
        return self._id


# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

class TestNode(_Identifiable):
    """
    Leaf entry representing one executable check.

    Attributes:
        title: Test title as written in the definition file.
        fn: Execution body, opaque to the compiler.
        file: Originating definition file.
        parent: Owning suite (back-reference).
        pending: Whether the test is excluded from execution.
        silent_skip: Whether the exclusion is hidden from reports.
        skip_reason: Human readable reason of an explicit skip.
        browser_id: Browser the tree was compiled for.
    """
    __test__ = False

    def __init__(
            self,
            title: str = "",
            fn: Optional[Callable[..., Any]] = None,
            file: Optional[str] = None,
            pending: Optional[bool] = None,
            silent_skip: bool = False,
    ) -> None:
        self.title = title
        self.fn = fn
        self.file = file
        self.parent: Optional[SuiteNode] = None
        self.pending = (fn is None) if pending is None else pending
        self.silent_skip = silent_skip
        self.skip_reason = ""
        self.browser_id: Optional[str] = None

    @classmethod
    def create(cls, title: str = "", fn: Optional[Callable[..., Any]] = None, **kwargs: Any) -> "TestNode":
        return cls(title, fn if fn is not None else _noop, **kwargs)

    def full_title(self) -> str:
        parent_title = self.parent.full_title() if self.parent else ""
        return f"{parent_title} {self.title}".strip()

    def __repr__(self) -> str:
        return f"TestNode({self.full_title()!r}, file={self.file!r}, pending={self.pending})"


class HookNode:
    """
    Per-test setup or teardown callable attached to a suite.

    Attributes:
        kind: One of beforeEach / afterEach.
        fn: Hook body.
        parent: Owning suite.
        browser_id: Browser the tree was compiled for.
    """

    def __init__(
            self,
            kind: str,
            fn: Callable[..., Any],
            parent: "SuiteNode",
            file: Optional[str] = None,
    ) -> None:
        self.kind = kind
        self.fn = fn
        self.parent = parent
        self.file = file if file is not None else parent.file
        self.browser_id: Optional[str] = None

    @property
    def title(self) -> str:
        return f'"{self.kind}" hook'

    def __repr__(self) -> str:
        return f"HookNode({self.kind!r})"


Child = Union["SuiteNode", TestNode, HookNode]


class SuiteNode(_Identifiable, EventEmitter):
    """
    Named grouping node holding tests, hooks and nested suites in
    declaration order.
    """

    def __init__(self, title: str = "", file: Optional[str] = None, root: bool = False) -> None:
        EventEmitter.__init__(self)
        self.title = title
        self.file = file
        self.root = root
        self.parent: Optional[SuiteNode] = None
        self.children: List[Child] = []
        self.pending = False
        self.silent_skip = False
        self.skip_reason = ""
        self.browser_id: Optional[str] = None

    @classmethod
    def create(cls, title: str = "", file: Optional[str] = None) -> "SuiteNode":
        return cls(title, file)

    # --- Views ---

    @property
    def suites(self) -> List["SuiteNode"]:
        return [c for c in self.children if isinstance(c, SuiteNode)]

    @property
    def tests(self) -> List[TestNode]:
        return [c for c in self.children if isinstance(c, TestNode)]

    @property
    def before_each_hooks(self) -> List[HookNode]:
        return [c for c in self.children if isinstance(c, HookNode) and c.kind == BEFORE_EACH]

    @property
    def after_each_hooks(self) -> List[HookNode]:
        return [c for c in self.children if isinstance(c, HookNode) and c.kind == AFTER_EACH]

    def full_title(self) -> str:
        parent_title = self.parent.full_title() if self.parent else ""
        return f"{parent_title} {self.title}".strip()

    def iter_tests(self) -> Iterator[TestNode]:
        """Yield every test below this suite, depth-first in declaration order."""
        for child in self.children:
            if isinstance(child, TestNode):
                yield child
            elif isinstance(child, SuiteNode):
                yield from child.iter_tests()

    # --- Mutation primitives ---

    def add_suite(self, suite: "SuiteNode") -> "SuiteNode":
        suite.parent = self
        self.children.append(suite)
        self.emit(EngineEvents.SUITE, suite)
        return self

    def add_test(self, test: TestNode) -> "SuiteNode":
        test.parent = self
        self.children.append(test)
        self.emit(EngineEvents.TEST, test)
        return self

    def before_each(self, fn: Callable[..., Any], file: Optional[str] = None) -> "SuiteNode":
        return self._add_hook(BEFORE_EACH, fn, file)

    def after_each(self, fn: Callable[..., Any], file: Optional[str] = None) -> "SuiteNode":
        return self._add_hook(AFTER_EACH, fn, file)

    def before_all(self, fn: Callable[..., Any], file: Optional[str] = None) -> "SuiteNode":
        return self._add_hook(BEFORE_ALL, fn, file)

    def after_all(self, fn: Callable[..., Any], file: Optional[str] = None) -> "SuiteNode":
        return self._add_hook(AFTER_ALL, fn, file)

    def _add_hook(self, kind: str, fn: Callable[..., Any], file: Optional[str] = None) -> "SuiteNode":
        # Listeners may reject the hook before it is linked into the tree
        self.emit(EngineEvents.PRE_HOOK, kind, self)
        hook = HookNode(kind, fn, self, file)
        self.children.append(hook)
        self.emit(EngineEvents.HOOK, hook)
        return self

    def __repr__(self) -> str:
        return f"SuiteNode({self.full_title()!r}, file={self.file!r})"


def _noop(*_args: Any) -> None:
    return None
