from __future__ import annotations

"""
BDD Definition Interface.

Builds the globals mapping a definition file executes with. Suites are
opened with describe(), tests declared with it(); both accept the body as
an argument or work as decorators. A test declared without a body is
pending until a decorated body is attached:

    @describe("login form")
    def _():
        @it("accepts valid credentials")
        def _():
            ...

The engine keeps a stack of open suites; every declaration attaches to the
top of that stack.
"""

from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from testreader.domain.constants import EngineEvents
from testreader.domain.tree_models import SuiteNode, TestNode

if TYPE_CHECKING:
    from testreader.engine.definition_engine import DefinitionEngine

Body = Callable[..., Any]


def build_context(engine: "DefinitionEngine", file: str) -> Dict[str, Any]:
    """
    Create the globals of one definition file.

    Args:
        engine: Engine owning the suite stack.
        file: Definition file path stamped on every declared node.

    Returns:
        Dict[str, Any]: Globals including the BDD functions and the DSL scope.
    """

    def _open_suite(title: str, fn: Body, pending: bool) -> SuiteNode:
        parent = engine.current_suite
        suite = SuiteNode(title, file=file)
        suite.pending = pending
        parent.add_suite(suite)

        engine.push_suite(suite)
        engine.suite.emit(EngineEvents.ENTER_SUITE, suite)
        try:
            fn()
        finally:
            engine.pop_suite()
        engine.suite.emit(EngineEvents.EXIT_SUITE, suite)
        return suite

    def _declare_test(title: str, fn: Optional[Body], pending: bool) -> Any:
        test = TestNode(title, fn, file=file, pending=pending or fn is None)
        engine.current_suite.add_test(test)
        if fn is not None:
            return test

        # Without a body the test stays pending unless a decorated body follows
        def _attach(body: Body) -> TestNode:
            test.fn = body
            test.pending = pending
            return test

        return _attach

    def describe(title: str, fn: Optional[Body] = None) -> Any:
        if fn is None:
            return lambda body: _open_suite(title, body, False)
        return _open_suite(title, fn, False)

    def xdescribe(title: str, fn: Optional[Body] = None) -> Any:
        if fn is None:
            return lambda body: _open_suite(title, body, True)
        return _open_suite(title, fn, True)

    def it(title: str, fn: Optional[Body] = None) -> Any:
        return _declare_test(title, fn, False)

    def xit(title: str, fn: Optional[Body] = None) -> Any:
        return _declare_test(title, fn, True)

    def _hook(register: Callable[[SuiteNode, Body, str], SuiteNode]) -> Callable[[Body], Body]:
        def _register(fn: Body) -> Body:
            register(engine.current_suite, fn, file)
            return fn
        return _register

    context: Dict[str, Any] = dict(engine.scope)
    context.update({
        "__file__": file,
        "__name__": "__testreader_definition__",
        "__builtins__": __builtins__,
        "describe": describe,
        "xdescribe": xdescribe,
        "it": it,
        "xit": xit,
        "before_each": _hook(SuiteNode.before_each),
        "after_each": _hook(SuiteNode.after_each),
        "before_all": _hook(SuiteNode.before_all),
        "after_all": _hook(SuiteNode.after_all),
        "before": _hook(SuiteNode.before_all),
        "after": _hook(SuiteNode.after_all),
    })
    return context
