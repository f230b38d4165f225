from __future__ import annotations

"""
Unit tests for the Definition Engine and its BDD interface.

Verifies:
1. Call and decorator forms of describe/it.
2. Lifecycle events around files and suites.
3. Error wrapping of definition failures.
4. Grep configuration.
"""

import re
from typing import Any, Callable, List
from unittest.mock import MagicMock

import pytest

from testreader.domain.constants import EngineEvents
from testreader.domain.errors import DefinitionLoadError, TestReaderError
from testreader.domain.tree_models import TestNode
from testreader.engine import DefinitionEngine

WriteFn = Callable[[str, str], str]


def load(engine: DefinitionEngine, *paths: str) -> DefinitionEngine:
    for path in paths:
        engine.add_file(path)
    engine.load_files()
    return engine


def test_builds_tree_in_declaration_order(write_definition: WriteFn) -> None:
    path = write_definition("test_a.py", """
        @describe("outer")
        def _():
            it("first", lambda: None)

            @it("second")
            def _():
                pass

        describe("other", lambda: xit("third", lambda: None))
        xdescribe("skipped", lambda: None)
    """)

    engine = load(DefinitionEngine(), path)

    outer, other, skipped = engine.suite.suites
    assert [t.title for t in outer.tests] == ["first", "second"]
    assert other.tests[0].pending is True
    assert skipped.pending is True
    assert all(t.file == path for t in engine.suite.iter_tests())


def test_test_declarations_without_body(write_definition: WriteFn) -> None:
    """Decorated xit() stays pending with its body; a bare it() is pending."""
    path = write_definition("test_a.py", """
        @xit("later")
        def _():
            pass

        it("todo")

        @it("now")
        def _():
            pass
    """)

    engine = load(DefinitionEngine(), path)

    later, todo, now = engine.suite.tests
    assert later.pending is True
    assert later.fn is not None
    assert todo.pending is True
    assert todo.fn is None
    assert now.pending is False
    assert now.fn is not None


def test_scope_is_visible_to_definitions(write_definition: WriteFn) -> None:
    path = write_definition("test_a.py", 'it(PREFIX + " test", lambda: None)\n')
    engine = load(DefinitionEngine(scope={"PREFIX": "shared"}), path)
    assert engine.suite.tests[0].title == "shared test"


def test_emits_file_and_suite_events(write_definition: WriteFn) -> None:
    path = write_definition("test_a.py", 'describe("s", lambda: None)\n')
    engine = DefinitionEngine()
    events: List[Any] = []
    for name in (EngineEvents.PRE_REQUIRE, EngineEvents.ENTER_SUITE,
                 EngineEvents.EXIT_SUITE, EngineEvents.POST_REQUIRE):
        engine.suite.on(name, lambda *args, _name=name: events.append(_name))

    load(engine, path)

    assert events == ["pre-require", "enter-suite", "exit-suite", "post-require"]


def test_suite_stack_unwinds(write_definition: WriteFn) -> None:
    path = write_definition("test_a.py", """
        @describe("s")
        def _():
            @describe("nested")
            def _():
                it("deep", lambda: None)
        it("top", lambda: None)
    """)

    engine = load(DefinitionEngine(), path)

    assert engine.suite.tests[0].title == "top"
    assert engine.current_suite is engine.suite


def test_definition_errors_are_wrapped(write_definition: WriteFn) -> None:
    path = write_definition("test_bad.py", 'raise RuntimeError("nope")\n')
    engine = DefinitionEngine().full_trace(False)

    with pytest.raises(DefinitionLoadError) as exc_info:
        load(engine, path)

    assert "RuntimeError: nope" in str(exc_info.value)
    assert "Traceback" not in str(exc_info.value)
    assert engine.current_suite is engine.suite


def test_full_trace_includes_traceback(write_definition: WriteFn) -> None:
    path = write_definition("test_bad.py", 'raise RuntimeError("nope")\n')
    with pytest.raises(DefinitionLoadError, match="Traceback"):
        load(DefinitionEngine({"full_trace": True}), path)


def test_domain_errors_propagate_unchanged(write_definition: WriteFn) -> None:
    path = write_definition("test_a.py", 'it("t", lambda: None)\n')
    engine = DefinitionEngine()
    engine.suite.on(EngineEvents.TEST, MagicMock(side_effect=TestReaderError("stop")))

    with pytest.raises(TestReaderError) as exc_info:
        load(engine, path)

    assert type(exc_info.value) is TestReaderError


def test_grep_literal_and_regex() -> None:
    engine = DefinitionEngine({"grep": "a.b"})
    test = TestNode.create("axb")
    assert engine.matches_grep(test) is False

    engine.grep(re.compile(r"a.b"))
    assert engine.matches_grep(test) is True


def test_no_grep_matches_everything() -> None:
    assert DefinitionEngine().matches_grep(TestNode.create("anything"))
