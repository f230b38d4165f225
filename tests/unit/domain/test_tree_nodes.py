from __future__ import annotations

"""
Unit tests for the definition tree nodes.

Verifies title composition, declaration-order traversal, hook views,
lazy write-once identity and structural notifications.
"""

from unittest.mock import MagicMock

from testreader.domain.constants import AFTER_EACH, BEFORE_EACH, EngineEvents
from testreader.domain.tree_models import HookNode, SuiteNode, TestNode


def test_test_without_body_is_pending() -> None:
    assert TestNode("t").pending is True
    assert TestNode("t", lambda: None).pending is False
    assert TestNode.create("t").pending is False


def test_full_title_joins_ancestors() -> None:
    root = SuiteNode(root=True)
    outer = SuiteNode("outer")
    inner = SuiteNode("inner")
    test = TestNode.create("does things")
    root.add_suite(outer)
    outer.add_suite(inner)
    inner.add_test(test)

    assert test.full_title() == "outer inner does things"
    assert root.full_title() == ""


def test_iter_tests_is_depth_first() -> None:
    root = SuiteNode(root=True)
    suite = SuiteNode("s")
    root.add_test(TestNode.create("1"))
    root.add_suite(suite)
    suite.add_test(TestNode.create("2"))
    root.add_test(TestNode.create("3"))

    assert [t.title for t in root.iter_tests()] == ["1", "2", "3"]


def test_add_emits_after_linking() -> None:
    suite = SuiteNode("s")
    seen = []
    suite.on(EngineEvents.TEST, lambda t: seen.append(t.parent))

    suite.add_test(TestNode.create("t"))

    assert seen == [suite]


def test_hooks_emit_pre_hook_then_hook() -> None:
    suite = SuiteNode("s", file="a.py")
    pre, post = MagicMock(), MagicMock()
    suite.on(EngineEvents.PRE_HOOK, pre)
    suite.on(EngineEvents.HOOK, post)

    assert suite.before_each(lambda: None) is suite
    suite.after_each(lambda: None, "b.py")

    pre.assert_any_call(BEFORE_EACH, suite)
    pre.assert_any_call(AFTER_EACH, suite)
    hook = post.call_args_list[0].args[0]
    assert isinstance(hook, HookNode)
    assert hook.file == "a.py"
    assert suite.after_each_hooks[0].file == "b.py"
    assert hook.title == '"beforeEach" hook'


def test_id_is_lazy_and_bound_once() -> None:
    calls = []
    test = TestNode.create("t")
    test.bind_id(lambda: calls.append(1) or "first")
    test.bind_id(lambda: "second")

    assert calls == []
    assert test.id == "first"
    assert test.id == "first"
    assert calls == [1]


def test_unbound_id_is_none() -> None:
    assert SuiteNode("s").id is None
