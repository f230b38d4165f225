from __future__ import annotations

"""
Unit tests for the skip/only DSL builders.

Verifies:
1. Each builder call appends one directive with the right flags.
2. Matcher normalization (strings, regexes, lists) and rejection of bad input.
3. Chaining through `also`.
"""

import re

import pytest

from testreader.core.selection import OnlyBuilder, Skip, SkipBuilder
from testreader.domain.selection_models import ONLY, SKIP


@pytest.fixture
def skip() -> Skip:
    return Skip()


def test_skip_in_records_reported_skip(skip: Skip) -> None:
    SkipBuilder(skip).in_("chrome", "flaky")

    (d,) = skip.directives
    assert (d.action, d.matchers, d.negate, d.reason, d.silent) == (SKIP, ("chrome",), False, "flaky", False)


def test_skip_in_silent(skip: Skip) -> None:
    SkipBuilder(skip).in_(["chrome", "firefox"], silent=True)

    (d,) = skip.directives
    assert d.matchers == ("chrome", "firefox")
    assert d.silent is True


def test_skip_not_in_negates(skip: Skip) -> None:
    rx = re.compile("chrome")
    SkipBuilder(skip).not_in(rx, "only chrome works")

    (d,) = skip.directives
    assert d.negate is True
    assert d.matchers == (rx,)


def test_skip_all_matches_everything(skip: Skip) -> None:
    SkipBuilder(skip).all("broken")

    (d,) = skip.directives
    assert d.matchers is None
    assert d.excludes("anything")


def test_only_directives_are_silent(skip: Skip) -> None:
    OnlyBuilder(skip).in_("chrome").not_in("firefox")

    first, second = skip.directives
    assert (first.action, first.negate, first.silent) == (ONLY, False, True)
    assert (second.action, second.negate, second.silent) == (ONLY, True, True)


def test_also_chains_on_same_builder(skip: Skip) -> None:
    builder = SkipBuilder(skip)
    assert builder.in_("chrome").also.in_("firefox") is builder
    assert [d.seq for d in skip.directives] == [0, 1]


@pytest.mark.parametrize("bad", [1, None, ["chrome", 2], object()])
def test_rejects_invalid_matchers(skip: Skip, bad: object) -> None:
    with pytest.raises(TypeError):
        SkipBuilder(skip).in_(bad)
    assert skip.directives == ()
