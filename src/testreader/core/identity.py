from __future__ import annotations

"""
Identity Generator.

Assigns deterministic ids to suites and tests as they are created. Suite
ids are the short hash of the originating file followed by a per-file
counter; the counter restarts whenever a new file begins loading. Test ids
hash the file, the full title and the declaration index of the test.
Binding happens at creation time; the id itself is computed on first
access and cached by the node.
"""

from typing import Callable, Optional

from testreader.domain.errors import ConfigurationError
from testreader.domain.tree_models import SuiteNode, TestNode
from testreader.infra.fs import resolve_path

HashFn = Callable[[str], str]


class IdentityGenerator:
    """
    Binds lazy id factories to freshly created nodes.
    """

    def __init__(self, hash_fn: HashFn, test_hash_fn: Optional[HashFn] = None) -> None:
        if not callable(hash_fn) or (test_hash_fn is not None and not callable(test_hash_fn)):
            raise ConfigurationError("Identity generator requires a callable hash function.")
        self._hash = hash_fn
        self._test_hash = test_hash_fn or hash_fn
        self._file: Optional[str] = None
        self._suite_counter = 0
        self._test_counter = 0

    def begin_file(self, file: Optional[str]) -> None:
        """Start a new file: subsequent suite ids restart from zero."""
        self._file = file
        self._suite_counter = 0

    def bind_suite(self, suite: SuiteNode) -> None:
        index = self._suite_counter
        self._suite_counter += 1
        file = self._file if self._file is not None else suite.file
        file = resolve_path(file) if file else ""
        suite.bind_id(lambda: f"{self._hash(file)}{index}")

    def bind_test(self, test: TestNode) -> None:
        index = self._test_counter
        self._test_counter += 1
        test.bind_id(lambda: self._test_hash(f"{test.file or ''}\n{test.full_title()}\n{index}"))

    def suite_id(self, suite: SuiteNode) -> Optional[str]:
        return suite.id

    def test_id(self, test: TestNode) -> Optional[str]:
        return test.id
