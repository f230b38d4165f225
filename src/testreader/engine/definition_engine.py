from __future__ import annotations

"""
Definition Engine.

Synchronous host engine that executes definition files and builds the
suite tree. File boundaries are announced on the root suite with
pre-require / post-require so the compiler can scope per-file state.
"""

import logging
import re
import traceback
from typing import Any, Dict, List, Mapping, Optional, Pattern, Union

from testreader.domain.constants import EngineEvents
from testreader.domain.errors import DefinitionLoadError, TestReaderError
from testreader.domain.tree_models import SuiteNode, TestNode
from testreader.engine.definition_store import DefinitionStore
from testreader.engine.interface import build_context

logger = logging.getLogger(__name__)


class DefinitionEngine:
    """
    Executes definition files against one root suite.

    Attributes:
        options: Passthrough engine options.
        scope: Caller-owned entries injected into every definition file.
        store: Definition store the engine reads files from.
        suite: Root suite.
        files: Files registered and not yet loaded.
    """

    def __init__(
            self,
            options: Optional[Mapping[str, Any]] = None,
            scope: Optional[Dict[str, Any]] = None,
            store: Optional[DefinitionStore] = None,
    ) -> None:
        self.options: Dict[str, Any] = dict(options or {})
        self.scope: Dict[str, Any] = scope if scope is not None else {}
        self.store = store if store is not None else DefinitionStore()
        self.suite = SuiteNode(root=True)
        self.files: List[str] = []

        self._suites: List[SuiteNode] = [self.suite]
        self._grep: Optional[Pattern[str]] = None
        self._full_trace = bool(self.options.get("full_trace", False))

        if self.options.get("grep"):
            self.grep(self.options["grep"])

    # --- Configuration ---

    def full_trace(self, enabled: bool = True) -> "DefinitionEngine":
        self._full_trace = enabled
        return self

    def grep(self, pattern: Union[str, Pattern[str]]) -> "DefinitionEngine":
        """
        Install a title filter.

        Args:
            pattern: Substring (matched literally) or compiled regex.
        """
        if isinstance(pattern, re.Pattern):
            self._grep = pattern
        else:
            self._grep = re.compile(re.escape(str(pattern)))
        return self

    @property
    def grep_pattern(self) -> Optional[Pattern[str]]:
        return self._grep

    def matches_grep(self, test: TestNode) -> bool:
        if self._grep is None:
            return True
        return self._grep.search(test.full_title()) is not None

    # --- Suite stack ---

    @property
    def current_suite(self) -> SuiteNode:
        return self._suites[-1]

    def push_suite(self, suite: SuiteNode) -> None:
        self._suites.append(suite)

    def pop_suite(self) -> SuiteNode:
        return self._suites.pop()

    # --- Files ---

    def add_file(self, path: str) -> "DefinitionEngine":
        self.files.append(path)
        return self

    def load_files(self) -> None:
        """
        Execute every registered file in order.

        Raises:
            TestReaderError: Propagated unchanged from compiler listeners.
            DefinitionLoadError: If a file cannot be compiled or its top-level code fails.
        """
        for file in list(self.files):
            code = self.store.get(file)
            context = build_context(self, file)

            self.suite.emit(EngineEvents.PRE_REQUIRE, context, file)
            logger.debug(f"Executing definition file: {file}")
            try:
                exec(code, context)
            except TestReaderError:
                raise
            except Exception as e:
                details = f"\n{traceback.format_exc()}" if self._full_trace else ""
                raise DefinitionLoadError(
                    f"Failed to load definition file {file}: {type(e).__name__}: {e}{details}"
                ) from e
            finally:
                del self._suites[1:]
            self.suite.emit(EngineEvents.POST_REQUIRE, context, file)
