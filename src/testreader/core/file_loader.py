from __future__ import annotations

"""
File Loader and Isolation Manager.

Drives the definition engine through one batch of files. Before a file is
registered its prior definition is reset in the store, so every run
re-evaluates the file's top-level code. While the engine executes files it
announces each boundary; the loader turns those into BEFORE_FILE_READ /
AFTER_FILE_READ notifications carrying a file-bound SuiteSubset, and
resets the per-file state of the identity generator, the directive log and
the DSL suite stack.
"""

import logging
import os
from typing import Any, Dict, List, Sequence, Union

from testreader.core.identity import IdentityGenerator
from testreader.core.selection.skip import Skip
from testreader.core.suite_subset import SuiteSubset
from testreader.core.test_parser_api import TestParserAPI
from testreader.domain.constants import EngineEvents, RunnerEvents
from testreader.domain.parser_models import FileReadEvent
from testreader.domain.tree_models import SuiteNode
from testreader.dsl.namespace import DslNamespace
from testreader.engine.definition_engine import DefinitionEngine
from testreader.infra.events import EventEmitter
from testreader.infra.fs import resolve_path

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class FileLoader:
    """
    Sequential, synchronous loading of definition files.
    """

    def __init__(
            self,
            engine: DefinitionEngine,
            emitter: EventEmitter,
            namespace: DslNamespace,
            browser_id: str,
            test_parser: TestParserAPI,
            identity: IdentityGenerator,
            skip: Skip,
    ) -> None:
        self._engine = engine
        self._emitter = emitter
        self._namespace = namespace
        self._browser_id = browser_id
        self._test_parser = test_parser
        self._identity = identity
        self._skip = skip
        self._subsets: Dict[str, SuiteSubset] = {}

    def attach(self) -> None:
        """Subscribe to the engine's file and suite boundaries."""
        root = self._engine.suite
        root.on(EngineEvents.PRE_REQUIRE, self._on_pre_require)
        root.on(EngineEvents.POST_REQUIRE, self._on_post_require)
        root.on(EngineEvents.ENTER_SUITE, self._on_enter_suite)
        root.on(EngineEvents.EXIT_SUITE, self._on_exit_suite)

    def load(self, files: Union[PathLike, Sequence[PathLike]]) -> None:
        """
        Register and execute one batch of definition files.

        Args:
            files: A single path or an ordered sequence of paths.
        """
        paths: List[str] = [os.fspath(files)] if isinstance(files, (str, os.PathLike)) else [
            os.fspath(f) for f in files
        ]

        for path in paths:
            self._engine.store.reset(resolve_path(path))
            self._engine.add_file(path)
            logger.debug(f"Registered definition file: {path}")

        self._engine.load_files()
        self._engine.files.clear()

    # --- Engine boundaries ---

    def _on_pre_require(self, _context: Dict[str, Any], file: str) -> None:
        self._identity.begin_file(file)
        self._skip.begin_file(file)
        self._namespace.reset_stack(self._engine.suite)

        subset = SuiteSubset.create(self._engine.suite, file)
        self._subsets[file] = subset
        self._emitter.emit(RunnerEvents.BEFORE_FILE_READ, self._make_event(file, subset))

    def _on_post_require(self, _context: Dict[str, Any], file: str) -> None:
        subset = self._subsets.pop(file, None)
        if subset is None:
            subset = SuiteSubset.create(self._engine.suite, file)
        self._identity.begin_file(None)
        self._skip.end_file(file)
        self._namespace.reset_stack()
        self._emitter.emit(RunnerEvents.AFTER_FILE_READ, self._make_event(file, subset))

    def _on_enter_suite(self, suite: SuiteNode) -> None:
        self._namespace.push_suite(suite)

    def _on_exit_suite(self, suite: SuiteNode) -> None:
        self._namespace.pop_suite()
        self._skip.close_scope(suite)

    # --- Helpers ---

    def _make_event(self, file: str, subset: SuiteSubset) -> FileReadEvent:
        return FileReadEvent(
            file=file,
            namespace=self._namespace,
            browser_id=self._browser_id,
            suite=subset,
            test_parser=self._test_parser,
        )
