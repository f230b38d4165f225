from __future__ import annotations

"""
Tree Compiler.

Orchestrates the compilation of definition files into an execution-ready
test list for one browser:

    compiler = TreeCompiler.create("chrome", config, scope=scope)
    tests = compiler.load(files).apply_skip(skipper).apply_grep("login").compile()

Every suite, test and hook the engine adds is validated, identified and
stamped with the browser id the moment it is linked into the tree.
Selection (skip/only directives), then grep, are applied once by compile().

Lifecycle: CONSTRUCTED -> LOADING -> LOADED -> COMPILED. load() may run
several batches; compile() is valid from LOADED and, when repeated, only
re-flattens the already resolved tree.
"""

import functools
import logging
from enum import Enum
from typing import Any, List, Mapping, MutableMapping, Optional, Pattern, Sequence, Union

from testreader.core.config.validator import validate_config
from testreader.core.constraints import ConstraintValidator
from testreader.core.file_loader import FileLoader, PathLike
from testreader.core.identity import IdentityGenerator
from testreader.core.selection import OnlyBuilder, Skip, SkipBuilder, resolve_selection
from testreader.core.test_parser_api import TestParserAPI
from testreader.domain.constants import TEST_ID_HASH_LENGTH, EngineEvents, ParserEvents
from testreader.domain.errors import CompilerStateError, ConfigurationError
from testreader.domain.tree_models import HookNode, SuiteNode, TestNode
from testreader.dsl.namespace import DslNamespace, prepare
from testreader.engine.definition_engine import DefinitionEngine
from testreader.engine.definition_store import DefinitionStore
from testreader.infra.events import EventEmitter
from testreader.utils import crypto

logger = logging.getLogger(__name__)


class CompilerState(str, Enum):
    CONSTRUCTED = "constructed"
    LOADING = "loading"
    LOADED = "loaded"
    COMPILED = "compiled"


class TreeCompiler(EventEmitter):
    """
    Owns the suite tree of one browser and exposes load / select / compile.

    Attributes:
        browser_id: Browser the tree is compiled for.
        config: Validated configuration mapping.
        namespace: DSL namespace shared with definition files.
        test_parser: Handle published to file-read listeners.
        engine: Host definition engine.
    """

    def __init__(
            self,
            browser_id: str,
            config: Optional[Mapping[str, Any]] = None,
            *,
            scope: Optional[MutableMapping[str, Any]] = None,
            store: Optional[DefinitionStore] = None,
    ) -> None:
        super().__init__()
        if not browser_id:
            raise ConfigurationError("A browser id is required to compile a test tree.")

        self.browser_id = browser_id
        self.config, warnings = validate_config(dict(config) if config is not None else None)
        for w in warnings:
            logger.warning(f"Configuration Constraint: {w}")
        self.state = CompilerState.CONSTRUCTED

        # Shared options and DSL exposure
        ns_name = self.config["namespace"]
        self._scope: MutableMapping[str, Any] = scope if scope is not None else {}
        self.engine = DefinitionEngine(self.config.get("engine_opts") or {}, self._scope, store)
        self.engine.full_trace()

        self.namespace: DslNamespace = prepare(self._scope, ns_name)
        self._skip = Skip(lambda: self.namespace.current_suite)
        self._install_dsl()
        self.test_parser = TestParserAPI.create(self, self.namespace)

        # Per-node collaborators
        self._validator = ConstraintValidator()
        self._identity = IdentityGenerator(
            crypto.get_short_md5,
            functools.partial(crypto.get_short_md5, length=TEST_ID_HASH_LENGTH),
        )
        self._loader = FileLoader(
            self.engine, self, self.namespace, browser_id,
            self.test_parser, self._identity, self._skip,
        )
        self._loader.attach()
        self._listen(self.engine.suite)

        if self.config.get("grep"):
            self.apply_grep(self.config["grep"])

    @classmethod
    def create(cls, browser_id: str, config: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> "TreeCompiler":
        return cls(browser_id, config, **kwargs)

    @property
    def suite(self) -> SuiteNode:
        return self.engine.suite

    @property
    def directives(self) -> Sequence[Any]:
        return self._skip.directives

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def load(self, files: Union[PathLike, Sequence[PathLike]]) -> "TreeCompiler":
        """
        Load one path or an ordered sequence of paths.

        Raises:
            CompilerStateError: If the tree was already compiled.
            TestReaderError: Any validation failure, propagated unchanged.
        """
        if self.state is CompilerState.COMPILED:
            raise CompilerStateError("Cannot load files into a compiled tree.")

        self._install_dsl()
        self.state = CompilerState.LOADING
        self._loader.load(files)
        self.state = CompilerState.LOADED
        return self

    def apply_skip(self, test_skipper: Any) -> "TreeCompiler":
        """Delegate per-browser skip policy to an external collaborator."""
        test_skipper.apply_skip(self.suite, self.browser_id)
        return self

    def apply_grep(self, pattern: Union[str, Pattern[str], None] = None) -> "TreeCompiler":
        """Install a title filter; an empty pattern is a no-op."""
        if pattern:
            self.engine.grep(pattern)
        return self

    def compile(self) -> List[TestNode]:
        """
        Resolve selection, apply grep and flatten the tree.

        Returns:
            List[TestNode]: Tests in depth-first declaration order, pending ones included.

        Raises:
            CompilerStateError: If no load completed successfully.
        """
        if self.state is CompilerState.LOADED:
            resolve_selection(self.suite, self._skip.directives, self.browser_id)
            self._apply_grep_filter()
            self.state = CompilerState.COMPILED
        elif self.state is not CompilerState.COMPILED:
            raise CompilerStateError(f"Cannot compile a tree in state '{self.state.value}'.")

        tests = list(self.suite.iter_tests())
        logger.info(
            f"Compiled {len(tests)} test(s) for '{self.browser_id}' "
            f"({sum(1 for t in tests if t.pending)} pending)"
        )
        return tests

    # -------------------------------------------------------------------------
    # DSL WIRING
    # -------------------------------------------------------------------------

    def _install_dsl(self) -> None:
        # Namespace is shared per scope; rebind it to this compiler before loading
        self.namespace.skip = SkipBuilder(self._skip)
        self.namespace.only = OnlyBuilder(self._skip)
        self.namespace.ctx = self.config.get("ctx") or {}

    # -------------------------------------------------------------------------
    # TREE LISTENERS
    # -------------------------------------------------------------------------

    def _listen(self, suite: SuiteNode) -> None:
        suite.on(EngineEvents.PRE_HOOK, self._on_pre_hook)
        suite.on(EngineEvents.HOOK, self._on_hook)
        suite.on(EngineEvents.SUITE, self._on_suite)
        suite.on(EngineEvents.TEST, self._on_test)

    def _on_pre_hook(self, kind: str, _suite: SuiteNode) -> None:
        self._validator.check_hook(kind)

    def _on_hook(self, hook: HookNode) -> None:
        hook.browser_id = self.browser_id

    def _on_suite(self, suite: SuiteNode) -> None:
        self._identity.bind_suite(suite)
        suite.browser_id = self.browser_id
        self._listen(suite)
        self._skip.handle_entity(suite)
        logger.debug(f"Suite added: '{suite.full_title()}' ({suite.file})")
        self.emit(ParserEvents.SUITE, suite)

    def _on_test(self, test: TestNode) -> None:
        self._validator.check_test(test)
        self._identity.bind_test(test)
        test.browser_id = self.browser_id
        self._skip.handle_entity(test)
        logger.debug(f"Test added: '{test.full_title()}' ({test.file})")
        self.emit(ParserEvents.TEST, test)

    # -------------------------------------------------------------------------
    # SELECTION HELPERS
    # -------------------------------------------------------------------------

    def _apply_grep_filter(self) -> None:
        if self.engine.grep_pattern is None:
            return
        for test in self.suite.iter_tests():
            if not test.pending and not self.engine.matches_grep(test):
                test.pending = True
                test.silent_skip = True
