from __future__ import annotations

"""
Selection Directive Log.

Records skip/only directives in declaration order and binds each one to
the entity it targets: the next suite or test added to the suite that was
open when the directive was declared. Directives whose scope closes (or
whose file finishes loading) before such an entity appears stay unbound
and are ignored by the resolver.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple, Union

from testreader.domain.selection_models import Matcher, SelectionDirective
from testreader.domain.tree_models import SuiteNode, TestNode

logger = logging.getLogger(__name__)

ScopeProvider = Callable[[], Optional[SuiteNode]]


class Skip:
    """
    Ordered, append-only log of selection directives.
    """

    def __init__(self, scope_provider: Optional[ScopeProvider] = None) -> None:
        self._scope_provider = scope_provider or (lambda: None)
        self._log: List[SelectionDirective] = []
        self._unbound: List[SelectionDirective] = []
        self._file: Optional[str] = None

    @property
    def directives(self) -> Tuple[SelectionDirective, ...]:
        return tuple(self._log)

    @property
    def unbound(self) -> Tuple[SelectionDirective, ...]:
        return tuple(self._unbound)

    def record(
            self,
            action: str,
            matchers: Optional[Sequence[Matcher]],
            *,
            negate: bool = False,
            reason: str = "",
            silent: bool = False,
    ) -> SelectionDirective:
        """Append a directive scoped to the currently open suite."""
        directive = SelectionDirective(
            action=action,
            matchers=tuple(matchers) if matchers is not None else None,
            negate=negate,
            reason=reason,
            silent=silent,
            file=self._file,
            scope=self._scope_provider(),
            seq=len(self._log),
        )
        self._log.append(directive)
        self._unbound.append(directive)
        return directive

    # --- Binding ---

    def handle_entity(self, entity: Union[SuiteNode, TestNode]) -> None:
        """Bind every waiting directive whose scope is the entity's parent."""
        waiting = [d for d in self._unbound if d.scope is None or d.scope is entity.parent]
        for directive in waiting:
            directive.target = entity
            self._unbound.remove(directive)

    def close_scope(self, suite: SuiteNode) -> None:
        self._drop([d for d in self._unbound if d.scope is suite], f"suite '{suite.full_title()}'")

    # --- File boundaries ---

    def begin_file(self, file: Optional[str]) -> None:
        self._file = file

    def end_file(self, file: Optional[str]) -> None:
        self._drop([d for d in self._unbound if d.file == file], f"file '{file}'")
        self._file = None

    def _drop(self, directives: List[SelectionDirective], where: str) -> None:
        for directive in directives:
            logger.warning(
                f"Ignoring {directive.action} directive declared in {where}: "
                f"no suite or test follows it."
            )
            self._unbound.remove(directive)
