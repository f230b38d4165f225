from __future__ import annotations

"""
Selection Resolver.

Turns the bound directives into final pending / silent_skip flags. Runs
once per tree, after every file has loaded and before grep and flattening.

For each node the last directive (in declaration order) that excludes the
compiled browser decides. A node already pending keeps its own state. A
pending suite passes its state down to descendants that have no decision
of their own. The pass never clears a pending flag.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union

from testreader.domain.selection_models import SelectionDirective
from testreader.domain.tree_models import HookNode, SuiteNode, TestNode

logger = logging.getLogger(__name__)

Decision = Tuple[str, bool]
Node = Union[SuiteNode, TestNode]


def resolve_selection(
        root: SuiteNode,
        directives: Iterable[SelectionDirective],
        browser_id: str,
) -> int:
    """
    Apply directives to the tree rooted at `root`.

    Args:
        root: Root suite.
        directives: Directive log; unbound entries are ignored.
        browser_id: Browser the tree is compiled for.

    Returns:
        int: Number of pending tests after resolution.
    """
    bound: Dict[int, List[SelectionDirective]] = {}
    for directive in sorted(directives, key=lambda d: d.seq):
        if directive.target is not None:
            bound.setdefault(id(directive.target), []).append(directive)

    _resolve(root, None, bound, browser_id)

    pending = sum(1 for t in root.iter_tests() if t.pending)
    logger.debug(f"Selection resolved for '{browser_id}': {pending} pending test(s)")
    return pending


def _resolve(
        node: Node,
        inherited: Optional[Decision],
        bound: Dict[int, List[SelectionDirective]],
        browser_id: str,
) -> None:
    decision = _own_decision(node, bound, browser_id)
    if decision is None and node.pending:
        decision = (node.skip_reason, node.silent_skip)
    if decision is None:
        decision = inherited

    if decision is not None:
        node.pending = True
        node.skip_reason, node.silent_skip = decision

    if isinstance(node, SuiteNode):
        for child in node.children:
            if not isinstance(child, HookNode):
                _resolve(child, decision, bound, browser_id)


def _own_decision(
        node: Node,
        bound: Dict[int, List[SelectionDirective]],
        browser_id: str,
) -> Optional[Decision]:
    decision: Optional[Decision] = None
    for directive in bound.get(id(node), []):
        if directive.excludes(browser_id):
            decision = (directive.reason, directive.silent)
    return decision
