from __future__ import annotations

"""
Selection Domain Data Models.

Defines the directive record produced by the skip/only DSL builders. A
directive is appended to an ordered log at declaration time, bound to its
target node when that node is created, and evaluated against the compiled
browser only when the selection resolver runs.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Optional, Pattern, Tuple, Union

Matcher = Union[str, Pattern[str]]

SKIP = "skip"
ONLY = "only"


@dataclass
class SelectionDirective:
    """
    One skip/only instruction.

    Attributes:
        action: Either "skip" or "only".
        matchers: Browser matchers, or None for "all browsers".
        negate: Inverts the browser match (the not_in variants).
        reason: Reason reported for an explicit skip.
        silent: Whether the resulting skip is hidden from reports.
        file: Definition file being loaded when the directive was declared.
        scope: Suite on top of the context stack at declaration time.
        seq: Declaration index within the log.
        target: Suite or test the directive was bound to, if any.
    """
    action: str
    matchers: Optional[Tuple[Matcher, ...]] = None
    negate: bool = False
    reason: str = ""
    silent: bool = False
    file: Optional[str] = None
    scope: Optional[Any] = field(default=None, repr=False)
    seq: int = 0
    target: Optional[Any] = field(default=None, repr=False)

    def matches_browser(self, browser_id: str) -> bool:
        """Evaluate the browser matchers, honoring negation."""
        if self.matchers is None:
            hit = True
        else:
            hit = any(_match(m, browser_id) for m in self.matchers)
        return not hit if self.negate else hit

    def excludes(self, browser_id: str) -> bool:
        """
        Decide whether the bound entity is skipped for the given browser.

        A skip directive excludes on a browser match; an only directive
        excludes everything it does not match.
        """
        hit = self.matches_browser(browser_id)
        return hit if self.action == SKIP else not hit


def _match(matcher: Matcher, browser_id: str) -> bool:
    if isinstance(matcher, re.Pattern):
        return matcher.search(browser_id) is not None
    return matcher == browser_id
