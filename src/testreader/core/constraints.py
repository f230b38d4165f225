from __future__ import annotations

"""
Structural Constraint Validator.

Checks evaluated at tree-mutation time so a violation aborts the load at
the offending declaration:

1. Only per-test hooks (beforeEach / afterEach) may be registered.
2. Test titles are unique within a file and across the whole tree.
"""

import logging
from typing import Dict, Optional

from testreader.domain.constants import (
    CROSS_FILE_DUPLICATE_MESSAGE,
    FORBIDDEN_HOOK_MESSAGE,
    FORBIDDEN_HOOKS,
    SAME_FILE_DUPLICATE_MESSAGE,
)
from testreader.domain.errors import DuplicateTitle, StructuralViolation
from testreader.domain.tree_models import TestNode

logger = logging.getLogger(__name__)


class ConstraintValidator:
    """
    Stateful validator; remembers every test title inserted so far.
    """

    def __init__(self) -> None:
        self._titles: Dict[str, Optional[str]] = {}

    def check_hook(self, kind: str) -> None:
        """
        Reject all-suite hooks before they register.

        Raises:
            StructuralViolation: For beforeAll / afterAll.
        """
        if kind in FORBIDDEN_HOOKS:
            raise StructuralViolation(FORBIDDEN_HOOK_MESSAGE)

    def check_test(self, test: TestNode) -> None:
        """
        Record a test title, failing on any earlier test with the same one.

        Raises:
            DuplicateTitle: Same title in the same file or in another file.
        """
        title = test.full_title()
        if title in self._titles:
            first = self._titles[title]
            if first == test.file:
                raise DuplicateTitle(SAME_FILE_DUPLICATE_MESSAGE.format(title=title, file=test.file))
            raise DuplicateTitle(
                CROSS_FILE_DUPLICATE_MESSAGE.format(title=title, first=first, second=test.file)
            )

        self._titles[title] = test.file
