from __future__ import annotations

"""
Parser Notification Payloads.

Defines the immutable payload published with BEFORE_FILE_READ and
AFTER_FILE_READ so run orchestration can correlate state added while a
definition file executes.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FileReadEvent:
    """
    File boundary notification.

    Attributes:
        file: Definition file path as registered with the engine.
        namespace: The caller-owned DSL namespace visible to the file.
        browser_id: Browser the compiler instance is specialized for.
        suite: File-bound SuiteSubset view; identical for both boundaries.
        test_parser: TestParserAPI handle for installing DSL controllers.
    """
    file: str
    namespace: Any
    browser_id: str
    suite: Any
    test_parser: Any
