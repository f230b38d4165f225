from __future__ import annotations

"""
Domain Error Hierarchy.

All failures raised by the compiler derive from TestReaderError so callers
can decide in one place whether to abort a run or report and continue.
"""


class TestReaderError(Exception):
    """Base exception for test-definition compilation failures."""
    __test__ = False


class StructuralViolation(TestReaderError):
    """Raised when a forbidden hook kind is registered on a suite."""


class DuplicateTitle(TestReaderError):
    """Raised when two tests share a title within a file or across files."""


class ConfigurationError(TestReaderError):
    """Raised when a required construction input is missing or malformed."""


class CompilerStateError(TestReaderError):
    """Raised when a compiler operation is called from an invalid state."""


class DefinitionLoadError(TestReaderError):
    """Raised when a definition file cannot be read or compiled."""
