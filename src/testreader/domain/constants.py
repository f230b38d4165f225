from __future__ import annotations

"""
Domain Constants and Event Names.

Provides centralized access to the event identifiers exchanged between the
definition engine, the tree compiler and external run orchestration, along
with hook kinds and the fixed diagnostic messages of the validator.
"""

from typing import FrozenSet

DEFAULT_NAMESPACE = "testreader"
SKIP_BROWSERS_ENV = "TESTREADER_SKIP_BROWSERS"
SHORT_HASH_LENGTH = 7
TEST_ID_HASH_LENGTH = 16

# -----------------------------------------------------------------------------
# EVENT IDENTIFIERS
# -----------------------------------------------------------------------------

class ParserEvents:
    """Notifications emitted by the compiler on every node addition."""
    SUITE = "suite"
    TEST = "test"


class RunnerEvents:
    """File boundary notifications published to run orchestration."""
    BEFORE_FILE_READ = "beforeFileRead"
    AFTER_FILE_READ = "afterFileRead"


class EngineEvents:
    """Lifecycle events emitted by the host definition engine on suites."""
    PRE_REQUIRE = "pre-require"
    POST_REQUIRE = "post-require"
    ENTER_SUITE = "enter-suite"
    EXIT_SUITE = "exit-suite"
    SUITE = "suite"
    TEST = "test"
    PRE_HOOK = "pre-hook"
    HOOK = "hook"

# -----------------------------------------------------------------------------
# HOOK KINDS
# -----------------------------------------------------------------------------

BEFORE_EACH = "beforeEach"
AFTER_EACH = "afterEach"
BEFORE_ALL = "beforeAll"
AFTER_ALL = "afterAll"

FORBIDDEN_HOOKS: FrozenSet[str] = frozenset({BEFORE_ALL, AFTER_ALL})

# -----------------------------------------------------------------------------
# DIAGNOSTIC MESSAGES
# -----------------------------------------------------------------------------

FORBIDDEN_HOOK_MESSAGE = (
    '"before" and "after" hooks are forbidden, '
    'use "beforeEach" and "afterEach" hooks instead'
)
SAME_FILE_DUPLICATE_MESSAGE = "Tests with the same title '{title}' in file '{file}' can't be used"
CROSS_FILE_DUPLICATE_MESSAGE = (
    "Tests with the same title '{title}' in files '{first}' and '{second}' can't be used"
)
ENV_SKIP_REASON = f"The test was skipped by environment variable {SKIP_BROWSERS_ENV}"
