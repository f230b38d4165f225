from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for configuration dictionaries and definition files.
"""

import os
import sys
import textwrap
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'testreader.domain.config'.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        # Browser matrix
        "browsers": ["chrome", "firefox"],
        "skip_browsers": [],

        # Selection
        "grep": "",

        # DSL exposure
        "namespace": "testreader",
        "ctx": {"env": "test"},
        "engine_opts": {},

        # Discovery
        "extensions": [".py"],
        "include_patterns": [".*"],
        "exclude_patterns": [],
    }


@pytest.fixture
def write_definition(tmp_path: Path) -> Callable[[str, str], str]:
    """
    Return a helper writing a dedented definition file under tmp_path.

    Returns:
        Callable[[str, str], str]: (file name, source) -> absolute path.
    """

    def _write(name: str, source: str) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source).lstrip(), encoding="utf-8")
        return str(path)

    return _write
