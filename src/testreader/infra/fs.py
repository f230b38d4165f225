from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path resolution shared by the definition store, the file loader
and the CLI, plus the per-user data directory that hosts diagnostic logs.
"""

import os
# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "TestReader"
UNIX_APP_DIR_NAME = ".testreader"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/TestReader
    - Linux/Mac: ~/.testreader

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def resolve_path(path: str) -> str:
    """
    Resolve a definition file path to the absolute key used for caching.

    Args:
        path: Relative or absolute path, may contain '~' or '$VAR'.

    Returns:
        str: Normalized absolute path.
    """
    return os.path.abspath(os.path.expandvars(os.path.expanduser(str(path))))

