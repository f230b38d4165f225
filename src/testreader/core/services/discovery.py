from __future__ import annotations

"""
Definition File Discovery.

Expands command-line paths into an ordered list of definition files.
Explicit files are kept as given; directories are walked in sorted order,
pruning excluded directories early and keeping only files that follow the
test naming convention.
"""

import logging
import os
import re
from typing import Iterable, List, Optional, Sequence

logger = logging.getLogger(__name__)

_TEST_NAME_RX = re.compile(r"^(test_.*|.*_test|.*\.spec|.*\.test)\.[^.]+$", re.IGNORECASE)


# -----------------------------------------------------------------------------
# PATTERN COMPILATION AND MATCHING
# -----------------------------------------------------------------------------

def compile_patterns(patterns: Iterable[str]) -> List[re.Pattern]:
    """
    Transform raw regex strings into compiled Pattern objects.

    Malformed expressions are discarded with a warning.

    Args:
        patterns: Raw regex strings.

    Returns:
        List[re.Pattern]: Compiled regex objects.
    """
    compiled: List[re.Pattern] = []
    for p in patterns:
        try:
            compiled.append(re.compile(p))
        except re.error as e:
            logger.warning(f"Ignoring invalid pattern '{p}': {e}")
    return compiled


def matches_any(name: str, compiled_patterns: Sequence[re.Pattern]) -> bool:
    return any(rx.search(name) for rx in compiled_patterns)


def is_test(file_name: str) -> bool:
    """
    Classify a file as a definition file by its name.

    Accepts test_*, *_test, *.spec and *.test stems.
    """
    return _TEST_NAME_RX.match(file_name) is not None


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def discover_files(
        paths: Sequence[str],
        extensions: Optional[Sequence[str]] = None,
        include_patterns: Optional[Sequence[str]] = None,
        exclude_patterns: Optional[Sequence[str]] = None,
) -> List[str]:
    """
    Resolve files and directories into definition files.

    Args:
        paths: Files or directories, in the order they should load.
        extensions: Allowed extensions for walked files.
        include_patterns: Regexes a walked file name must match.
        exclude_patterns: Regexes pruning walked files and directories.

    Returns:
        List[str]: Definition files, without duplicates, in discovery order.

    Raises:
        FileNotFoundError: If a path does not exist.
    """
    exts = list(extensions) if extensions else [".py"]
    include_rx = compile_patterns(include_patterns if include_patterns is not None else [".*"])
    exclude_rx = compile_patterns(exclude_patterns or [])

    found: List[str] = []
    for path in paths:
        if os.path.isdir(path):
            candidates = _walk(path, exts, include_rx, exclude_rx)
        elif os.path.isfile(path):
            candidates = [path]
        else:
            raise FileNotFoundError(f"Path does not exist: {path}")

        for file in candidates:
            if file not in found:
                found.append(file)

    logger.debug(f"Discovered {len(found)} definition file(s)")
    return found


def _walk(
        root_path: str,
        extensions: List[str],
        include_rx: List[re.Pattern],
        exclude_rx: List[re.Pattern],
) -> List[str]:
    out: List[str] = []
    for root, dirs, files in os.walk(root_path):
        # In-place pruning keeps os.walk out of excluded directories
        dirs[:] = sorted(d for d in dirs if not matches_any(d, exclude_rx))

        for file_name in sorted(files):
            if matches_any(file_name, exclude_rx) or not matches_any(file_name, include_rx):
                continue
            if os.path.splitext(file_name)[1] not in extensions or not is_test(file_name):
                continue
            out.append(os.path.join(root, file_name))
    return out
