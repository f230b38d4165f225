from __future__ import annotations

"""
Definition Store.

Holds compiled definition files keyed by resolved absolute path. The engine
reads every definition through the store; resetting a path drops its prior
definition so the next load re-reads and re-compiles the file instead of
reusing stale content.
"""

import logging
import os
from types import CodeType
from typing import Dict

from testreader.domain.errors import DefinitionLoadError
from testreader.infra.fs import resolve_path

logger = logging.getLogger(__name__)


class DefinitionStore:
    """
    Cache of compiled definition code objects.
    """

    def __init__(self) -> None:
        self._definitions: Dict[str, CodeType] = {}
        self._stats = {"hits": 0, "misses": 0}

    def get(self, path: str) -> CodeType:
        """
        Return the compiled definition for a file, compiling it on a miss.

        Args:
            path: Definition file path.

        Returns:
            CodeType: Code object ready to be executed.

        Raises:
            DefinitionLoadError: If the file is missing or not valid Python.
        """
        key = resolve_path(path)
        code = self._definitions.get(key)
        if code is not None:
            self._stats["hits"] += 1
            return code

        self._stats["misses"] += 1
        if not os.path.isfile(key):
            raise DefinitionLoadError(f"Definition file not found: {path}")

        try:
            with open(key, "r", encoding="utf-8") as f:
                source = f.read()
            code = compile(source, key, "exec")
        except SyntaxError as e:
            raise DefinitionLoadError(f"Syntax error in definition file {path}: {e}") from e
        except OSError as e:
            raise DefinitionLoadError(f"Failed to read definition file {path}: {e}") from e

        self._definitions[key] = code
        return code

    def reset(self, path: str) -> bool:
        """
        Drop the prior definition of a file.

        Returns:
            bool: True if a definition was cached for the path.
        """
        key = resolve_path(path)
        existed = self._definitions.pop(key, None) is not None
        if existed:
            logger.debug(f"Definition reset: {key}")
        return existed

    def clear(self) -> None:
        self._definitions.clear()
        self._stats = {"hits": 0, "misses": 0}

    def stats(self) -> Dict[str, int]:
        return {
            "hits": self._stats["hits"],
            "misses": self._stats["misses"],
            "size": len(self._definitions),
        }

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and resolve_path(path) in self._definitions
