from __future__ import annotations

from .namespace import DslNamespace, prepare, teardown

__all__ = ["DslNamespace", "prepare", "teardown"]
