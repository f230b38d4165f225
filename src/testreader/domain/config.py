from __future__ import annotations

"""
Configuration Domain Management.

Provides the default compiler configuration and loading of optional JSON
configuration files. Values coming from files or the CLI are normalized
afterwards by the configuration validator.
"""

import json
import logging
import os
from typing import Any, Dict

from testreader.domain.constants import DEFAULT_NAMESPACE
from testreader.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default compiler configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Browser matrix
        "browsers": [],
        "skip_browsers": [],

        # Selection
        "grep": "",

        # DSL exposure
        "namespace": DEFAULT_NAMESPACE,
        "ctx": {},

        # Passthrough options for the definition engine
        "engine_opts": {},

        # Definition file discovery
        "extensions": [".py"],
        "include_patterns": [".*"],
        "exclude_patterns": [
            r"^__init__\.py$",
            r".*\.pyc$",
            r"^(__pycache__|\.git|\.idea|\.vscode|node_modules)$",
            r"^\.",
        ],
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config_file(path: str) -> Dict[str, Any]:
    """
    Load a JSON configuration file and merge it over the defaults.

    Args:
        path: Path to the JSON document.

    Returns:
        Dict[str, Any]: Merged (not yet validated) configuration.

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a JSON object.
    """
    if not os.path.isfile(path):
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Failed to read config file '{path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file '{path}' must contain a JSON object.")

    config = get_default_config()
    config.update(data)
    logger.debug(f"Configuration loaded from {path}")
    return config
