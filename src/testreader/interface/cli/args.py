from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the configuration validator.
"""

import argparse
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the testreader CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="testreader",
        description="Compile test definition files into per-browser test lists.",
    )

    # --- Inputs ---
    p.add_argument(
        "paths",
        nargs="+",
        help="Definition files or directories to load, in order.",
    )
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="JSON configuration file.",
    )

    # --- Selection ---
    p.add_argument(
        "-b", "--browser",
        dest="browsers",
        action="append",
        default=None,
        help="Browser id to compile for (repeatable).",
    )
    p.add_argument(
        "-g", "--grep",
        dest="grep",
        default=None,
        help="Only run tests whose full title contains this text.",
    )
    p.add_argument(
        "--skip-browsers",
        dest="skip_browsers",
        default=None,
        help="Comma-separated browser ids whose tests are all skipped.",
    )

    # --- Output and diagnostics ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the compiled tests as a JSON document.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        nargs="?",
        const="",
        default=None,
        help="Also write logs to a rotating file (default: the user data directory).",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.browsers:
        overrides["browsers"] = list(args.browsers)
    if args.grep:
        overrides["grep"] = args.grep
    if args.skip_browsers is not None:
        overrides["skip_browsers"] = _split_csv(args.skip_browsers)

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
