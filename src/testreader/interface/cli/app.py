from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging
(defaults, optional JSON file, command-line overrides), definition file
discovery, one tree compilation per browser and result rendering.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from testreader.core.config.validator import validate_config
from testreader.core.services.discovery import discover_files
from testreader.core.services.test_skipper import TestSkipper
from testreader.core.tree_compiler import TreeCompiler
from testreader.domain.config import get_default_config, load_config_file
from testreader.domain.errors import TestReaderError
from testreader.domain.tree_models import TestNode
from testreader.infra.logging import LoggingConfig, configure_logging, get_default_log_path, get_logger
from testreader.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 compilation failure, 2 usage error).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr)
    log_level = "DEBUG" if args.debug else "WARNING"
    log_file = (args.log_file or get_default_log_path()) if args.log_file is not None else None
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=log_file))

    # 3. Resolve configuration hierarchy
    try:
        base_conf = load_config_file(args.config_path) if args.config_path else get_default_config()
    except TestReaderError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    browsers = clean_conf["browsers"]
    if not browsers:
        print("ERROR: no browser specified (use -b/--browser or 'browsers' in the config file).", file=sys.stderr)
        return 2

    # 4. Definition file discovery
    try:
        files = discover_files(
            args.paths,
            clean_conf["extensions"],
            clean_conf["include_patterns"],
            clean_conf["exclude_patterns"],
        )
    except FileNotFoundError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    # 5. Compilation phase, one independent tree per browser
    # An explicit --skip-browsers flag takes precedence over the environment
    skipper = TestSkipper(clean_conf, environ={} if args.skip_browsers is not None else None)
    results: Dict[str, List[TestNode]] = {}
    try:
        for browser_id in browsers:
            compiler = TreeCompiler.create(browser_id, clean_conf)
            results[browser_id] = compiler.load(files).apply_skip(skipper).compile()
    except TestReaderError as e:
        logger.error(f"Compilation failed: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    # 6. Output rendering phase
    if args.json_output:
        print(json.dumps(_to_document(results), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(results)

    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge of non-empty override values into the base configuration."""
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _test_status(test: TestNode) -> str:
    if not test.pending:
        return "ready"
    return "silent" if test.silent_skip else "pending"


def _to_document(results: Dict[str, List[TestNode]]) -> Dict[str, Any]:
    return {
        "browsers": {
            browser_id: [
                {
                    "id": t.id,
                    "title": t.full_title(),
                    "file": t.file,
                    "status": _test_status(t),
                    "pending": t.pending,
                    "silent_skip": t.silent_skip,
                    "skip_reason": t.skip_reason,
                }
                for t in tests
            ]
            for browser_id, tests in results.items()
        }
    }


def _print_human_summary(results: Dict[str, List[TestNode]]) -> None:
    """
    Print one line per reportable test: browser, id, status, full title.

    Silently skipped tests are left out of the listing.
    """
    for browser_id, tests in results.items():
        for test in tests:
            if test.silent_skip:
                continue
            print(f"{browser_id}\t{test.id}\t{_test_status(test)}\t{test.full_title()}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
