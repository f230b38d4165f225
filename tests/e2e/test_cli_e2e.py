from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes
and stream output (stdout/stderr) for real definition files on disk.
"""

import json
import os
import subprocess
import sys
import textwrap
from pathlib import Path
from typing import Dict, List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "testreader" / "main.py"


def run_cli(
        args: List[str],
        cwd: Optional[Path] = None,
        extra_env: Optional[Dict[str, str]] = None,
) -> subprocess.CompletedProcess[str]:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH so the package resolves
    without being installed, and clears the skip environment variable
    unless a test sets it explicitly.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env.pop("TESTREADER_SKIP_BROWSERS", None)
    env.update(extra_env or {})

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8"
    )


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Create a definition project for E2E testing.

    Structure:
    /specs
      test_login.py
      /nested
        cart.spec.py
      helpers.py
    """
    specs = tmp_path / "specs"
    (specs / "nested").mkdir(parents=True)

    (specs / "test_login.py").write_text(textwrap.dedent("""
        @describe("login")
        def _():
            it("accepts password", lambda: None)

            testreader.skip.in_("firefox", "flaky")
            it("remembers user", lambda: None)
    """), encoding="utf-8")

    (specs / "nested" / "cart.spec.py").write_text(textwrap.dedent("""
        testreader.only.in_("chrome")
        it("cart applies coupon", lambda: None)
    """), encoding="utf-8")

    (specs / "helpers.py").write_text("raise RuntimeError('not a definition file')\n", encoding="utf-8")
    return specs


def parse_lines(stdout: str) -> List[List[str]]:
    return [line.split("\t") for line in stdout.splitlines() if line.strip()]


def test_cli_lists_tests_per_browser(sample_project: Path) -> None:
    result = run_cli([str(sample_project), "-b", "chrome", "-b", "firefox"])

    assert result.returncode == 0, result.stderr
    rows = [(b, status, title) for b, _id, status, title in parse_lines(result.stdout)]
    assert rows == [
        ("chrome", "ready", "login accepts password"),
        ("chrome", "ready", "login remembers user"),
        ("chrome", "ready", "cart applies coupon"),
        ("firefox", "ready", "login accepts password"),
        ("firefox", "pending", "login remembers user"),
    ]


def test_cli_json_output(sample_project: Path) -> None:
    result = run_cli([str(sample_project), "-b", "firefox", "--json"])

    assert result.returncode == 0, result.stderr
    doc = json.loads(result.stdout)
    tests = {t["title"]: t for t in doc["browsers"]["firefox"]}
    assert tests["cart applies coupon"]["status"] == "silent"
    assert tests["login remembers user"]["skip_reason"] == "flaky"
    assert all(len(t["id"]) == 16 for t in tests.values())


def test_cli_grep(sample_project: Path) -> None:
    result = run_cli([str(sample_project), "-b", "chrome", "-g", "password"])

    assert result.returncode == 0, result.stderr
    assert [row[3] for row in parse_lines(result.stdout)] == ["login accepts password"]


def test_cli_skip_browsers_flag(sample_project: Path) -> None:
    result = run_cli([str(sample_project), "-b", "chrome", "--skip-browsers", "chrome"])

    assert result.returncode == 0, result.stderr
    assert {row[2] for row in parse_lines(result.stdout)} == {"pending"}


def test_cli_skip_browsers_environment(sample_project: Path) -> None:
    result = run_cli(
        [str(sample_project), "-b", "chrome"],
        extra_env={"TESTREADER_SKIP_BROWSERS": "chrome"},
    )

    assert result.returncode == 0, result.stderr
    assert {row[2] for row in parse_lines(result.stdout)} == {"pending"}


def test_cli_config_file(sample_project: Path, tmp_path: Path) -> None:
    config = tmp_path / "testreader.json"
    config.write_text(json.dumps({"browsers": ["firefox"], "grep": "login"}), encoding="utf-8")

    result = run_cli([str(sample_project), "--config", str(config)])

    assert result.returncode == 0, result.stderr
    rows = parse_lines(result.stdout)
    assert {row[0] for row in rows} == {"firefox"}
    assert [row[3] for row in rows] == ["login accepts password", "login remembers user"]


def test_cli_duplicate_titles_fail(tmp_path: Path) -> None:
    definition = tmp_path / "test_dup.py"
    definition.write_text('it("same", lambda: None)\nit("same", lambda: None)\n', encoding="utf-8")

    result = run_cli([str(definition), "-b", "chrome"])

    assert result.returncode == 1
    assert "Tests with the same title 'same'" in result.stderr


def test_cli_requires_browser(sample_project: Path) -> None:
    result = run_cli([str(sample_project)])
    assert result.returncode == 2
    assert "no browser specified" in result.stderr


def test_cli_missing_path(tmp_path: Path) -> None:
    result = run_cli([str(tmp_path / "missing"), "-b", "chrome"])
    assert result.returncode == 2
    assert "does not exist" in result.stderr


def test_cli_writes_log_file(sample_project: Path, tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "run.log"

    result = run_cli([str(sample_project), "-b", "chrome", "--debug", "--log-file", str(log_file)])

    assert result.returncode == 0, result.stderr
    assert "Compiled 3 test(s) for 'chrome'" in log_file.read_text(encoding="utf-8")
