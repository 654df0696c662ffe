from __future__ import annotations

import ast
import os
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = next(
    candidate
    for candidate in Path(__file__).resolve().parents
    if (candidate / "src" / "lazywire").is_dir()
)
EXAMPLES_ROOT = REPO_ROOT / "examples"


def _example_paths() -> list[Path]:
    return sorted(EXAMPLES_ROOT.glob("ex_*/01_*.py"))


def _expected_lines(path: Path) -> list[str]:
    """Collect the ``# =>`` expectations written after each print() call."""
    source = path.read_text(encoding="utf-8")
    source_lines = source.splitlines()
    print_calls = sorted(
        (
            node
            for node in ast.walk(ast.parse(source, filename=str(path)))
            if isinstance(node, ast.Call)
            and isinstance(node.func, ast.Name)
            and node.func.id == "print"
        ),
        key=lambda node: (node.lineno, node.col_offset),
    )

    expected: list[str] = []
    for print_call in print_calls:
        closing_line = source_lines[(print_call.end_lineno or print_call.lineno) - 1]
        assert "# =>" in closing_line, f"{path}:{print_call.lineno}: missing '# =>' expectation"
        expected.append(closing_line.split("# =>", maxsplit=1)[1].strip())
    return expected


def test_examples_are_present() -> None:
    assert _example_paths()


@pytest.mark.parametrize(
    "path",
    [pytest.param(path, id=str(path.relative_to(REPO_ROOT))) for path in _example_paths()],
)
def test_example_stdout_matches_inline_expectations(path: Path) -> None:
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(
        part for part in (str(REPO_ROOT / "src"), env.get("PYTHONPATH")) if part
    )

    completed = subprocess.run(  # noqa: S603
        [sys.executable, str(path)],
        cwd=path.parent,
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )

    assert completed.returncode == 0, completed.stderr
    assert completed.stdout.splitlines() == _expected_lines(path)
