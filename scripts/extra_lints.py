#!/usr/bin/env python3
"""Custom linting rules for code quality.

Rules:
1. No class-based tests in test files (use module-level functions)
2. No imports inside library functions
3. No mutable default arguments
4. No print() statements in library code (use logging)
5. No TODO/FIXME comments without issue references
6. No use of the module-level ``random`` generator in library code
   (every WeightedSet owns its own ``random.Random``)

Usage: python scripts/extra_lints.py [PATH ...]
"""

import ast
import re
import sys
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DIRECTORIES = ("src", "tests")

# Names on the random module that construct a private generator.
RANDOM_CONSTRUCTORS = frozenset({"Random", "SystemRandom"})


@dataclass
class LintError:
    file: Path
    line: int
    column: int
    rule: str
    message: str

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}: {self.rule}: {self.message}"


class LintVisitor(ast.NodeVisitor):
    """AST visitor that checks for lint violations."""

    def __init__(self, file: Path, source: str) -> None:
        self.file = file
        self.source = source
        self.errors: list[LintError] = []
        self._is_test_file = file.name.startswith("test_")
        self._function_depth = 0

    def _add_error(self, node: ast.AST, rule: str, message: str) -> None:
        lineno = getattr(node, "lineno", 0)
        col_offset = getattr(node, "col_offset", 0)
        self.errors.append(LintError(self.file, lineno, col_offset, rule, message))

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        # Allow Hypothesis stateful test classes (inherit from *.TestCase)
        if self._is_test_file and node.name.startswith("Test"):
            is_hypothesis_stateful = any(
                isinstance(base, ast.Attribute) and base.attr == "TestCase"
                for base in node.bases
            )
            if not is_hypothesis_stateful:
                msg = f"Class-based test '{node.name}' found. Use functions."
                self._add_error(node, "no-class-tests", msg)
        self.generic_visit(node)

    def _visit_function(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> None:
        self._function_depth += 1
        for default in node.args.defaults + node.args.kw_defaults:
            if default is not None and _is_mutable_default(default):
                msg = "Mutable default argument. Use None instead."
                self._add_error(default, "mutable-default", msg)
        self.generic_visit(node)
        self._function_depth -= 1

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        self._visit_function(node)

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        self._visit_function(node)

    def _check_import_location(self, node: ast.Import | ast.ImportFrom) -> None:
        # Tests import the package lazily inside each test function.
        if self._function_depth > 0 and not self._is_test_file:
            self._add_error(
                node,
                "import-in-function",
                "Import inside function. Move to module level.",
            )

    def visit_Import(self, node: ast.Import) -> None:
        self._check_import_location(node)
        self.generic_visit(node)

    def visit_ImportFrom(self, node: ast.ImportFrom) -> None:
        self._check_import_location(node)
        if not self._is_test_file and node.module == "random":
            for alias in node.names:
                if alias.name not in RANDOM_CONSTRUCTORS:
                    self._add_error(
                        node,
                        "global-random",
                        f"'from random import {alias.name}' uses the shared "
                        "generator. Use a random.Random instance.",
                    )
        self.generic_visit(node)

    def visit_Call(self, node: ast.Call) -> None:
        if not self._is_test_file:
            func = node.func
            if isinstance(func, ast.Name) and func.id == "print":
                self._add_error(
                    node,
                    "no-print",
                    "Use logging instead of print() in library code.",
                )
            elif (
                isinstance(func, ast.Attribute)
                and isinstance(func.value, ast.Name)
                and func.value.id == "random"
                and func.attr not in RANDOM_CONSTRUCTORS
            ):
                self._add_error(
                    node,
                    "global-random",
                    f"random.{func.attr}() uses the shared generator. "
                    "Use a random.Random instance.",
                )
        self.generic_visit(node)


def _is_mutable_default(node: ast.expr) -> bool:
    """Check if a default value is a mutable type."""
    if isinstance(node, (ast.List, ast.Dict, ast.Set)):
        return True
    return (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id in ("list", "dict", "set")
    )


def check_todo_comments(file: Path, source: str) -> list[LintError]:
    """Check for TODO/FIXME without issue references."""
    errors: list[LintError] = []
    todo_pattern = re.compile(r"#\s*(TODO|FIXME)(?!:\s*\w+-\d+)", re.IGNORECASE)

    for i, line in enumerate(source.splitlines(), 1):
        match = todo_pattern.search(line)
        if match:
            msg = f"{match.group(1)} needs issue reference (e.g., TODO: WS-123)."
            errors.append(LintError(file, i, match.start(), "todo-needs-issue", msg))
    return errors


def lint_source(path: Path, source: str) -> list[LintError]:
    """Lint ``source`` as though it were the contents of ``path``."""
    try:
        tree = ast.parse(source)
    except SyntaxError as e:
        return [LintError(path, e.lineno or 0, e.offset or 0, "syntax-error", str(e))]
    visitor = LintVisitor(path, source)
    visitor.visit(tree)
    return visitor.errors + check_todo_comments(path, source)


def lint_file(path: Path) -> list[LintError]:
    """Lint a single file and return any errors."""
    return lint_source(path, path.read_text())


def iter_python_files(paths: list[Path]) -> list[Path]:
    files: list[Path] = []
    for path in paths:
        if path.is_file():
            files.append(path)
        elif path.is_dir():
            files.extend(sorted(path.rglob("*.py")))
    return files


def main(argv: list[str] | None = None) -> int:
    """Run linting on the given paths, or on src and tests by default."""
    args = sys.argv[1:] if argv is None else argv
    paths = [Path(arg) for arg in args] or [Path(d) for d in DEFAULT_DIRECTORIES]

    errors: list[LintError] = []
    for py_file in iter_python_files(paths):
        errors.extend(lint_file(py_file))

    if errors:
        for error in sorted(errors, key=lambda e: (str(e.file), e.line, e.column)):
            print(error)
        print(f"\nFound {len(errors)} custom lint error(s)")
        return 1

    print("All custom lint checks passed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
