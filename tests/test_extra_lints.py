"""Tests for the custom lint rules in scripts/extra_lints.py."""

from pathlib import Path

import pytest

LIBRARY_FILE = Path("src/weighted_set/example.py")
TEST_FILE = Path("tests/test_example.py")


def rules(path: Path, source: str) -> list[str]:
    from extra_lints import lint_source

    return [error.rule for error in lint_source(path, source)]


def test_clean_library_source_passes() -> None:
    source = (
        "import logging\n"
        "import random\n"
        "logger = logging.getLogger(__name__)\n"
        "def make(seed):\n"
        "    return random.Random(seed)\n"
    )
    assert rules(LIBRARY_FILE, source) == []


def test_class_based_test_flagged() -> None:
    assert rules(TEST_FILE, "class TestThing:\n    pass\n") == ["no-class-tests"]


def test_state_machine_assignment_allowed() -> None:
    source = (
        "class ThingMachine(RuleBasedStateMachine):\n"
        "    pass\n"
        "TestThing = ThingMachine.TestCase\n"
    )
    assert rules(TEST_FILE, source) == []


def test_import_in_function_flagged_only_in_library() -> None:
    source = "def f():\n    import os\n    return os\n"
    assert rules(LIBRARY_FILE, source) == ["import-in-function"]
    assert rules(TEST_FILE, source) == []


@pytest.mark.parametrize("default", ["[]", "{}", "set()", "list()", "dict()"])
def test_mutable_default_flagged(default: str) -> None:
    source = f"def f(x={default}):\n    return x\n"
    assert rules(LIBRARY_FILE, source) == ["mutable-default"]


def test_print_flagged_only_in_library() -> None:
    source = "print('hi')\n"
    assert rules(LIBRARY_FILE, source) == ["no-print"]
    assert rules(TEST_FILE, source) == []


def test_todo_without_issue_flagged() -> None:
    assert rules(LIBRARY_FILE, "x = 1  # " + "TODO fix\n") == ["todo-needs-issue"]
    assert rules(LIBRARY_FILE, "x = 1  # " + "TODO: WS-12 fix\n") == []


def test_global_random_call_flagged() -> None:
    source = "import random\nx = random.randint(1, 6)\n"
    assert rules(LIBRARY_FILE, source) == ["global-random"]
    assert rules(TEST_FILE, source) == []


def test_global_random_import_flagged() -> None:
    assert rules(LIBRARY_FILE, "from random import choice\n") == ["global-random"]
    assert rules(LIBRARY_FILE, "from random import Random\n") == []


def test_syntax_error_reported() -> None:
    assert rules(LIBRARY_FILE, "def (:\n") == ["syntax-error"]


def test_project_sources_pass(capsys: pytest.CaptureFixture[str]) -> None:
    from extra_lints import main

    root = Path(__file__).resolve().parent.parent
    assert main([str(root / "src"), str(root / "tests")]) == 0
    assert "passed" in capsys.readouterr().out


def test_state_machine_subclass_allowed() -> None:
    """A Test* class built on a Hypothesis TestCase is not flagged."""
    source = "class TestThing(ThingMachine.TestCase):\n    pass\n"
    assert rules(TEST_FILE, source) == []
