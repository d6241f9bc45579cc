from pathlib import Path

import pytest

from grimoire.test_dir import (
    DirTestCase,
    collect_test_cases,
    read_test_case,
    widget_testing,
)


def _case(directory: Path, name: str, text: str, expected: str) -> Path:
    path = directory / name
    path.write_text(f"{text}\n_____\n{expected}\n")
    return path


def test_widget_testing():
    assert widget_testing("hello") is True
    assert widget_testing("goodbye") is False


def test_read_test_case_round_trip(tmp_path):
    path = _case(tmp_path, "greeting.customtest", "hello", "true")
    case = read_test_case(path)
    assert case == DirTestCase(name="greeting", text="hello", expected="true")


def test_read_test_case_without_separator(tmp_path):
    path = tmp_path / "broken.customtest"
    path.write_text("hello")
    with pytest.raises(ValueError):
        read_test_case(path)


def test_collect_only_customtest_files(tmp_path):
    _case(tmp_path, "b.customtest", "bye", "false")
    _case(tmp_path, "a.customtest", "hello", "true")
    _case(tmp_path, "ignored.txt", "hello", "true")
    cases = collect_test_cases(tmp_path)
    assert [case.name for case in cases] == ["a", "b"]


def test_collected_cases_pass(tmp_path):
    _case(tmp_path, "yes.customtest", "hello", "true")
    _case(tmp_path, "no.customtest", "other", "false")
    results = {case.name: case.check(widget_testing) for case in collect_test_cases(tmp_path)}
    assert results == {"yes": True, "no": False}


def test_check_mismatch_raises():
    matching = DirTestCase(name="right", text="hello", expected="true")
    assert matching.check(widget_testing) is True
    case = DirTestCase(name="wrong", text="hello", expected="false")
    with pytest.raises(AssertionError):
        case.check(widget_testing)


def test_check_plain_text_expected():
    case = DirTestCase(name="echo", text="hello", expected="hello")
    assert case.check(str) == "hello"


def test_collect_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        collect_test_cases(tmp_path / "missing")