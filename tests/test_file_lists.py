from pathlib import Path

import pytest

from grimoire.file_lists import (
    copy_file_list_from_to,
    get_files_in_dir,
    get_files_in_tree,
)


def _make(root: Path, *names: str) -> Path:
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"content of {name}")
    return root


# Single directory


def test_one_file(tmp_path):
    _make(tmp_path, "alfa.txt")
    assert get_files_in_dir(tmp_path) == [Path("alfa.txt")]


def test_do_not_descend_into_sub_dirs(tmp_path):
    _make(tmp_path, "bravo.txt", "sub/nested.txt")
    assert get_files_in_dir(tmp_path) == [Path("bravo.txt")]


def test_skip_hidden_files(tmp_path):
    _make(tmp_path, "charlie.txt", ".hidden.txt")
    assert get_files_in_dir(tmp_path) == [Path("charlie.txt")]


def test_only_include_files(tmp_path):
    _make(tmp_path, "alfa.txt", "bravo.html")
    assert get_files_in_dir(tmp_path, ["html"]) == [Path("bravo.html")]


def test_exclude_files(tmp_path):
    _make(tmp_path, "bravo.html", "charlie.txt")
    assert get_files_in_dir(tmp_path, None, ["html"]) == [Path("charlie.txt")]


def test_dir_include_is_case_sensitive(tmp_path):
    _make(tmp_path, "bravo.html")
    assert get_files_in_dir(tmp_path, ["HTML"]) == []


def test_dir_filters_drop_files_without_extension(tmp_path):
    _make(tmp_path, "no-extension", "charlie.txt")
    assert get_files_in_dir(tmp_path, None, ["html"]) == [Path("charlie.txt")]
    assert get_files_in_dir(tmp_path) == [Path("charlie.txt"), Path("no-extension")]


def test_dir_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        get_files_in_dir(tmp_path / "invalid-dir")


# Tree


def _tree_six(root: Path) -> Path:
    return _make(
        root,
        "alfa.txt",
        "bravo.html",
        "sub-dir/sub-sub-dir/charlie.html",
        "sub-dir/sub-sub-dir/delta.txt",
    )


def test_files_with_extensions(tmp_path):
    _make(tmp_path, "alfa.txt")
    assert get_files_in_tree(tmp_path) == [Path("alfa.txt")]


def test_files_without_extensions(tmp_path):
    _make(tmp_path, "no-extension")
    assert get_files_in_tree(tmp_path) == [Path("no-extension")]


def test_hidden_files_removed(tmp_path):
    _make(tmp_path, "bravo.txt", ".hidden")
    assert get_files_in_tree(tmp_path) == [Path("bravo.txt")]


def test_sub_dir_files(tmp_path):
    _make(tmp_path, "sub/sub-sub/delta-sub-sub.txt", "delta.txt")
    assert get_files_in_tree(tmp_path) == [
        Path("delta.txt"),
        Path("sub/sub-sub/delta-sub-sub.txt"),
    ]


def test_hidden_dirs_removed(tmp_path):
    _make(tmp_path, "echo.txt", ".git/config", ".cache/inner/file.txt")
    assert get_files_in_tree(tmp_path) == [Path("echo.txt")]


@pytest.mark.parametrize("ext", ["html", "HTML"])
def test_include_files(tmp_path, ext):
    _tree_six(tmp_path)
    assert get_files_in_tree(tmp_path, [ext]) == [
        Path("bravo.html"),
        Path("sub-dir/sub-sub-dir/charlie.html"),
    ]


@pytest.mark.parametrize("ext", ["html", "HTML"])
def test_exclude_files_in_tree(tmp_path, ext):
    _tree_six(tmp_path)
    assert get_files_in_tree(tmp_path, None, [ext]) == [
        Path("alfa.txt"),
        Path("sub-dir/sub-sub-dir/delta.txt"),
    ]


def test_tree_filters_keep_files_without_extension(tmp_path):
    _make(tmp_path, "no-extension", "bravo.html", "alfa.txt")
    result = get_files_in_tree(tmp_path, ["html"])
    assert Path("no-extension") in result
    assert Path("alfa.txt") not in result


def test_tree_result_is_sorted_and_relative(tmp_path):
    _tree_six(tmp_path)
    result = get_files_in_tree(tmp_path)
    assert result == sorted(result, key=lambda p: p.parts)
    assert all(not p.is_absolute() for p in result)
    assert len(result) == 4


def test_error_on_missing_dir(tmp_path):
    with pytest.raises(NotADirectoryError):
        get_files_in_tree(tmp_path / "invalid-dir")


def test_error_on_file_instead_of_dir(tmp_path):
    _make(tmp_path, "alfa.txt")
    with pytest.raises(NotADirectoryError):
        get_files_in_tree(tmp_path / "alfa.txt")


# Copying


def test_copy_listed_files(tmp_path):
    source = _make(tmp_path / "input", "alfa.txt", "sub/bravo.txt", "charlie.html")
    destination = tmp_path / "output"
    files = get_files_in_tree(source, ["txt"])
    copy_file_list_from_to(files, source, destination, False)
    assert get_files_in_tree(destination) == files
    for file in files:
        assert (destination / file).read_bytes() == (source / file).read_bytes()


def test_copy_keeps_existing_without_overwrite(tmp_path):
    source = _make(tmp_path / "input", "alfa.txt")
    destination = tmp_path / "output"
    destination.mkdir()
    (destination / "alfa.txt").write_text("old")
    copy_file_list_from_to([Path("alfa.txt")], source, destination, False)
    assert (destination / "alfa.txt").read_text() == "old"


def test_copy_overwrites_when_asked(tmp_path):
    source = _make(tmp_path / "input", "alfa.txt")
    destination = tmp_path / "output"
    destination.mkdir()
    (destination / "alfa.txt").write_text("old")
    copy_file_list_from_to([Path("alfa.txt")], source, destination, True)
    assert (destination / "alfa.txt").read_text() == (source / "alfa.txt").read_text()


def test_copy_missing_source_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        copy_file_list_from_to(["nope.txt"], tmp_path / "in", tmp_path / "out")