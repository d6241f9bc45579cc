from grimoire.embedded import extract_files


def test_files_written_with_content(tmp_path):
    files = {"alfa.txt": b"alfa content", "bravo.txt": b"bravo content"}
    written = extract_files(files, tmp_path)
    assert written == [tmp_path / "alfa.txt", tmp_path / "bravo.txt"]
    for name, content in files.items():
        assert (tmp_path / name).read_bytes() == content


def test_nested_directories_created(tmp_path):
    root = tmp_path / "out"
    extract_files({"sub/deeper/charlie.txt": b"charlie"}, root)
    assert (root / "sub" / "deeper" / "charlie.txt").read_bytes() == b"charlie"


def test_existing_file_replaced(tmp_path):
    target = tmp_path / "delta.txt"
    target.write_bytes(b"a much longer old content")
    extract_files({"delta.txt": b"new"}, tmp_path)
    assert target.read_bytes() == b"new"


def test_text_content_written_as_utf8(tmp_path):
    extract_files({"echo.txt": "échο"}, tmp_path)
    assert (tmp_path / "echo.txt").read_text(encoding="utf-8") == "échο"


def test_empty_bundle_writes_nothing(tmp_path):
    assert extract_files({}, tmp_path) == []
    assert list(tmp_path.iterdir()) == []