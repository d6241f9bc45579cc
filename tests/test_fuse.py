from grimoire.fuse import ITEMS, main, refine


def test_empty_string_becomes_none():
    assert refine(["alfa", "", "bravo"]) == ["alfa", None, "bravo"]


def test_items_after_empty_are_kept():
    refined = refine(ITEMS)
    assert len(refined) == len(ITEMS)
    assert refined[3] is None
    assert refined[4:] == ["delta", "echo"]


def test_non_empty_items_unchanged():
    refined = refine(ITEMS)
    assert [r for r in refined if r is not None] == [i for i in ITEMS if i]


def test_empty_input():
    assert refine([]) == []


def test_main_prints_to_stderr(capsys):
    assert main([]) == 0
    captured = capsys.readouterr()
    assert "None" in captured.err
    assert "'delta'" in captured.err
    assert captured.out == ""