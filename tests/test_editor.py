import pytest

from brainrot.editor import Position, Selection, TextDocument, TextEditor


def test_empty_document_has_one_line():
    document = TextDocument("")
    assert document.line_count == 1
    assert document.line_at(0) == ""


def test_lines_exclude_line_breaks():
    document = TextDocument("a\r\nbb\ncc\r")
    assert document.line_count == 4
    assert [document.line_at(i) for i in range(4)] == ["a", "bb", "cc", ""]


def test_line_at_out_of_range():
    with pytest.raises(IndexError):
        TextDocument("one").line_at(1)


def test_get_text_across_lines():
    document = TextDocument("def f():\n    return 1\n")
    assert document.get_text(Position(0, 4), Position(1, 10)) == "f():\n    return"


def test_selection_start_and_end_follow_document_order():
    selection = Selection(Position(2, 0), Position(1, 3))
    assert selection.start == Position(1, 3)
    assert selection.end == Position(2, 0)
    assert not selection.is_empty
    assert Selection.caret(4, 2).is_empty


def test_edit_applies_all_insertions_and_bumps_version():
    document = TextDocument("a\nb\n")
    editor = TextEditor(document)

    def build(builder):
        builder.insert(Position(0, 0), "1")
        builder.insert(Position(1, 1), "2")

    assert editor.edit(build)
    assert document.text == "1a\nb2\n"
    assert document.version == 1


def test_same_position_insertions_keep_order():
    document = TextDocument("x")
    editor = TextEditor(document)

    def build(builder):
        builder.insert(Position(0, 0), "first ")
        builder.insert(Position(0, 0), "second ")

    assert editor.edit(build)
    assert document.text == "first second x"


def test_invalid_position_rejects_whole_edit():
    document = TextDocument("abc")
    editor = TextEditor(document)

    def build(builder):
        builder.insert(Position(0, 0), "ok")
        builder.insert(Position(3, 0), "bad")

    assert not editor.edit(build)
    assert document.text == "abc"
    assert document.version == 0


def test_read_only_document_rejects_edit():
    document = TextDocument("abc", read_only=True)
    editor = TextEditor(document)
    assert not editor.edit(lambda builder: builder.insert(Position(0, 0), "x"))
    assert document.text == "abc"


def test_default_selection_is_caret_at_origin():
    editor = TextEditor(TextDocument("abc"))
    assert editor.selections == [Selection.caret(0, 0)]
