from PySide6.QtGui import QTextCursor

from gherkinpad.core.suggestions import suggest
from gherkinpad.ui.highlighter import qt_offset
from gherkinpad.ui.scenario_editor import ScenarioEditor, python_offset
from gherkinpad.ui.theme import DARK_TOKENS

VOCABULARY = ['my account has "0" TL', 'I deposit "500" TL']


def _editor_typing_on_second_line(text: str) -> ScenarioEditor:
    editor = ScenarioEditor(DARK_TOKENS)
    editor.set_suggestion_provider(lambda snapshot: suggest(snapshot, VOCABULARY))
    editor.set_text(text)

    block = editor.document().findBlockByNumber(1)
    cursor = editor.textCursor()
    cursor.setPosition(block.position() + block.length() - 1)
    editor.setTextCursor(cursor)
    editor.insertPlainText("c")
    return editor


def test_python_offset_is_inverse_of_qt_offset() -> None:
    text = "Scenario: 😀\nGiven x"
    for index in range(len(text) + 1):
        assert python_offset(text, qt_offset(text, index)) == index


def test_accept_suggestion_replaces_line_and_places_cursor(qt_app) -> None:
    editor = _editor_typing_on_second_line("Scenario: 😀 deposit\nGiven my ac\nThen done")

    assert editor.accept_suggestion('Given my account has "0" TL')

    expected_line = 'Scenario: 😀 deposit\nGiven my account has "0" TL'
    assert editor.toPlainText() == expected_line + "\nThen done"
    assert editor.textCursor().position() == qt_offset(expected_line, len(expected_line))
    assert editor.snapshot().cursor_offset == len(expected_line)


def test_accept_suggestion_ignored_after_new_line(qt_app) -> None:
    editor = _editor_typing_on_second_line("Scenario: A\nGiven my ac")
    editor.moveCursor(QTextCursor.MoveOperation.End)
    editor.insertPlainText("\n")

    assert not editor.accept_suggestion('Given my account has "0" TL')
    assert editor.toPlainText() == "Scenario: A\nGiven my acc\n"
