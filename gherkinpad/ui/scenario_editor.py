from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import QPoint, Qt
from PySide6.QtGui import QKeyEvent, QTextCursor
from PySide6.QtWidgets import QListWidget, QListWidgetItem, QPlainTextEdit, QWidget

from ..core.suggestions import EditSnapshot, SuggestionList, apply_suggestion, is_stale
from .highlighter import GherkinHighlighter, qt_offset
from .theme import ThemeTokens

SuggestionProvider = Callable[[EditSnapshot], SuggestionList | None]

_ACCEPT_KEYS = {Qt.Key.Key_Return, Qt.Key.Key_Enter, Qt.Key.Key_Tab}


def python_offset(text: str, qt_position: int) -> int:
    """Convert a Qt (UTF-16) cursor position into an index into ``text``."""
    encoded = text.encode("utf-16-le")
    return len(encoded[: qt_position * 2].decode("utf-16-le", errors="ignore"))


class ScenarioEditor(QPlainTextEdit):
    def __init__(self, tokens: ThemeTokens, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("scenarioEditor")
        self.setPlaceholderText("Start writing your Gherkin scenario...")
        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)

        self.highlighter = GherkinHighlighter(self.document(), tokens)
        self._provider: SuggestionProvider | None = None
        self._active: SuggestionList | None = None
        self._updating = False
        self._max_visible = 8

        self.popup = QListWidget(self)
        self.popup.setObjectName("suggestionPopup")
        self.popup.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.popup.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.popup.itemClicked.connect(self._accept_item)
        self.popup.hide()

        self.textChanged.connect(self._on_text_changed)

    def set_suggestion_provider(self, provider: SuggestionProvider | None) -> None:
        self._provider = provider

    def set_max_visible_suggestions(self, count: int) -> None:
        self._max_visible = max(1, count)

    def set_theme(self, tokens: ThemeTokens) -> None:
        self.highlighter.set_theme(tokens)

    def set_text(self, text: str) -> None:
        self._updating = True
        self.setPlainText(text)
        self._updating = False
        self.hide_suggestions()
        self.moveCursor(QTextCursor.MoveOperation.End)

    def snapshot(self) -> EditSnapshot:
        text = self.toPlainText()
        return EditSnapshot(text=text, cursor_offset=python_offset(text, self.textCursor().position()))

    @property
    def suggestions_visible(self) -> bool:
        return self.popup.isVisible()

    def hide_suggestions(self) -> None:
        self._active = None
        self.popup.hide()

    def _on_text_changed(self) -> None:
        if self._updating:
            return
        if self._active is not None and is_stale(self._active, self.toPlainText()):
            self.hide_suggestions()
        if self._provider is None:
            return

        suggestions = self._provider(self.snapshot())
        if suggestions is None:
            self.hide_suggestions()
            return
        self._show_suggestions(suggestions)

    def _show_suggestions(self, suggestions: SuggestionList) -> None:
        self._active = suggestions
        self.popup.clear()
        for text in suggestions.texts():
            item = QListWidgetItem(text)
            item.setData(Qt.ItemDataRole.UserRole, text)
            self.popup.addItem(item)
        self.popup.setCurrentRow(0)

        row_height = max(18, self.popup.sizeHintForRow(0))
        visible_rows = min(len(suggestions), self._max_visible)
        frame = self.popup.frameWidth() * 2
        cursor_rect = self.cursorRect()
        origin = self.viewport().mapTo(self, QPoint(cursor_rect.left(), cursor_rect.bottom() + 2))
        width = max(220, min(640, self.width() - origin.x() - 8))

        self.popup.setGeometry(origin.x(), origin.y(), width, row_height * visible_rows + frame + 4)
        self.popup.show()
        self.popup.raise_()

    def _accept_item(self, item: QListWidgetItem) -> None:
        self.accept_suggestion(str(item.data(Qt.ItemDataRole.UserRole)))

    def accept_suggestion(self, full_text: str) -> bool:
        active = self._active
        if active is None:
            return False

        applied = apply_suggestion(self.toPlainText(), active, full_text)
        if applied is None:
            self.hide_suggestions()
            return False

        block = self.document().findBlockByNumber(active.context.line_index)
        cursor = QTextCursor(block)
        cursor.movePosition(QTextCursor.MoveOperation.EndOfBlock, QTextCursor.MoveMode.KeepAnchor)
        self._updating = True
        cursor.insertText(full_text)
        self._updating = False
        cursor.setPosition(qt_offset(applied.text, applied.cursor_offset))
        self.setTextCursor(cursor)
        self.hide_suggestions()
        self.setFocus()
        return True

    def keyPressEvent(self, event: QKeyEvent) -> None:  # type: ignore[override]
        if not self.popup.isVisible():
            super().keyPressEvent(event)
            return

        key = event.key()
        if key == Qt.Key.Key_Escape:
            self.hide_suggestions()
            return
        if key in (Qt.Key.Key_Up, Qt.Key.Key_Down):
            step = -1 if key == Qt.Key.Key_Up else 1
            row = (self.popup.currentRow() + step) % self.popup.count()
            self.popup.setCurrentRow(row)
            return
        if key in _ACCEPT_KEYS:
            item = self.popup.currentItem()
            if item is not None:
                self._accept_item(item)
                return
        super().keyPressEvent(event)

    def focusOutEvent(self, event) -> None:  # type: ignore[override]
        self.hide_suggestions()
        super().focusOutEvent(event)
