from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from PySide6.QtWidgets import (
    QDialog,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ..core.session import Notice

_PLACEHOLDER = """Feature: Account operations
  Scenario: Deposit money
    Given my bank account has "0" TL
    When I deposit "500" TL
    Then my bank account has "500" TL"""

FileReader = Callable[[Path], tuple[str | None, Notice | None]]


class ImportDialog(QDialog):
    """Collects scenario text from a paste or a plain-text file.

    The dialog only gathers text; parsing and merging belong to the session.
    """

    def __init__(self, read_file: FileReader, start_dir: Path | None = None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Import Gherkin Feature/Scenarios")
        self.setModal(True)
        self.resize(640, 420)
        self._read_file = read_file
        self._start_dir = start_dir
        self.loaded_path: Path | None = None

        root = QVBoxLayout(self)
        root.setContentsMargins(12, 12, 12, 12)
        root.setSpacing(8)

        hint = QLabel("Paste scenarios below or load a plain-text file. Each \"Scenario:\" line starts a new scenario.")
        hint.setObjectName("muted")
        hint.setWordWrap(True)
        root.addWidget(hint)

        self.text_edit = QPlainTextEdit(self)
        self.text_edit.setPlaceholderText(_PLACEHOLDER)
        root.addWidget(self.text_edit, 1)

        buttons = QHBoxLayout()
        self.load_button = QPushButton("Load file...")
        self.load_button.clicked.connect(self._load_file)
        buttons.addWidget(self.load_button)
        buttons.addStretch(1)

        cancel_button = QPushButton("Cancel")
        cancel_button.clicked.connect(self.reject)
        buttons.addWidget(cancel_button)

        self.import_button = QPushButton("Import")
        self.import_button.setObjectName("primaryButton")
        self.import_button.setDefault(True)
        self.import_button.clicked.connect(self._accept_if_filled)
        buttons.addWidget(self.import_button)
        root.addLayout(buttons)

    def text(self) -> str:
        return self.text_edit.toPlainText()

    def _load_file(self) -> None:
        start_dir = str(self._start_dir) if self._start_dir else str(Path.home())
        selected, _ = QFileDialog.getOpenFileName(
            self,
            "Choose a scenario file",
            start_dir,
            "Gherkin / text (*.feature *.story *.txt);;All files (*)",
        )
        if not selected:
            return

        path = Path(selected)
        text, notice = self._read_file(path)
        if text is None:
            message = notice.message if notice is not None else f"Could not read file:\n{path}"
            QMessageBox.critical(self, "Import failed", message)
            return

        self.loaded_path = path
        self._start_dir = path.parent
        self.text_edit.setPlainText(text)

    def _accept_if_filled(self) -> None:
        if not self.text().strip():
            QMessageBox.warning(self, "Nothing to import", "Paste scenario text or load a file first.")
            return
        self.accept()
