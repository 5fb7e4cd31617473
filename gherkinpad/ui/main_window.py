from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSplitter,
    QStatusBar,
    QTextBrowser,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from ..core.autosave import DraftAutoSave
from ..core.session import EditorSession, Notice
from ..core.storage import EXPORT_FILENAME, ScenarioStore
from ..settings import AppSettings
from .highlighter import render_preview_html
from .import_dialog import ImportDialog
from .scenario_editor import ScenarioEditor
from .theme import build_app_stylesheet, get_theme_tokens


class MainWindow(QMainWindow):
    PREVIEW_DEFAULT_WIDTH = 400

    def __init__(self, settings: AppSettings | None = None, store: ScenarioStore | None = None) -> None:
        super().__init__()

        self.settings = settings if settings is not None else AppSettings.load()
        self.tokens = get_theme_tokens(self.settings.ui_theme)
        self.session = EditorSession(store if store is not None else ScenarioStore())
        self.selected_id: str | None = None

        self.setWindowTitle("GherkinPad - Cucumber Gherkin Test Case Editor[*]")
        self.setMinimumSize(900, 600)
        self.resize(self.settings.window_width, self.settings.window_height)

        self._create_actions()
        self._build_ui()
        self._connect_signals()

        self.draft_autosave = DraftAutoSave(debounce_ms=self.settings.autosave_debounce_ms, parent=self)
        self.draft_autosave.draft_ready.connect(self._store_draft)
        self.draft_autosave.pending_changed.connect(self.setWindowModified)

        self._apply_theme()
        self._refresh_list()
        self._restore_draft()
        self._update_edit_mode()

    def _create_actions(self) -> None:
        self.save_action = QAction("Save", self)
        self.save_action.setShortcut(QKeySequence.StandardKey.Save)
        self.save_action.triggered.connect(self._save)

        self.new_action = QAction("New", self)
        self.new_action.setShortcut(QKeySequence("Ctrl+N"))
        self.new_action.triggered.connect(self._new_scenario)

        self.import_action = QAction("Import", self)
        self.import_action.setShortcut(QKeySequence("Ctrl+I"))
        self.import_action.triggered.connect(self._open_import_dialog)

        self.export_action = QAction("Export", self)
        self.export_action.setShortcut(QKeySequence("Ctrl+E"))
        self.export_action.triggered.connect(self._export)

        self.toggle_preview_action = QAction("Show preview", self)
        self.toggle_preview_action.setCheckable(True)
        self.toggle_preview_action.setChecked(self.settings.preview_visible)
        self.toggle_preview_action.setShortcut(QKeySequence("Ctrl+Shift+P"))
        self.toggle_preview_action.toggled.connect(self._toggle_preview)

        self.toggle_theme_action = QAction("Light theme", self)
        self.toggle_theme_action.setCheckable(True)
        self.toggle_theme_action.setChecked(self.settings.ui_theme == "light")
        self.toggle_theme_action.toggled.connect(self._toggle_theme)

    def _build_ui(self) -> None:
        toolbar = QToolBar("Toolbar")
        toolbar.setMovable(False)
        toolbar.addAction(self.save_action)
        toolbar.addAction(self.new_action)
        toolbar.addSeparator()
        toolbar.addAction(self.import_action)
        toolbar.addAction(self.export_action)
        toolbar.addSeparator()
        toolbar.addAction(self.toggle_preview_action)
        toolbar.addAction(self.toggle_theme_action)
        self.addToolBar(toolbar)

        root = QWidget(self)
        root_layout = QHBoxLayout(root)
        root_layout.setContentsMargins(12, 12, 12, 12)
        root_layout.setSpacing(10)

        self.splitter = QSplitter(Qt.Orientation.Horizontal)
        self.splitter.setChildrenCollapsible(True)
        self.splitter.addWidget(self._build_editor_panel())
        self.preview_panel = self._build_preview_panel()
        self.splitter.addWidget(self.preview_panel)
        self.splitter.setCollapsible(0, False)
        self.splitter.setStretchFactor(0, 1)
        self.splitter.setStretchFactor(1, 0)
        self.splitter.setSizes([self.settings.window_width - self.PREVIEW_DEFAULT_WIDTH, self.PREVIEW_DEFAULT_WIDTH])
        root_layout.addWidget(self.splitter)

        self.setCentralWidget(root)
        self._build_status_bar()
        self.preview_panel.setVisible(self.settings.preview_visible)

    def _build_editor_panel(self) -> QWidget:
        panel = QWidget(self)
        layout = QVBoxLayout(panel)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self.mode_label = QLabel()
        self.mode_label.setObjectName("sectionTitle")
        layout.addWidget(self.mode_label)

        self.editor = ScenarioEditor(self.tokens, panel)
        self.editor.set_max_visible_suggestions(self.settings.max_visible_suggestions)
        self.editor.set_suggestion_provider(self.session.suggest)
        layout.addWidget(self.editor, 3)

        list_header = QHBoxLayout()
        list_title = QLabel("Saved Test Scenarios")
        list_title.setObjectName("sectionTitle")
        list_header.addWidget(list_title)
        list_header.addStretch(1)
        self.edit_button = QPushButton("Edit")
        self.delete_button = QPushButton("Delete")
        list_header.addWidget(self.edit_button)
        list_header.addWidget(self.delete_button)
        layout.addLayout(list_header)

        self.scenario_list = QListWidget()
        self.scenario_list.setAlternatingRowColors(True)
        layout.addWidget(self.scenario_list, 2)
        return panel

    def _build_preview_panel(self) -> QWidget:
        panel = QWidget(self)
        layout = QVBoxLayout(panel)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        title = QLabel("Scenario Preview")
        title.setObjectName("sectionTitle")
        layout.addWidget(title)

        self.preview_browser = QTextBrowser(panel)
        self.preview_browser.setOpenLinks(False)
        layout.addWidget(self.preview_browser, 1)
        return panel

    def _build_status_bar(self) -> None:
        status_bar = QStatusBar(self)
        self.setStatusBar(status_bar)

        self.count_label = QLabel()
        self.draft_status_label = QLabel("Draft: ✓")
        status_bar.addPermanentWidget(self.count_label)
        status_bar.addPermanentWidget(self.draft_status_label)

    def _connect_signals(self) -> None:
        self.editor.textChanged.connect(self._on_editor_changed)
        self.scenario_list.currentItemChanged.connect(self._on_selection_changed)
        self.scenario_list.itemDoubleClicked.connect(self._edit_item)
        self.edit_button.clicked.connect(lambda: self._edit_item(self.scenario_list.currentItem()))
        self.delete_button.clicked.connect(self._delete_selected)

    def _apply_theme(self) -> None:
        app = QApplication.instance()
        if isinstance(app, QApplication):
            app.setStyleSheet(build_app_stylesheet(self.tokens))
        self.editor.set_theme(self.tokens)
        self._update_preview()

    def _toggle_theme(self, light: bool) -> None:
        self.settings.ui_theme = "light" if light else "dark"
        self.settings.save()
        self.tokens = get_theme_tokens(self.settings.ui_theme)
        self._apply_theme()

    def _toggle_preview(self, visible: bool) -> None:
        self.preview_panel.setVisible(visible)
        self.settings.preview_visible = visible
        self.settings.save()
        self._update_preview()

    def _show_notice(self, notice: Notice) -> None:
        self.statusBar().showMessage(f"{notice.title}: {notice.message}", 3000 if not notice.is_error else 7000)
        if notice.is_error:
            QMessageBox.warning(self, notice.title, notice.message)

    def _update_edit_mode(self) -> None:
        scenario = self.session.find(self.session.editing_id) if self.session.editing_id else None
        if scenario is None:
            self.mode_label.setText("New scenario")
            self.save_action.setText("Save")
        else:
            self.mode_label.setText(f"Editing: {scenario.title}")
            self.save_action.setText("Update")

    def _refresh_list(self) -> None:
        self.scenario_list.blockSignals(True)
        self.scenario_list.clear()
        selected_row = -1
        for scenario in self.session.scenarios:
            item = QListWidgetItem(scenario.title)
            item.setData(Qt.ItemDataRole.UserRole, scenario.id)
            item.setToolTip(scenario.content)
            self.scenario_list.addItem(item)
            if scenario.id == self.selected_id:
                selected_row = self.scenario_list.count() - 1

        if not self.session.scenarios:
            placeholder = QListWidgetItem("(no saved test scenarios yet)")
            placeholder.setFlags(Qt.ItemFlag.NoItemFlags)
            self.scenario_list.addItem(placeholder)
            self.selected_id = None
        elif selected_row >= 0:
            self.scenario_list.setCurrentRow(selected_row)
        else:
            self.selected_id = None
        self.scenario_list.blockSignals(False)

        self.count_label.setText(f"Scenarios: {len(self.session.scenarios)}")
        self._update_preview()

    def _on_selection_changed(self, current: QListWidgetItem | None, _previous: QListWidgetItem | None) -> None:
        self.selected_id = current.data(Qt.ItemDataRole.UserRole) if current is not None else None
        self._update_preview()

    def _update_preview(self) -> None:
        if not self.toggle_preview_action.isChecked():
            return
        scenario = self.session.find(self.selected_id) if self.selected_id else None
        self.preview_browser.setHtml(render_preview_html(scenario.content if scenario else "", self.tokens))

    def _on_editor_changed(self) -> None:
        self.draft_autosave.schedule(self.editor.toPlainText())
        self.draft_status_label.setText("Draft: pending...")

    def _store_draft(self, text: str) -> None:
        self.settings.draft_text = text
        self.settings.editing_id = self.session.editing_id or ""
        try:
            self.settings.save()
        except OSError as exc:
            self.draft_status_label.setText("Draft: error")
            self.statusBar().showMessage(f"Could not store draft: {exc}", 7000)
            return
        self.draft_status_label.setText("Draft: ✓")

    def _restore_draft(self) -> None:
        if self.settings.editing_id and self.session.begin_edit(self.settings.editing_id) is None:
            self.settings.editing_id = ""
        if self.settings.draft_text:
            self.editor.set_text(self.settings.draft_text)
            self.statusBar().showMessage("Unsaved draft restored", 3000)
        self.draft_autosave.discard()

    def _reset_editor(self) -> None:
        self.editor.set_text("")
        self.draft_autosave.discard()
        self.settings.clear_draft()
        self.settings.save()
        self.draft_status_label.setText("Draft: ✓")
        self._update_edit_mode()

    def _save(self) -> None:
        notice = self.session.save(self.editor.toPlainText())
        self._show_notice(notice)
        if notice.is_error:
            return
        self._reset_editor()
        self._refresh_list()

    def _new_scenario(self) -> None:
        if self.editor.toPlainText().strip():
            answer = QMessageBox.question(
                self,
                "Discard changes",
                "Discard the text in the editor and start a new scenario?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                QMessageBox.StandardButton.No,
            )
            if answer != QMessageBox.StandardButton.Yes:
                return
        self.session.cancel_edit()
        self._reset_editor()

    def _edit_item(self, item: QListWidgetItem | None) -> None:
        if item is None:
            return
        scenario_id = item.data(Qt.ItemDataRole.UserRole)
        if not scenario_id:
            return
        content = self.session.begin_edit(scenario_id)
        if content is None:
            return
        self.editor.set_text(content)
        self.editor.setFocus()
        self._update_edit_mode()

    def _delete_selected(self) -> None:
        item = self.scenario_list.currentItem()
        scenario_id = item.data(Qt.ItemDataRole.UserRole) if item is not None else None
        if not scenario_id:
            return

        answer = QMessageBox.question(
            self,
            "Delete scenario",
            "Are you sure you want to delete this test scenario?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        if answer != QMessageBox.StandardButton.Yes:
            return

        was_editing = self.session.editing_id == scenario_id
        notice = self.session.delete(scenario_id)
        self._show_notice(notice)
        if notice.is_error:
            return
        if was_editing:
            self._reset_editor()
        self._refresh_list()

    def _open_import_dialog(self) -> None:
        start_dir = Path(self.settings.last_directory) if self.settings.last_directory else None
        dialog = ImportDialog(self.session.read_import_file, start_dir=start_dir, parent=self)
        if dialog.exec() != ImportDialog.DialogCode.Accepted:
            return

        if dialog.loaded_path is not None:
            self.settings.last_directory = str(dialog.loaded_path.parent)
            self.settings.save()

        notice = self.session.import_text(dialog.text())
        self._show_notice(notice)
        self._refresh_list()

    def _export(self) -> None:
        if not self.session.scenarios:
            self._show_notice(Notice("Error", "There are no scenarios to export.", is_error=True))
            return

        start_dir = Path(self.settings.last_directory) if self.settings.last_directory else Path.home()
        selected, _ = QFileDialog.getSaveFileName(
            self,
            "Export scenarios",
            str(start_dir / EXPORT_FILENAME),
            "Gherkin feature (*.feature);;Text (*.txt)",
        )
        if not selected:
            return

        path = Path(selected)
        notice = self.session.export_to(path)
        self._show_notice(notice)
        if not notice.is_error:
            self.settings.last_directory = str(path.parent)
            self.settings.save()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.draft_autosave.flush_now()
        self.settings.window_width = self.width()
        self.settings.window_height = self.height()
        self.settings.save()
        event.accept()
