from __future__ import annotations

from PySide6.QtCore import QObject, QTimer, Signal


class DraftAutoSave(QObject):
    """Debounces the unsaved editor buffer into ``draft_ready``."""

    draft_ready = Signal(str)
    pending_changed = Signal(bool)

    def __init__(self, debounce_ms: int = 1200, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._pending_text: str | None = None

        self._debounce_timer = QTimer(self)
        self._debounce_timer.setSingleShot(True)
        self._debounce_timer.setInterval(max(100, debounce_ms))
        self._debounce_timer.timeout.connect(self.flush_now)

    @property
    def pending(self) -> bool:
        return self._pending_text is not None

    def schedule(self, text: str) -> None:
        if self._pending_text is None:
            self.pending_changed.emit(True)
        self._pending_text = text
        self._debounce_timer.start()

    def discard(self) -> None:
        self._debounce_timer.stop()
        if self._pending_text is not None:
            self._pending_text = None
            self.pending_changed.emit(False)

    def flush_now(self) -> None:
        self._debounce_timer.stop()
        if self._pending_text is None:
            return
        text = self._pending_text
        self._pending_text = None
        self.pending_changed.emit(False)
        self.draft_ready.emit(text)
