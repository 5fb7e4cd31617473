from __future__ import annotations

from dataclasses import dataclass
import json
import os
from pathlib import Path
import sys

APP_NAME = "GherkinPad"
SETTINGS_FILENAME = "settings.json"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_config_dir(app_name: str = APP_NAME) -> Path:
    home = Path.home()
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", home / "AppData" / "Roaming"))
        return base / app_name
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / app_name
    base = Path(os.environ.get("XDG_CONFIG_HOME", home / ".config"))
    return base / app_name.lower()


def get_data_dir(app_name: str = APP_NAME) -> Path:
    home = Path.home()
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", home / "AppData" / "Roaming"))
        return base / app_name
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / app_name
    base = Path(os.environ.get("XDG_DATA_HOME", home / ".local" / "share"))
    return base / app_name.lower()


@dataclass(slots=True)
class AppSettings:
    last_directory: str = ""
    autosave_debounce_ms: int = 1200
    ui_theme: str = "dark"
    preview_visible: bool = True
    max_visible_suggestions: int = 8
    log_level: str = "WARNING"
    draft_text: str = ""
    editing_id: str = ""
    window_width: int = 1180
    window_height: int = 760

    @classmethod
    def load(cls) -> "AppSettings":
        path = get_config_dir() / SETTINGS_FILENAME
        if not path.exists():
            return cls()

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return cls()
        if not isinstance(data, dict):
            return cls()

        settings = cls()
        if isinstance(data.get("last_directory"), str):
            settings.last_directory = data["last_directory"]

        debounce = data.get("autosave_debounce_ms")
        if isinstance(debounce, int) and debounce >= 100:
            settings.autosave_debounce_ms = debounce

        if data.get("ui_theme") in ("dark", "light"):
            settings.ui_theme = str(data["ui_theme"])

        if isinstance(data.get("preview_visible"), bool):
            settings.preview_visible = bool(data["preview_visible"])

        max_visible = data.get("max_visible_suggestions")
        if isinstance(max_visible, int) and 1 <= max_visible <= 50:
            settings.max_visible_suggestions = max_visible

        log_level = data.get("log_level")
        if isinstance(log_level, str) and log_level.upper() in LOG_LEVELS:
            settings.log_level = log_level.upper()

        if isinstance(data.get("draft_text"), str):
            settings.draft_text = data["draft_text"]
        if isinstance(data.get("editing_id"), str):
            settings.editing_id = data["editing_id"]

        width = data.get("window_width")
        if isinstance(width, int) and 640 <= width <= 7680:
            settings.window_width = width
        height = data.get("window_height")
        if isinstance(height, int) and 480 <= height <= 4320:
            settings.window_height = height

        return settings

    def save(self) -> None:
        target_dir = get_config_dir()
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / SETTINGS_FILENAME

        payload = {
            "last_directory": self.last_directory,
            "autosave_debounce_ms": self.autosave_debounce_ms,
            "ui_theme": self.ui_theme,
            "preview_visible": self.preview_visible,
            "max_visible_suggestions": self.max_visible_suggestions,
            "log_level": self.log_level,
            "draft_text": self.draft_text,
            "editing_id": self.editing_id,
            "window_width": self.window_width,
            "window_height": self.window_height,
        }
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")

    def clear_draft(self) -> None:
        self.draft_text = ""
        self.editing_id = ""
