from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ThemeTokens:
    name: str
    bg: str
    panel_bg: str
    editor_bg: str
    input_bg: str
    border_subtle: str
    border_strong: str
    text: str
    text_muted: str
    accent: str
    accent_hover: str
    accent_pressed: str
    selection: str
    focus_ring: str
    danger: str
    success: str
    status_bg: str
    status_text: str
    hover_bg: str
    code_bg: str
    keyword: str
    parameter: str


DARK_TOKENS = ThemeTokens(
    name="dark",
    bg="#1e1e1e",
    panel_bg="#252526",
    editor_bg="#1e1e1e",
    input_bg="#2d2d30",
    border_subtle="#3e3e42",
    border_strong="#5a5d62",
    text="#cccccc",
    text_muted="#8d9094",
    accent="#0e639c",
    accent_hover="#1177bb",
    accent_pressed="#0a4f7a",
    selection="#264f78",
    focus_ring="#3794ff",
    danger="#f14c4c",
    success="#4ec9b0",
    status_bg="#007acc",
    status_text="#ffffff",
    hover_bg="#2a2d2e",
    code_bg="#2a2d31",
    keyword="#569cd6",
    parameter="#ce9178",
)

LIGHT_TOKENS = ThemeTokens(
    name="light",
    bg="#f5f5f5",
    panel_bg="#ffffff",
    editor_bg="#ffffff",
    input_bg="#ffffff",
    border_subtle="#d4d4d4",
    border_strong="#b5b5b5",
    text="#1f1f1f",
    text_muted="#616161",
    accent="#005fb8",
    accent_hover="#0a72d5",
    accent_pressed="#00498d",
    selection="#add6ff",
    focus_ring="#005fb8",
    danger="#c72e0f",
    success="#0f7b0f",
    status_bg="#007acc",
    status_text="#ffffff",
    hover_bg="#e9eef6",
    code_bg="#eef2f8",
    keyword="#0000ff",
    parameter="#a31515",
)


def get_theme_tokens(theme_name: str) -> ThemeTokens:
    if theme_name == "light":
        return LIGHT_TOKENS
    return DARK_TOKENS


def build_app_stylesheet(tokens: ThemeTokens) -> str:
    return f"""
    QWidget {{
        color: {tokens.text};
        background: {tokens.bg};
        font-family: "Segoe UI Variable", "Segoe UI", "Noto Sans", sans-serif;
        font-size: 14px;
    }}
    QMainWindow {{
        background: {tokens.bg};
    }}
    QToolBar {{
        background: {tokens.panel_bg};
        border: none;
        border-bottom: 1px solid {tokens.border_subtle};
        spacing: 4px;
        padding: 4px;
    }}
    QToolButton {{
        background: transparent;
        border: 1px solid transparent;
        border-radius: 5px;
        padding: 4px 8px;
        color: {tokens.text};
    }}
    QToolButton:hover {{
        background: {tokens.hover_bg};
        border-color: {tokens.border_subtle};
    }}
    QToolButton:pressed {{
        background: {tokens.accent_pressed};
        border-color: {tokens.accent_pressed};
    }}
    QPushButton {{
        background: {tokens.input_bg};
        border: 1px solid {tokens.border_subtle};
        border-radius: 5px;
        padding: 5px 10px;
    }}
    QPushButton:hover {{
        background: {tokens.hover_bg};
        border-color: {tokens.border_strong};
    }}
    QPushButton#primaryButton {{
        background: {tokens.accent};
        border-color: {tokens.accent};
        color: #ffffff;
    }}
    QPushButton#primaryButton:hover {{
        background: {tokens.accent_hover};
    }}
    QLineEdit, QPlainTextEdit, QTextBrowser, QListWidget {{
        background: {tokens.input_bg};
        border: 1px solid {tokens.border_subtle};
        border-radius: 5px;
        selection-background-color: {tokens.selection};
        selection-color: {tokens.text};
    }}
    QPlainTextEdit#scenarioEditor {{
        background: {tokens.editor_bg};
        font-family: "Cascadia Code", "Consolas", "DejaVu Sans Mono", monospace;
        font-size: 14px;
        padding: 8px;
    }}
    QLineEdit:focus, QPlainTextEdit:focus, QListWidget:focus {{
        border: 1px solid {tokens.focus_ring};
    }}
    QListWidget {{
        padding: 2px;
        outline: none;
    }}
    QListWidget::item {{
        border: none;
        border-radius: 4px;
        padding: 4px 6px;
        margin: 1px 0;
    }}
    QListWidget::item:hover {{
        background: {tokens.hover_bg};
    }}
    QListWidget::item:selected {{
        background: {tokens.selection};
        color: {tokens.text};
    }}
    QListWidget#suggestionPopup {{
        background: {tokens.panel_bg};
        border: 1px solid {tokens.border_strong};
        font-family: "Cascadia Code", "Consolas", "DejaVu Sans Mono", monospace;
    }}
    QSplitter::handle {{
        background: {tokens.border_subtle};
    }}
    QSplitter::handle:hover {{
        background: {tokens.focus_ring};
    }}
    QStatusBar {{
        background: {tokens.status_bg};
        color: {tokens.status_text};
        border-top: 1px solid {tokens.border_subtle};
    }}
    QStatusBar QLabel {{
        color: {tokens.status_text};
        background: transparent;
        padding: 0 6px;
    }}
    QLabel#muted {{
        color: {tokens.text_muted};
    }}
    QLabel#sectionTitle {{
        font-weight: 600;
        font-size: 15px;
    }}
    """


def build_preview_css(tokens: ThemeTokens) -> str:
    return f"""
    body {{
      font-family: "Cascadia Code", "Consolas", "DejaVu Sans Mono", monospace;
      font-size: 14px;
      line-height: 1.6;
      color: {tokens.text};
      background: {tokens.editor_bg};
      margin: 10px;
    }}
    .line {{
      white-space: pre-wrap;
    }}
    .keyword {{
      color: {tokens.keyword};
      font-weight: 600;
    }}
    .parameter {{
      color: {tokens.parameter};
    }}
    .empty {{
      color: {tokens.text_muted};
      font-style: italic;
    }}
    """
