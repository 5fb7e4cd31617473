from __future__ import annotations

import html

from PySide6.QtGui import QColor, QFont, QSyntaxHighlighter, QTextCharFormat, QTextDocument

from ..core.gherkin import Line, TokenKind, highlight, line_spans
from .theme import ThemeTokens, build_preview_css


def qt_offset(text: str, index: int) -> int:
    """Convert an index into ``text`` into a Qt (UTF-16) position."""
    return len(text[:index].encode("utf-16-le")) // 2


def line_to_html(line: Line) -> str:
    if line.is_blank:
        return '<div class="line">&nbsp;</div>'

    parts: list[str] = []
    for token in line.tokens:
        escaped = html.escape(token.text, quote=False)
        if token.kind is TokenKind.PLAIN:
            parts.append(escaped)
        else:
            parts.append(f'<span class="{token.kind.value}">{escaped}</span>')
    return f'<div class="line">{"".join(parts)}</div>'


def render_preview_html(text: str, tokens: ThemeTokens) -> str:
    """Read-only rendering of ``text`` with normalized keyword casing."""
    if not text.strip():
        body = '<div class="empty">Select a scenario...</div>'
    else:
        body = "".join(line_to_html(line) for line in highlight(text))
    return f"""
    <html>
      <head><style>{build_preview_css(tokens)}</style></head>
      <body>{body}</body>
    </html>
    """


class GherkinHighlighter(QSyntaxHighlighter):
    def __init__(self, document: QTextDocument, tokens: ThemeTokens) -> None:
        super().__init__(document)
        self.keyword_format = QTextCharFormat()
        self.parameter_format = QTextCharFormat()
        self.set_theme(tokens)

    def set_theme(self, tokens: ThemeTokens) -> None:
        self.keyword_format.setForeground(QColor(tokens.keyword))
        self.keyword_format.setFontWeight(QFont.Weight.DemiBold)
        self.parameter_format.setForeground(QColor(tokens.parameter))
        self.rehighlight()

    def highlightBlock(self, text: str) -> None:  # type: ignore[override]
        for span in line_spans(text):
            fmt = self.keyword_format if span.kind is TokenKind.KEYWORD else self.parameter_format
            start = qt_offset(text, span.start)
            end = qt_offset(text, span.start + span.length)
            self.setFormat(start, end - start, fmt)
