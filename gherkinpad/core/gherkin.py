from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re

HEADER_KEYWORDS: tuple[str, ...] = ("Feature:", "Scenario:")
STEP_KEYWORDS: tuple[str, ...] = ("Given", "When", "Then", "And", "But")
KEYWORDS: tuple[str, ...] = HEADER_KEYWORDS + STEP_KEYWORDS

BLANK_MARKER = "\u00a0"

_KEYWORD_ALTERNATION = "|".join(re.escape(keyword) for keyword in KEYWORDS)
_STEP_ALTERNATION = "|".join(STEP_KEYWORDS)

_KEYWORD_LINE_RE = re.compile(rf"^({_KEYWORD_ALTERNATION})(\s+)(.*)$", re.IGNORECASE)
_PARAMETER_RE = re.compile(r'"[^"]*"')

# Shared with the vocabulary and suggestion modules.
STEP_LINE_RE = re.compile(rf"^({_STEP_ALTERNATION})\s+(.+)$", re.IGNORECASE)
STEP_PREFIX_RE = re.compile(rf"^({_STEP_ALTERNATION})\s+(.*)$", re.IGNORECASE)


class TokenKind(str, Enum):
    KEYWORD = "keyword"
    PARAMETER = "parameter"
    PLAIN = "plain"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str


@dataclass(frozen=True, slots=True)
class Line:
    tokens: tuple[Token, ...]

    @property
    def text(self) -> str:
        return "".join(token.text for token in self.tokens)

    @property
    def is_blank(self) -> bool:
        return self.tokens == (Token(TokenKind.PLAIN, BLANK_MARKER),)


@dataclass(frozen=True, slots=True)
class Span:
    kind: TokenKind
    start: int
    length: int


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def display_keyword(keyword: str) -> str:
    return keyword[:1].upper() + keyword[1:].lower()


def _remainder_tokens(remainder: str) -> list[Token]:
    tokens: list[Token] = []
    position = 0
    for match in _PARAMETER_RE.finditer(remainder):
        if match.start() > position:
            tokens.append(Token(TokenKind.PLAIN, remainder[position : match.start()]))
        tokens.append(Token(TokenKind.PARAMETER, match.group(0)))
        position = match.end()
    if position < len(remainder):
        tokens.append(Token(TokenKind.PLAIN, remainder[position:]))
    return tokens


def tokenize_line(line: str) -> Line:
    """Classify a single source line.

    The keyword token carries its display form ("GIVEN" -> "Given"); the
    source text is never rewritten, callers that need offsets into the
    original line should use ``line_spans``.
    """
    match = _KEYWORD_LINE_RE.match(line)
    if match is None:
        if not line:
            return Line(tokens=(Token(TokenKind.PLAIN, BLANK_MARKER),))
        return Line(tokens=(Token(TokenKind.PLAIN, line),))

    keyword, space, remainder = match.groups()
    tokens = [Token(TokenKind.KEYWORD, display_keyword(keyword)), Token(TokenKind.PLAIN, space)]
    tokens.extend(_remainder_tokens(remainder))
    return Line(tokens=tuple(tokens))


def highlight(text: str) -> list[Line]:
    return [tokenize_line(line) for line in normalize_newlines(text).split("\n")]


def line_spans(line: str) -> list[Span]:
    """Keyword and parameter spans as offsets into ``line`` itself."""
    match = _KEYWORD_LINE_RE.match(line)
    if match is None:
        return []

    spans = [Span(TokenKind.KEYWORD, match.start(1), len(match.group(1)))]
    remainder_start = match.start(3)
    for parameter in _PARAMETER_RE.finditer(match.group(3)):
        spans.append(
            Span(TokenKind.PARAMETER, remainder_start + parameter.start(), len(parameter.group(0)))
        )
    return spans
