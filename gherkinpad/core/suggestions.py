from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .gherkin import STEP_PREFIX_RE


@dataclass(frozen=True, slots=True)
class EditSnapshot:
    text: str
    cursor_offset: int

    @property
    def line_count(self) -> int:
        return self.text.count("\n") + 1


@dataclass(frozen=True, slots=True)
class CursorContext:
    line_index: int
    char_offset: int
    keyword: str | None
    partial_text: str


@dataclass(frozen=True, slots=True)
class Suggestion:
    full_text: str


@dataclass(frozen=True, slots=True)
class SuggestionList:
    context: CursorContext
    line_count: int
    suggestions: tuple[Suggestion, ...]

    def __len__(self) -> int:
        return len(self.suggestions)

    def texts(self) -> list[str]:
        return [suggestion.full_text for suggestion in self.suggestions]


def cursor_context(snapshot: EditSnapshot) -> CursorContext:
    offset = max(0, min(snapshot.cursor_offset, len(snapshot.text)))
    lines = snapshot.text[:offset].split("\n")
    current_line = lines[-1]

    match = STEP_PREFIX_RE.match(current_line)
    if match is None:
        return CursorContext(
            line_index=len(lines) - 1,
            char_offset=len(current_line),
            keyword=None,
            partial_text="",
        )
    return CursorContext(
        line_index=len(lines) - 1,
        char_offset=len(current_line),
        keyword=match.group(1),
        partial_text=match.group(2),
    )


def suggest(snapshot: EditSnapshot, vocabulary: Sequence[str]) -> SuggestionList | None:
    """Steps from ``vocabulary`` that continue the step typed before the cursor.

    Returns ``None`` when the cursor line is not a step or nothing matches.
    The keyword keeps the casing the user typed.
    """
    context = cursor_context(snapshot)
    if context.keyword is None:
        return None

    needle = context.partial_text.lower()
    suggestions = tuple(
        Suggestion(full_text=f"{context.keyword} {step}") for step in vocabulary if needle in step.lower()
    )
    if not suggestions:
        return None
    return SuggestionList(context=context, line_count=snapshot.line_count, suggestions=suggestions)


def is_stale(suggestions: SuggestionList, text: str) -> bool:
    return text.count("\n") + 1 != suggestions.line_count


def apply_suggestion(text: str, suggestions: SuggestionList, full_text: str) -> EditSnapshot | None:
    """Replace the line the suggestions were generated for with ``full_text``.

    The list is only valid while the buffer keeps the line count it had when
    the suggestions were generated; otherwise nothing is applied.
    """
    if is_stale(suggestions, text):
        return None

    lines = text.split("\n")
    index = suggestions.context.line_index
    if not 0 <= index < len(lines):
        return None

    lines[index] = full_text
    cursor = sum(len(line) + 1 for line in lines[:index]) + len(full_text)
    return EditSnapshot(text="\n".join(lines), cursor_offset=cursor)
