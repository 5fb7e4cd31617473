from __future__ import annotations

from dataclasses import dataclass
import re

from .gherkin import normalize_newlines

PLACEHOLDER_TITLE = "Untitled Scenario"

_BOUNDARY_PREFIX = "scenario:"
_TITLE_RE = re.compile(r"Scenario:\s*(.+)", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class Block:
    title: str
    content: str


def is_boundary(line: str) -> bool:
    return line.strip().lower().startswith(_BOUNDARY_PREFIX)


def extract_title(content: str) -> str:
    for line in normalize_newlines(content).split("\n"):
        match = _TITLE_RE.search(line)
        if match is None:
            continue
        title = match.group(1).strip()
        return title or PLACEHOLDER_TITLE
    return PLACEHOLDER_TITLE


def split_lines_into_blocks(lines: list[str]) -> list[list[str]]:
    chunks: list[list[str]] = []
    current: list[str] = []
    for line in lines:
        if is_boundary(line) and current:
            chunks.append(current)
            current = []
        current.append(line)
    if current:
        chunks.append(current)
    return chunks


def parse_blocks(raw_text: str) -> list[Block]:
    """Split pasted or uploaded text into one block per ``Scenario:`` header.

    Text before the first header becomes a leading block of its own. A block
    holding nothing but its header line is kept since the header is content;
    only blocks that are empty after trimming are dropped.
    """
    lines = normalize_newlines(raw_text).split("\n")
    blocks: list[Block] = []
    for chunk in split_lines_into_blocks(lines):
        content = "\n".join(chunk)
        if not content.strip():
            continue
        blocks.append(Block(title=extract_title(content), content=content))
    return blocks
