from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
import itertools
import time

from .blocks import Block, extract_title

EXPORT_SEPARATOR = "\n\n"
EMPTY_SCENARIO_ERROR = "Empty scenario cannot be saved."

_ID_SEQUENCE = itertools.count(1)


@dataclass(frozen=True, slots=True)
class ScenarioRecord:
    id: str
    title: str
    content: str

    @classmethod
    def from_dict(cls, data: object) -> "ScenarioRecord | None":
        if not isinstance(data, dict):
            return None
        scenario_id = data.get("id")
        title = data.get("title")
        content = data.get("content")
        if not isinstance(scenario_id, str) or not scenario_id:
            return None
        if not isinstance(content, str) or not content.strip():
            return None
        if not isinstance(title, str) or not title.strip():
            title = extract_title(content)
        return cls(id=scenario_id, title=title, content=content)

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "title": self.title, "content": self.content}


@dataclass(frozen=True, slots=True)
class MergeResult:
    scenarios: list[ScenarioRecord]
    added_count: int


def new_scenario_id() -> str:
    # The sequence keeps ids distinct when many records share one millisecond.
    return f"{time.time_ns() // 1_000_000}-{next(_ID_SEQUENCE)}"


def find_scenario(scenarios: Iterable[ScenarioRecord], scenario_id: str) -> ScenarioRecord | None:
    for scenario in scenarios:
        if scenario.id == scenario_id:
            return scenario
    return None


def save_scenario(
    scenarios: list[ScenarioRecord],
    content: str,
    editing_id: str | None = None,
    id_factory: Callable[[], str] = new_scenario_id,
) -> tuple[list[ScenarioRecord] | None, str | None]:
    cleaned = content.strip()
    if not cleaned:
        return None, EMPTY_SCENARIO_ERROR

    title = extract_title(cleaned)
    if editing_id is not None and find_scenario(scenarios, editing_id) is not None:
        updated = [
            replace(scenario, title=title, content=cleaned) if scenario.id == editing_id else scenario
            for scenario in scenarios
        ]
        return updated, None

    return [*scenarios, ScenarioRecord(id=id_factory(), title=title, content=cleaned)], None


def delete_scenario(scenarios: list[ScenarioRecord], scenario_id: str) -> list[ScenarioRecord]:
    return [scenario for scenario in scenarios if scenario.id != scenario_id]


def merge_blocks(
    existing: list[ScenarioRecord],
    blocks: Iterable[Block],
    id_factory: Callable[[], str] = new_scenario_id,
) -> MergeResult:
    """Append every block whose trimmed content is not already present.

    Blocks are also compared against records added earlier in the same pass,
    so a paste that repeats a scenario only adds it once.
    """
    working = list(existing)
    known_contents = {scenario.content.strip() for scenario in working}
    added = 0

    for block in blocks:
        content = block.content.strip()
        if not content or content in known_contents:
            continue
        working.append(ScenarioRecord(id=id_factory(), title=block.title, content=content))
        known_contents.add(content)
        added += 1

    return MergeResult(scenarios=working, added_count=added)


def export_text(scenarios: Iterable[ScenarioRecord]) -> str:
    return EXPORT_SEPARATOR.join(scenario.content for scenario in scenarios)
