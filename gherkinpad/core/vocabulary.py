from __future__ import annotations

from collections.abc import Iterable

from .gherkin import STEP_LINE_RE, normalize_newlines
from .scenarios import ScenarioRecord


def step_text(line: str) -> str | None:
    match = STEP_LINE_RE.match(line.strip())
    if match is None:
        return None
    return match.group(2)


def build_vocabulary(scenarios: Iterable[ScenarioRecord]) -> list[str]:
    """Distinct step texts across ``scenarios`` in first-seen order."""
    seen: set[str] = set()
    steps: list[str] = []
    for scenario in scenarios:
        for line in normalize_newlines(scenario.content).split("\n"):
            step = step_text(line)
            if step is None or step in seen:
                continue
            seen.add(step)
            steps.append(step)
    return steps
