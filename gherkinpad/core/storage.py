from __future__ import annotations

import json
import logging
import mimetypes
import os
from pathlib import Path
from uuid import uuid4

from ..settings import get_data_dir
from .scenarios import ScenarioRecord

logger = logging.getLogger(__name__)

SCENARIOS_FILENAME = "scenarios.json"
EXPORT_FILENAME = "gherkin_test_cases.feature"
PLAIN_TEXT_MIME = "text/plain"

mimetypes.add_type(PLAIN_TEXT_MIME, ".feature")
mimetypes.add_type(PLAIN_TEXT_MIME, ".story")


def is_plain_text_file(path: Path) -> bool:
    mime_type, _encoding = mimetypes.guess_type(path.name)
    if mime_type is None:
        return path.suffix == ""
    return mime_type == PLAIN_TEXT_MIME


def read_text_file(path: Path) -> str:
    encodings = ("utf-8-sig", "cp1251")
    for encoding in encodings:
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_text(encoding="utf-8", errors="replace")


def atomic_write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_name = f".{path.name}.{os.getpid()}.{uuid4().hex}.tmp"
    temp_path = path.parent / temp_name

    try:
        with temp_path.open("w", encoding="utf-8", newline="\n") as file:
            file.write(text)
            file.flush()
            os.fsync(file.fileno())
        os.replace(temp_path, path)
    finally:
        if temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                pass


class ScenarioStore:
    """JSON array of scenario records kept under one fixed file name."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path if path is not None else get_data_dir() / SCENARIOS_FILENAME

    def load(self) -> list[ScenarioRecord]:
        if not self.path.exists():
            return []

        try:
            data = json.loads(read_text_file(self.path))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Could not read scenarios from %s: %s", self.path, exc)
            return []

        if not isinstance(data, list):
            logger.warning("Ignoring %s: expected a JSON array", self.path)
            return []

        scenarios: list[ScenarioRecord] = []
        seen_ids: set[str] = set()
        for item in data:
            record = ScenarioRecord.from_dict(item)
            if record is None:
                logger.warning("Skipping malformed scenario entry in %s: %r", self.path, item)
                continue
            if record.id in seen_ids:
                logger.warning("Skipping scenario with duplicate id %r in %s", record.id, self.path)
                continue
            seen_ids.add(record.id)
            scenarios.append(record)

        logger.info("Loaded %d scenario(s) from %s", len(scenarios), self.path)
        return scenarios

    def save(self, scenarios: list[ScenarioRecord]) -> None:
        payload = [scenario.to_dict() for scenario in scenarios]
        atomic_write_text(self.path, json.dumps(payload, ensure_ascii=False, indent=2))
        logger.debug("Wrote %d scenario(s) to %s", len(scenarios), self.path)


def export_scenarios(path: Path, text: str) -> None:
    atomic_write_text(path, text)
