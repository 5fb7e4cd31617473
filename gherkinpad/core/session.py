from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from .blocks import parse_blocks
from .scenarios import (
    ScenarioRecord,
    delete_scenario,
    export_text,
    find_scenario,
    merge_blocks,
    save_scenario,
)
from .storage import ScenarioStore, export_scenarios, is_plain_text_file, read_text_file
from .suggestions import EditSnapshot, SuggestionList, suggest
from .vocabulary import build_vocabulary

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Notice:
    title: str
    message: str
    is_error: bool = False


class EditorSession:
    """Scenario collection plus edit state for one editor window.

    Mutations write the whole collection back to the store and report the
    outcome as a ``Notice``; a failed write leaves the collection unchanged.
    """

    def __init__(self, store: ScenarioStore) -> None:
        self.store = store
        self.scenarios: list[ScenarioRecord] = store.load()
        self.editing_id: str | None = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def find(self, scenario_id: str) -> ScenarioRecord | None:
        return find_scenario(self.scenarios, scenario_id)

    def vocabulary(self) -> list[str]:
        return build_vocabulary(self.scenarios)

    def suggest(self, snapshot: EditSnapshot) -> SuggestionList | None:
        return suggest(snapshot, self.vocabulary())

    def _commit(self, scenarios: list[ScenarioRecord]) -> Notice | None:
        try:
            self.store.save(scenarios)
        except OSError as exc:
            logger.error("Saving scenarios to %s failed: %s", self.store.path, exc)
            return Notice("Error", f"Could not write scenarios:\n{exc}", is_error=True)
        self.scenarios = scenarios
        return None

    def save(self, text: str) -> Notice:
        updated, error = save_scenario(self.scenarios, text, editing_id=self.editing_id)
        if updated is None:
            return Notice("Error", error or "", is_error=True)

        failure = self._commit(updated)
        if failure is not None:
            return failure

        was_editing = self.editing_id is not None
        self.editing_id = None
        return Notice("Success", "Scenario updated." if was_editing else "Scenario saved.")

    def begin_edit(self, scenario_id: str) -> str | None:
        scenario = self.find(scenario_id)
        if scenario is None:
            return None
        self.editing_id = scenario.id
        return scenario.content

    def cancel_edit(self) -> None:
        self.editing_id = None

    def delete(self, scenario_id: str) -> Notice:
        if self.find(scenario_id) is None:
            return Notice("Error", "Scenario not found.", is_error=True)

        failure = self._commit(delete_scenario(self.scenarios, scenario_id))
        if failure is not None:
            return failure

        if self.editing_id == scenario_id:
            self.editing_id = None
        logger.info("Deleted scenario %s", scenario_id)
        return Notice("Success", "Scenario deleted.")

    def import_text(self, raw_text: str) -> Notice:
        if not raw_text.strip():
            return Notice("Warning", "Nothing to import: the text is empty.", is_error=True)

        blocks = parse_blocks(raw_text.strip())
        result = merge_blocks(self.scenarios, blocks)
        if result.added_count == 0:
            return Notice("Success", "Nothing new to import.")

        failure = self._commit(result.scenarios)
        if failure is not None:
            return failure

        logger.info("Imported %d of %d block(s)", result.added_count, len(blocks))
        return Notice("Success", f"{result.added_count} scenario(s) imported.")

    def read_import_file(self, path: Path) -> tuple[str | None, Notice | None]:
        if not is_plain_text_file(path):
            return None, Notice("Error", f"Only plain text files can be imported:\n{path.name}", is_error=True)
        try:
            return read_text_file(path), None
        except OSError as exc:
            logger.warning("Reading %s failed: %s", path, exc)
            return None, Notice("Error", f"Could not read file:\n{path}\n\n{exc}", is_error=True)

    def import_file(self, path: Path) -> Notice:
        text, failure = self.read_import_file(path)
        if text is None:
            return failure or Notice("Error", "Could not read file.", is_error=True)
        return self.import_text(text)

    def export_to(self, path: Path) -> Notice:
        if not self.scenarios:
            return Notice("Error", "There are no scenarios to export.", is_error=True)
        try:
            export_scenarios(path, export_text(self.scenarios))
        except OSError as exc:
            logger.error("Export to %s failed: %s", path, exc)
            return Notice("Error", f"Could not export scenarios:\n{exc}", is_error=True)
        return Notice("Success", f"Scenarios exported to {path.name}.")
