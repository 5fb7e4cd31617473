from pathlib import Path

from gherkinpad.core.session import EditorSession
from gherkinpad.core.storage import ScenarioStore
from gherkinpad.core.suggestions import EditSnapshot

SAMPLE = """Feature: Accounts
Scenario: Deposit
  Given my account has "0" TL
  When I deposit "500" TL
Scenario: Withdraw
  Given my account has "500" TL
  When I withdraw "100" TL"""


def _session(tmp_path: Path) -> EditorSession:
    return EditorSession(ScenarioStore(tmp_path / "scenarios.json"))


def test_save_persists_and_reloads(tmp_path: Path) -> None:
    session = _session(tmp_path)
    notice = session.save("Scenario: Deposit\n  Given x")
    assert not notice.is_error

    reloaded = _session(tmp_path)
    assert [scenario.title for scenario in reloaded.scenarios] == ["Deposit"]


def test_save_empty_is_rejected_without_touching_store(tmp_path: Path) -> None:
    session = _session(tmp_path)
    notice = session.save("   ")
    assert notice.is_error
    assert session.scenarios == []
    assert not (tmp_path / "scenarios.json").exists()


def test_edit_replaces_record_and_leaves_edit_mode(tmp_path: Path) -> None:
    session = _session(tmp_path)
    session.save("Scenario: Old\n  Given x")
    scenario_id = session.scenarios[0].id

    assert session.begin_edit(scenario_id) == "Scenario: Old\n  Given x"
    assert session.is_editing
    notice = session.save("Scenario: New\n  Given y")

    assert notice.message == "Scenario updated."
    assert not session.is_editing
    assert len(session.scenarios) == 1
    assert session.scenarios[0].id == scenario_id
    assert session.scenarios[0].title == "New"


def test_begin_edit_unknown_id(tmp_path: Path) -> None:
    session = _session(tmp_path)
    assert session.begin_edit("missing") is None
    assert not session.is_editing


def test_delete_removes_one_and_persists(tmp_path: Path) -> None:
    session = _session(tmp_path)
    session.import_text(SAMPLE)
    before = len(session.scenarios)
    target = session.scenarios[1].id
    session.begin_edit(target)

    notice = session.delete(target)
    assert not notice.is_error
    assert len(session.scenarios) == before - 1
    assert len(_session(tmp_path).scenarios) == before - 1
    assert not session.is_editing

    assert session.delete(target).is_error


def test_import_reports_added_count_then_nothing_new(tmp_path: Path) -> None:
    session = _session(tmp_path)
    first = session.import_text(SAMPLE)
    assert first.message == "3 scenario(s) imported."
    assert [scenario.title for scenario in session.scenarios] == ["Untitled Scenario", "Deposit", "Withdraw"]

    second = session.import_text(SAMPLE)
    assert not second.is_error
    assert second.message == "Nothing new to import."
    assert len(session.scenarios) == 3


def test_import_empty_text_is_a_warning(tmp_path: Path) -> None:
    notice = _session(tmp_path).import_text(" \n ")
    assert notice.is_error
    assert notice.title == "Warning"


def test_import_file_rejects_non_text(tmp_path: Path) -> None:
    image = tmp_path / "picture.png"
    image.write_bytes(b"\x89PNG\r\n")
    session = _session(tmp_path)
    notice = session.import_file(image)
    assert notice.is_error
    assert "plain text" in notice.message
    assert session.scenarios == []


def test_import_file_reads_feature_file(tmp_path: Path) -> None:
    source = tmp_path / "cases.feature"
    source.write_text("Scenario: A\nGiven x\n", encoding="utf-8")
    notice = _session(tmp_path).import_file(source)
    assert notice.message == "1 scenario(s) imported."


def test_import_file_missing_is_reported(tmp_path: Path) -> None:
    notice = _session(tmp_path).import_file(tmp_path / "nope.feature")
    assert notice.is_error


def test_export_writes_joined_contents(tmp_path: Path) -> None:
    session = _session(tmp_path)
    session.save("Scenario: A\nGiven x")
    session.save("Scenario: B\nGiven y")

    target = tmp_path / "out" / "gherkin_test_cases.feature"
    notice = session.export_to(target)
    assert not notice.is_error
    assert target.read_text(encoding="utf-8") == "Scenario: A\nGiven x\n\nScenario: B\nGiven y"


def test_export_empty_collection_is_an_error(tmp_path: Path) -> None:
    target = tmp_path / "out.feature"
    notice = _session(tmp_path).export_to(target)
    assert notice.is_error
    assert not target.exists()


def test_export_then_reimport_after_clearing(tmp_path: Path) -> None:
    session = _session(tmp_path)
    session.import_text(SAMPLE)
    target = tmp_path / "export.feature"
    session.export_to(target)
    contents = [scenario.content for scenario in session.scenarios]

    fresh = EditorSession(ScenarioStore(tmp_path / "other.json"))
    notice = fresh.import_file(target)
    assert notice.message == "3 scenario(s) imported."
    assert [scenario.content for scenario in fresh.scenarios] == contents
    assert fresh.import_file(target).message == "Nothing new to import."


def test_suggest_uses_current_collection(tmp_path: Path) -> None:
    session = _session(tmp_path)
    assert session.suggest(EditSnapshot(text="Given acc", cursor_offset=9)) is None

    session.import_text(SAMPLE)
    result = session.suggest(EditSnapshot(text="Given acc", cursor_offset=9))
    assert result is not None
    assert result.texts() == ['Given my account has "0" TL', 'Given my account has "500" TL']


def test_failed_write_keeps_collection(tmp_path: Path, monkeypatch) -> None:
    session = _session(tmp_path)
    session.save("Scenario: A")

    def broken_save(_scenarios) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(session.store, "save", broken_save)
    notice = session.save("Scenario: B")
    assert notice.is_error
    assert "disk full" in notice.message
    assert [scenario.title for scenario in session.scenarios] == ["A"]
