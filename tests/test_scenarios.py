import itertools

from gherkinpad.core.blocks import PLACEHOLDER_TITLE, Block, parse_blocks
from gherkinpad.core.scenarios import (
    EMPTY_SCENARIO_ERROR,
    ScenarioRecord,
    delete_scenario,
    export_text,
    merge_blocks,
    new_scenario_id,
    save_scenario,
)


def _ids(prefix: str = "id"):
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


def test_new_scenario_ids_are_unique_within_same_instant() -> None:
    ids = [new_scenario_id() for _ in range(1000)]
    assert len(set(ids)) == 1000


def test_merge_adds_new_blocks_with_trimmed_content() -> None:
    blocks = [Block(title="A", content="Scenario: A\nGiven x\n\n"), Block(title="B", content="Scenario: B\nGiven y")]
    result = merge_blocks([], blocks, id_factory=_ids())
    assert result.added_count == 2
    assert result.scenarios == [
        ScenarioRecord(id="id1", title="A", content="Scenario: A\nGiven x"),
        ScenarioRecord(id="id2", title="B", content="Scenario: B\nGiven y"),
    ]


def test_merge_twice_adds_nothing_the_second_time() -> None:
    blocks = parse_blocks("Scenario: A\nGiven x\nScenario: B\nGiven y")
    first = merge_blocks([], blocks)
    second = merge_blocks(first.scenarios, blocks)
    assert first.added_count == 2
    assert second.added_count == 0
    assert second.scenarios == first.scenarios


def test_merge_deduplicates_within_one_pass() -> None:
    blocks = parse_blocks("Scenario: A\nGiven x\nScenario: A\nGiven x\n")
    result = merge_blocks([], blocks)
    assert result.added_count == 1
    assert len(result.scenarios) == 1


def test_merge_compares_against_trimmed_existing_content() -> None:
    existing = [ScenarioRecord(id="1", title="A", content="  Scenario: A\nGiven x  ")]
    result = merge_blocks(existing, [Block(title="A", content="Scenario: A\nGiven x")])
    assert result.added_count == 0


def test_merge_does_not_mutate_input() -> None:
    existing = [ScenarioRecord(id="1", title="A", content="Scenario: A")]
    merge_blocks(existing, [Block(title="B", content="Scenario: B")])
    assert len(existing) == 1


def test_save_rejects_empty_content() -> None:
    scenarios, error = save_scenario([], "   \n\t")
    assert scenarios is None
    assert error == EMPTY_SCENARIO_ERROR


def test_save_appends_with_extracted_title() -> None:
    scenarios, error = save_scenario([], "\nScenario: Deposit\nGiven x\n", id_factory=_ids())
    assert error is None
    assert scenarios == [ScenarioRecord(id="id1", title="Deposit", content="Scenario: Deposit\nGiven x")]

    scenarios, _ = save_scenario(scenarios, "Given y", id_factory=_ids("n"))
    assert scenarios is not None
    assert scenarios[-1].title == PLACEHOLDER_TITLE


def test_save_with_edit_keeps_id_and_position() -> None:
    existing = [
        ScenarioRecord(id="1", title="A", content="Scenario: A"),
        ScenarioRecord(id="2", title="B", content="Scenario: B"),
    ]
    scenarios, error = save_scenario(existing, "Scenario: B2\nGiven z", editing_id="1")
    assert error is None
    assert scenarios == [
        ScenarioRecord(id="1", title="B2", content="Scenario: B2\nGiven z"),
        ScenarioRecord(id="2", title="B", content="Scenario: B"),
    ]


def test_save_with_unknown_edit_id_appends() -> None:
    scenarios, _ = save_scenario([], "Scenario: A", editing_id="gone", id_factory=_ids())
    assert scenarios is not None
    assert [scenario.id for scenario in scenarios] == ["id1"]


def test_delete_removes_exactly_one() -> None:
    existing = [
        ScenarioRecord(id="1", title="A", content="Scenario: A"),
        ScenarioRecord(id="2", title="B", content="Scenario: B"),
    ]
    remaining = delete_scenario(existing, "1")
    assert [scenario.id for scenario in remaining] == ["2"]
    assert delete_scenario(existing, "missing") == existing


def test_export_then_import_reconstructs_contents() -> None:
    original = [
        ScenarioRecord(id="1", title="A", content='Scenario: A\n  Given my account has "0" TL'),
        ScenarioRecord(id="2", title="B", content="Scenario: B\n  When I deposit\n\n  Then done"),
    ]
    exported = export_text(original)
    assert exported == original[0].content + "\n\n" + original[1].content

    rebuilt = merge_blocks([], parse_blocks(exported))
    assert rebuilt.added_count == 2
    assert [(s.title, s.content) for s in rebuilt.scenarios] == [(s.title, s.content) for s in original]

    assert merge_blocks(original, parse_blocks(exported)).added_count == 0


def test_record_from_dict_validates_fields() -> None:
    assert ScenarioRecord.from_dict({"id": "1", "title": "A", "content": "Scenario: A"}) == ScenarioRecord(
        id="1", title="A", content="Scenario: A"
    )
    assert ScenarioRecord.from_dict({"id": "1", "content": "Scenario: Named"}).title == "Named"
    assert ScenarioRecord.from_dict({"id": "", "title": "A", "content": "x"}) is None
    assert ScenarioRecord.from_dict({"id": "1", "title": "A", "content": "  "}) is None
    assert ScenarioRecord.from_dict(["not", "a", "dict"]) is None
