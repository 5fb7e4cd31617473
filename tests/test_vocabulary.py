from gherkinpad.core.scenarios import ScenarioRecord
from gherkinpad.core.vocabulary import build_vocabulary, step_text


def _scenarios() -> list[ScenarioRecord]:
    return [
        ScenarioRecord(
            id="1",
            title="Deposit",
            content='Scenario: Deposit\n  Given my account has "0" TL\n  When I deposit "500" TL\n  Then my account has "500" TL',
        ),
        ScenarioRecord(
            id="2",
            title="Withdraw",
            content='Scenario: Withdraw\n  given my account has "0" TL\n  And I withdraw "10" TL\n  But nothing happens',
        ),
    ]


def test_vocabulary_first_seen_order_and_dedup() -> None:
    assert build_vocabulary(_scenarios()) == [
        'my account has "0" TL',
        'I deposit "500" TL',
        'my account has "500" TL',
        'I withdraw "10" TL',
        "nothing happens",
    ]


def test_vocabulary_is_case_sensitive() -> None:
    scenarios = [
        ScenarioRecord(id="1", title="A", content="Given a user"),
        ScenarioRecord(id="2", title="B", content="When A user"),
    ]
    assert build_vocabulary(scenarios) == ["a user", "A user"]


def test_vocabulary_is_idempotent() -> None:
    scenarios = _scenarios()
    assert build_vocabulary(scenarios) == build_vocabulary(scenarios)


def test_step_text_ignores_headers_and_bare_keywords() -> None:
    assert step_text("Scenario: Deposit") is None
    assert step_text("  Given   ") is None
    assert step_text("Feature: x") is None
    assert step_text("\tThen   it   works  ") == "it   works"


def test_empty_collection_has_empty_vocabulary() -> None:
    assert build_vocabulary([]) == []
