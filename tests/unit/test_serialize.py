import json
from pathlib import Path

import pytest

from application.picker import AudiencePicker
from application.serialize import build_selection_document, serialize_selection
from domain.selection import SelectionState, payload_key
from domain.taxonomy import Level
from infrastructure.io import read_selection
from infrastructure.observability import set_log_context


def test_payload_keys() -> None:
    assert payload_key(Level.SUBSUB) == "subsubCategoryIds"
    assert payload_key(Level.CATEGORY, "interest") == "interestCategoryIds"


def test_document_has_selection_badges_and_expansion(scenario_catalog) -> None:
    set_log_context(session_id_full="20260101_000000_mock", track="picker", source="mock")
    picker = AudiencePicker(scenario_catalog)
    picker.toggle(Level.SUBSUB, "X1")
    picker.toggle_expand(Level.IDENTITY, None, "I2")

    doc = build_selection_document(picker)

    assert doc["selection"] == {
        "identityIds": [],
        "categoryIds": ["C1"],
        "subcategoryIds": ["S1"],
        "subsubCategoryIds": ["X1"],
    }
    assert doc["badges"]["identity"] == {"I1": 3, "I2": 3}
    assert doc["expansion"]["identities"] == ["I2"]
    assert doc["context"]["track"] == "picker"
    assert doc["context"]["source"] == "mock"


def test_saved_selection_hydrates_a_new_picker(tmp_path: Path, shared_catalog) -> None:
    picker = AudiencePicker(shared_catalog)
    picker.toggle(Level.IDENTITY, "I2")
    picker.toggle(Level.SUBSUB, "X311")
    path = serialize_selection(picker, tmp_path / "out" / "selection.json")

    saved = json.loads(path.read_text(encoding="utf-8"))
    path.write_text(json.dumps(saved["selection"]), encoding="utf-8")
    restored = AudiencePicker(shared_catalog, initial=read_selection(path))

    assert restored.selection.snapshot() == picker.selection.snapshot()


def test_read_selection_with_prefix(tmp_path: Path) -> None:
    path = tmp_path / "wants.json"
    path.write_text(json.dumps({"interestCategoryIds": ["C1", 2], "categoryIds": ["ignored"]}), encoding="utf-8")

    state = read_selection(path, prefix="interest")

    assert state == SelectionState(category_ids=frozenset({"C1", "2"}))


@pytest.mark.parametrize("content", ["[1, 2]", '{"categoryIds": "C1"}'])
def test_read_selection_rejects_malformed_files(tmp_path: Path, content: str) -> None:
    path = tmp_path / "selection.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError):
        read_selection(path)


def test_read_selection_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_selection(tmp_path / "nope.json")
