import json
import logging
import sys
from pathlib import Path

import pytest
import yaml

import main


@pytest.fixture
def restore_root_handlers():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in root.handlers:
        h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_cli_runs_actions_against_mock_catalog(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, restore_root_handlers):
    config = tmp_path / "picker.yaml"
    config.write_text(
        yaml.safe_dump({"source": "mock", "view": {"jump_to_selection": True}, "output_dir": str(tmp_path / "out")}),
        encoding="utf-8",
    )
    monkeypatch.setattr(
        sys,
        "argv",
        ["main.py", "--config", str(config), "--env", str(tmp_path / "missing.env"), "-a", "subsub:X1", "-a", "identity:I2"],
    )

    main.main()

    (session_dir,) = list((tmp_path / "out").iterdir())
    doc = json.loads((session_dir / "selection.json").read_text(encoding="utf-8"))
    assert doc["selection"]["identityIds"] == ["I2"]
    assert doc["selection"]["subsubCategoryIds"] == ["X1"]
    assert doc["badges"]["category"] == {"C1": 2}
    assert doc["expansion"]["subcategories"] == {"C1": "S1"}
    assert (session_dir / "session.log").exists()


def test_cli_rejects_bad_action_before_loading(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "picker.yaml"
    config.write_text(yaml.safe_dump({"source": "mock", "output_dir": str(tmp_path / "out")}), encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["main.py", "--config", str(config), "-a", "planet:P1"])

    with pytest.raises(ValueError, match="Unknown level"):
        main.main()

    assert not (tmp_path / "out").exists()


def test_cli_onboarding_writes_both_tracks(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, restore_root_handlers):
    config = tmp_path / "picker.yaml"
    config.write_text(
        yaml.safe_dump({"source": "mock", "onboarding": {"max_want_categories": 1}, "output_dir": str(tmp_path / "out")}),
        encoding="utf-8",
    )
    steps = ["identity:I1", "next", "category:C1", "next", "identity:I2", "next", "category:C1", "category:C2"]
    argv = ["main.py", "--config", str(config), "--env", str(tmp_path / "missing.env"), "--onboarding"]
    for step in steps:
        argv += ["-a", step]
    monkeypatch.setattr(sys, "argv", argv)

    main.main()

    (session_dir,) = list((tmp_path / "out").iterdir())
    assert session_dir.name.endswith("_onboarding")
    payload = json.loads((session_dir / "onboarding.json").read_text(encoding="utf-8"))
    assert payload["identityIds"] == ["I1"]
    assert payload["categoryIds"] == ["C1"]
    assert payload["interestIdentityIds"] == ["I2"]
    # The configured limit of one category rejects the second pick
    assert payload["interestCategoryIds"] == ["C1"]
    assert not (session_dir / "selection.json").exists()


def test_cli_onboarding_stops_on_incomplete_step(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, restore_root_handlers):
    config = tmp_path / "picker.yaml"
    config.write_text(yaml.safe_dump({"source": "mock", "output_dir": str(tmp_path / "out")}), encoding="utf-8")
    monkeypatch.setattr(
        sys,
        "argv",
        ["main.py", "--config", str(config), "--env", str(tmp_path / "missing.env"), "--onboarding", "-a", "next"],
    )

    with pytest.raises(ValueError, match="incomplete"):
        main.main()
