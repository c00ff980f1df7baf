"""Tests for the clitree command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from clitree.cli import main

from .virtual_terminal import VirtualTerminal

DOWN = "\x1b[B"
RIGHT = "\x1b[C"
LEFT = "\x1b[D"


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLITREE_CONFIG_DIR", str(tmp_path / "config"))


def script_terminal(monkeypatch: pytest.MonkeyPatch, keys: list[str]) -> None:
    monkeypatch.setattr(
        "clitree.app.ProcessTerminal", lambda: VirtualTerminal(script=keys)
    )


class TestDemo:
    def test_prints_selected_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        script_terminal(monkeypatch, [RIGHT, RIGHT, RIGHT, DOWN, RIGHT, "q"])
        result = CliRunner().invoke(main, ["demo"])
        assert result.exit_code == 0, result.output
        assert result.output == "value1\nvalue2\n"

    def test_nothing_selected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        script_terminal(monkeypatch, ["q"])
        result = CliRunner().invoke(main, ["demo", "--no-color"])
        assert result.exit_code == 0
        assert result.output == ""

    def test_enter_activates_flag(self, monkeypatch: pytest.MonkeyPatch) -> None:
        script_terminal(monkeypatch, ["\r", "\r", "\r", "q"])
        result = CliRunner().invoke(main, ["demo", "--enter-activates"])
        assert result.exit_code == 0
        assert result.output == "value1\n"

    def test_settings_file_is_read(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "settings.json").write_text(
            json.dumps({"keybindings": {"quit": "x"}}), encoding="utf-8"
        )
        script_terminal(monkeypatch, ["q", RIGHT, RIGHT, RIGHT, "x"])
        result = CliRunner().invoke(main, ["demo"])
        assert result.exit_code == 0
        assert result.output == "value1\n"

    def test_wide_cursor(self, monkeypatch: pytest.MonkeyPatch) -> None:
        script_terminal(monkeypatch, ["q"])
        result = CliRunner().invoke(main, ["demo", "--cursor", ">>"])
        assert result.exit_code == 1
        assert "one column wide" in result.output


class TestPick:
    def test_prints_selected_leaves(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "tree.json"
        path.write_text(
            json.dumps(
                {
                    "name": "root",
                    "children": [
                        {"name": "fruit", "children": ["apple", "pear"]},
                        {"name": "veg", "children": ["kale"]},
                    ],
                }
            ),
            encoding="utf-8",
        )
        script_terminal(monkeypatch, [RIGHT, RIGHT, LEFT, DOWN, RIGHT, RIGHT, "q"])
        result = CliRunner().invoke(main, ["pick", str(path)])
        assert result.exit_code == 0, result.output
        assert result.output == "apple\nkale\n"

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "tree.json"
        path.write_text("{", encoding="utf-8")
        result = CliRunner().invoke(main, ["pick", str(path)])
        assert result.exit_code == 1
        assert "invalid JSON" in result.output

    def test_empty_tree(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "tree.json"
        path.write_text("[]", encoding="utf-8")
        script_terminal(monkeypatch, ["q"])
        result = CliRunner().invoke(main, ["pick", str(path)])
        assert result.exit_code == 1
        assert "empty tree" in result.output

    def test_entry_without_name(self, tmp_path: Path) -> None:
        path = tmp_path / "tree.json"
        path.write_text('[{"children": []}]', encoding="utf-8")
        result = CliRunner().invoke(main, ["pick", str(path)])
        assert result.exit_code == 1
        assert "need a name" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(main, ["pick", str(tmp_path / "nope.json")])
        assert result.exit_code == 2
