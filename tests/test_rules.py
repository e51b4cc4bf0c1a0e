"""Unit tests for loading rule sets from YAML."""

from pathlib import Path

import pytest

from creatorpoints.rules import DEFAULT_RULES, RulesError, load_rules


class TestLoadRules:
    def test_none_is_default(self) -> None:
        assert load_rules(None) is DEFAULT_RULES

    def test_missing_file_is_default(self, tmp_path: Path) -> None:
        assert load_rules(tmp_path / "rules.yml") is DEFAULT_RULES

    def test_partial_override(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yml"
        path.write_text("rank_bonuses: [30, 20, 10, 5]\ndiamond_step_points: 5\n")
        rules = load_rules(path)
        assert rules.rank_bonuses == [30, 20, 10, 5]
        assert rules.diamond_step_points == 5
        assert rules.hour_points == DEFAULT_RULES.hour_points

    def test_streak_table_as_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yml"
        path.write_text("streak_bonuses:\n  3: 10\n  7: 50\n")
        assert load_rules(path).streak_bonuses == [(7, 50), (3, 10)]

    def test_invalid_values(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yml"
        path.write_text("rank_bonuses: [25, -5]\n")
        with pytest.raises(RulesError):
            load_rules(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(RulesError):
            load_rules(path)

    def test_bad_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yml"
        path.write_text("rank_bonuses: [25, 20\n")
        with pytest.raises(RulesError):
            load_rules(path)
