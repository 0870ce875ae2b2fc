"""
Tests for compiler settings and damage type labels.

Covers:
- FormulaSettings defaults
- load_settings(): environment parsing and fallback to the default crit rule
- DamageTypeLabels: bundled catalogue, YAML loading, fallbacks, errors
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from damage_formula.config import CRIT_RULE_ENV, LABELS_ENV, FormulaSettings, load_settings
from damage_formula.labels import DamageTypeLabels
from damage_formula.models import BaseDamage, CritRule


class TestFormulaSettings:
    """Tests for FormulaSettings and load_settings."""

    def test_defaults(self):
        settings = FormulaSettings()
        assert settings.crit_rule == CritRule.DOUBLE_DAMAGE
        assert settings.labels_path is None

    def test_invalid_crit_rule_rejected(self):
        with pytest.raises(ValidationError):
            FormulaSettings(crit_rule="triple")

    def test_load_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv(CRIT_RULE_ENV, "double-dice")
        monkeypatch.setenv(LABELS_ENV, str(tmp_path / "labels.yaml"))
        settings = load_settings()
        assert settings.crit_rule == CritRule.DOUBLE_DICE
        assert settings.labels_path == tmp_path / "labels.yaml"

    def test_crit_rule_case_insensitive(self, monkeypatch):
        monkeypatch.setenv(CRIT_RULE_ENV, "  Double-Dice ")
        assert load_settings().crit_rule == CritRule.DOUBLE_DICE

    def test_missing_environment_uses_default(self, monkeypatch):
        monkeypatch.delenv(CRIT_RULE_ENV, raising=False)
        monkeypatch.delenv(LABELS_ENV, raising=False)
        assert load_settings().crit_rule == CritRule.DOUBLE_DAMAGE
        assert load_settings(default=CritRule.DOUBLE_DICE).crit_rule == CritRule.DOUBLE_DICE

    def test_unknown_crit_rule_falls_back(self, monkeypatch, caplog):
        monkeypatch.setenv(CRIT_RULE_ENV, "triple-damage")
        with caplog.at_level("WARNING", logger="damage-formula"):
            settings = load_settings()
        assert settings.crit_rule == CritRule.DOUBLE_DAMAGE
        assert "triple-damage" in caplog.text


class TestDamageTypeLabels:
    """Tests for DamageTypeLabels."""

    def test_bundled_catalogue(self):
        labels = DamageTypeLabels.load()
        assert labels.label("fire") == "Fire"
        assert labels.persistent_label("bleed") == "Bleed Persistent Damage"
        assert "slashing" in labels

    def test_unknown_type_falls_back_to_raw(self):
        labels = DamageTypeLabels.load()
        assert labels.label("starlight") == "starlight"
        assert labels.persistent_label("starlight") == "starlight Persistent Damage"

    def test_load_custom_yaml(self, tmp_path: Path):
        path = tmp_path / "labels.yaml"
        path.write_text(yaml.safe_dump({
            "persistent_format": "Persistent {damage_type}",
            "damage_types": {"fire": "Feu", "cold": "Froid"},
        }), encoding="utf-8")
        labels = DamageTypeLabels.load(path)
        assert len(labels) == 2
        assert labels.label("cold") == "Froid"
        assert labels.persistent_label("fire") == "Persistent Feu"

    def test_missing_key_raises(self, tmp_path: Path):
        path = tmp_path / "labels.yaml"
        path.write_text("labels: {}\n", encoding="utf-8")
        with pytest.raises(ValueError):
            DamageTypeLabels.load(path)

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            DamageTypeLabels.load(tmp_path / "missing.yaml")


class TestDieSizeValidation:
    """Die sizes are normalized on the models."""

    def test_normalized(self):
        assert BaseDamage(die_size=" D8 ").die_size == "d8"

    def test_empty_is_none(self):
        assert BaseDamage(die_size="").die_size is None

    def test_invalid_rejected(self):
        with pytest.raises(ValidationError):
            BaseDamage(die_size="eight")
