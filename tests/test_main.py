"""
Tests for the MCP tool surface.

Tools are accessed via main.<tool>.fn() so they run without a server.
"""

import json

import pytest

import damage_formula.main as m


@pytest.fixture
def definition_json(fire_splash) -> str:
    return fire_splash.model_dump_json()


class TestCompileDamageFormulaTool:
    """Tests for the compile_damage_formula tool."""

    def test_success(self, definition_json):
        result = json.loads(m.compile_damage_formula.fn(definition=definition_json))
        assert result["formula"] == "{(2d6 + 3 + 1d4[splash])[fire]}"
        assert result["breakdown"] == ["2d6 Fire", "Bonus +3", "Splash"]

    def test_critical_with_rule_override(self, definition_json):
        result = json.loads(m.compile_damage_formula.fn(
            definition=definition_json,
            degree="critical_success",
            crit_rule="double-dice",
        ))
        assert "[doubled]" in result["formula"]

    def test_critical_failure(self, definition_json):
        result = m.compile_damage_formula.fn(definition=definition_json, degree="critical_failure")
        assert result == "No damage: critical failure."

    def test_invalid_definition(self):
        result = m.compile_damage_formula.fn(definition='{"base": {"die_size": "eight"}}')
        assert result.startswith("Error:")


class TestParseDamageFormulaTool:
    """Tests for the parse_damage_formula tool."""

    def test_parse(self):
        result = json.loads(m.parse_damage_formula.fn(formula="1d6 + 2d6 - 3"))
        assert result["terms"][1] == {"modifier": 0, "dice": {"number": 2, "faces": 6}}
        assert result["terms"][2] == {"modifier": -3, "dice": None}
        assert result["combined"] == "3d6 - 3"

    def test_invalid(self):
        assert m.parse_damage_formula.fn(formula="1d6 * 2").startswith("Error:")
