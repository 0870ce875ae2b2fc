"""
Damage formula compiler - turns damage definitions into pooled dice formulas with breakdowns.
"""

from .compiler import create_damage_formula, parse_terms_from_simple_formula, combine_partial_terms
from .config import FormulaSettings, load_settings
from .errors import DamageFormulaError, FormulaParseError
from .labels import DamageTypeLabels
from .models import *

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("damage-formula")
except Exception:
    __version__ = "0.1.0"  # Fallback if metadata unavailable
__all__ = [
    "create_damage_formula",
    "parse_terms_from_simple_formula",
    "combine_partial_terms",
    "FormulaSettings",
    "load_settings",
    "DamageFormulaError",
    "FormulaParseError",
    "DamageTypeLabels",
    "AssembledFormula",
    "BaseDamage",
    "CritRule",
    "DamageCategory",
    "DamageDefinition",
    "DamageDice",
    "DamageModifier",
    "DamagePartial",
    "DamagePartialTerm",
    "DegreeOfSuccess",
    "DiceSpec",
]
