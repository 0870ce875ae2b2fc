"""
Compiler settings.

Settings are resolved once by the caller (usually from the environment) and
passed into the compiler explicitly. The compiler never reads process-wide
state on its own.

Environment variables:
    DAMAGE_FORMULA_CRIT_RULE: 'double-damage' (default) or 'double-dice'.
    DAMAGE_FORMULA_LABELS: Path to a damage type label YAML file.
"""

import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field

from .models import CritRule

logger = logging.getLogger("damage-formula")

CRIT_RULE_ENV = "DAMAGE_FORMULA_CRIT_RULE"
LABELS_ENV = "DAMAGE_FORMULA_LABELS"


class FormulaSettings(BaseModel):
    """Settings consulted while compiling damage formulas."""
    crit_rule: CritRule = Field(
        default=CritRule.DOUBLE_DAMAGE,
        description="Critical hit rule: double the whole subtotal or double the dice"
    )
    labels_path: Path | None = Field(
        default=None,
        description="Optional damage type label catalogue; the bundled one is used when unset"
    )


def load_settings(default: CritRule = CritRule.DOUBLE_DAMAGE) -> FormulaSettings:
    """Build settings from the environment.

    A missing or unrecognised crit rule falls back to ``default`` instead of
    failing.

    Args:
        default: Crit rule to use when the environment does not provide a valid one.

    Returns:
        Resolved FormulaSettings.
    """
    raw_rule = os.environ.get(CRIT_RULE_ENV)
    crit_rule = default
    if raw_rule:
        try:
            crit_rule = CritRule(raw_rule.strip().lower())
        except ValueError:
            logger.warning(f"Unknown crit rule {raw_rule!r} in {CRIT_RULE_ENV}, using '{default.value}'")

    labels_env = os.environ.get(LABELS_ENV)
    labels_path = Path(labels_env) if labels_env else None

    settings = FormulaSettings(crit_rule=crit_rule, labels_path=labels_path)
    logger.debug(f"Formula settings: crit_rule={settings.crit_rule.value}, labels={settings.labels_path}")
    return settings
