"""
Damage formula compilation entry point.
"""

import logging

from ..config import FormulaSettings
from ..labels import DamageTypeLabels
from ..models import AssembledFormula, DamageDefinition, DegreeOfSuccess
from .instances import instances_from_type_map
from .outcome import apply_outcome
from .partition import partition_damage

logger = logging.getLogger("damage-formula.compiler")


def create_damage_formula(
    definition: DamageDefinition,
    degree: DegreeOfSuccess = DegreeOfSuccess.SUCCESS,
    *,
    settings: FormulaSettings | None = None,
    labels: DamageTypeLabels | None = None,
) -> AssembledFormula | None:
    """Convert a damage definition into a final pooled formula for the given outcome.

    The caller's definition is never mutated, so repeated calls with the same
    arguments produce identical results.

    Args:
        definition: Base damage plus dice and modifier entries.
        degree: Outcome of the preceding check. Defaults to a success.
        settings: Compiler settings; defaults to double-damage criticals.
        labels: Damage type labels for the breakdown; defaults to the bundled catalogue.

    Returns:
        The assembled formula and breakdown, or None on a critical failure.

    Example:
        >>> definition = DamageDefinition(base=BaseDamage(dice_number=2, die_size="d6", modifier=4, damage_type="slashing"))
        >>> create_damage_formula(definition).formula
        '{(2d6 + 4)[slashing]}'
    """
    degree = DegreeOfSuccess(degree)
    damage = apply_outcome(definition, degree)
    if damage is None:
        return None

    settings = settings or FormulaSettings()
    if labels is None:
        labels = DamageTypeLabels.load(settings.labels_path)

    type_map = partition_damage(damage, degree)
    instances = [
        *instances_from_type_map(type_map, degree, persistent=False, settings=settings, labels=labels),
        *instances_from_type_map(type_map, degree, persistent=True, settings=settings, labels=labels),
    ]

    formula = "{" + ",".join(instance.formula for instance in instances) + "}"
    breakdown = [line for instance in instances for line in instance.breakdown]
    logger.debug(f"Compiled damage formula {formula} ({degree.name})")
    return AssembledFormula(formula=formula, breakdown=breakdown)
