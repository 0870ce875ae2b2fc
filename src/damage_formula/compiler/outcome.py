"""
Degree-of-success gate applied before any grouping.

Critical failures deal no damage and ordinary failures keep only splash
damage. This still assumes weapon and melee damage: the base term is never
filtered, so other damage sources need their own rule before reusing it.
"""

import logging

from ..models import DamageCategory, DamageDefinition, DegreeOfSuccess

logger = logging.getLogger("damage-formula.compiler")


def apply_outcome(definition: DamageDefinition, degree: DegreeOfSuccess) -> DamageDefinition | None:
    """Apply the degree-of-success policy to a damage definition.

    Args:
        definition: The caller's damage definition. Never mutated.
        degree: Outcome of the preceding check.

    Returns:
        An independent copy of the definition, filtered for a failure, or
        None on a critical failure.
    """
    if degree == DegreeOfSuccess.CRITICAL_FAILURE:
        logger.debug("Critical failure: no damage")
        return None

    damage = definition.model_copy(deep=True)
    if degree == DegreeOfSuccess.FAILURE:
        damage.dice = [d for d in damage.dice if d.category == DamageCategory.SPLASH]
        damage.modifiers = [m for m in damage.modifiers if m.damage_category == DamageCategory.SPLASH]
        logger.debug(
            f"Failure: kept {len(damage.dice)} splash dice and {len(damage.modifiers)} splash modifiers"
        )

    return damage
