"""
Split a damage definition into partial terms keyed by damage type.
"""

import logging

from ..models import (
    BaseDamage,
    DamageDefinition,
    DamageModifier,
    DamagePartial,
    DegreeOfSuccess,
    DiceSpec,
    TypeMap,
)

logger = logging.getLogger("damage-formula.compiler")


def _faces(die_size: str) -> int:
    return int(die_size.removeprefix("d"))


def base_label(base: BaseDamage) -> str:
    """Breakdown label of the base term, e.g. ``"2d6 + 4"``, ``"1d8"`` or ``"3"``."""
    dice_section = f"{base.dice_number}{base.die_size}" if base.dice_number > 0 and base.die_size else None
    if not dice_section:
        return str(base.modifier)

    if not base.modifier:
        return dice_section
    operator = " - " if base.modifier < 0 else " + "
    return f"{dice_section}{operator}{abs(base.modifier)}"


def modifier_label(modifier: DamageModifier) -> str:
    """Breakdown label of a modifier entry, e.g. ``"Status Bonus +2"``."""
    sign = "" if modifier.value < 0 else "+"
    return f"{modifier.label} {sign}{modifier.value}"


def modifier_matches_outcome(modifier: DamageModifier, degree: DegreeOfSuccess) -> bool:
    """Critical-only modifiers apply on critical successes alone."""
    return degree == DegreeOfSuccess.CRITICAL_SUCCESS or modifier.critical is not True


def partition_damage(
    damage: DamageDefinition,
    degree: DegreeOfSuccess = DegreeOfSuccess.SUCCESS,
) -> TypeMap:
    """Group the base term, dice and modifiers of a definition by damage type.

    Each type's list holds the base term first, then dice entries, then
    modifier entries, all in definition order. Dice keep their ``critical``
    flag for the assembler to screen; modifiers that cannot apply to this
    outcome are dropped here and never enter the map.

    Args:
        damage: Damage definition, already passed through the outcome gate.
        degree: Outcome of the preceding check.

    Returns:
        Mapping from damage type to its partials.
    """
    base = damage.base
    type_map: TypeMap = {}

    def add(damage_type: str, partial: DamagePartial) -> None:
        type_map.setdefault(damage_type, []).append(partial)

    has_base_dice = bool(base.dice_number > 0 and base.die_size)
    if has_base_dice or base.modifier:
        add(base.damage_type, DamagePartial(
            label=base_label(base),
            dice=DiceSpec(number=base.dice_number, faces=_faces(base.die_size)) if has_base_dice else None,
            modifier=base.modifier,
            category=base.category,
            critical=None,
            materials=list(base.materials),
        ))

    # Dice always stack
    for dice in damage.dice:
        if not dice.enabled:
            continue
        die_size = dice.die_size or base.die_size
        if dice.dice_number <= 0 or not die_size:
            logger.debug(f"Dropping dice entry {dice.label!r}: no dice or die size")
            continue
        add(dice.damage_type or base.damage_type, DamagePartial(
            label=dice.label,
            dice=DiceSpec(number=dice.dice_number, faces=_faces(die_size)),
            modifier=0,
            category=dice.category,
            critical=dice.critical,
        ))

    for modifier in damage.modifiers:
        if not modifier.enabled or not modifier.value:
            continue
        if not modifier_matches_outcome(modifier, degree):
            logger.debug(f"Dropping critical-only modifier {modifier.label!r}")
            continue
        add(modifier.damage_type or base.damage_type, DamagePartial(
            label=modifier_label(modifier),
            dice=None,
            modifier=modifier.value,
            category=modifier.damage_category,
            critical=modifier.critical,
        ))

    return type_map
