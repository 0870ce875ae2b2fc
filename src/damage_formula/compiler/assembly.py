"""
Category assembly for one damage type.

Partials are grouped by category and combined in the fixed CATEGORY_ORDER.
Two sub-expressions are built per damage type and persistence:

- non-critical: damage that is doubled on a critical success, plus
  never-doubled damage when the outcome is not critical.
- critical: critical-only damage plus never-doubled damage, built only on a
  critical success and never doubled itself.
"""

import logging
from collections.abc import Collection, Iterable
from dataclasses import dataclass

from ..models import CATEGORY_ORDER, CritRule, DamageCategory, DamagePartial, DegreeOfSuccess
from .terms import combine_partial_terms, has_operators, sum_expression

logger = logging.getLogger("damage-formula.compiler")

# Inclusion sets keyed on DamagePartial.critical
DOUBLE_ON_CRIT: bool | None = None
DONT_DOUBLE_ON_CRIT: bool | None = False
CRITICAL_ONLY: bool | None = True

# Categories whose combined term is wrapped so a trailing flavor binds to all of it
_ENCLOSED_CATEGORIES = (DamageCategory.PRECISION, DamageCategory.SPLASH)

CategoryGroups = dict[DamageCategory | None, list[DamagePartial]]


@dataclass(frozen=True)
class CategoryExpressions:
    """The two sub-expressions of one damage type instance."""
    non_critical: str | None
    critical: str | None


def group_by_category(partials: Iterable[DamagePartial]) -> CategoryGroups:
    """Group partials by category, keyed in CATEGORY_ORDER.

    Every canonical category is present in the result, possibly empty.
    """
    groups: CategoryGroups = {category: [] for category in CATEGORY_ORDER}
    for partial in partials:
        groups[partial.category].append(partial)
    return groups


def create_partial_formulas(
    groups: CategoryGroups,
    critical_inclusion: Collection[bool | None],
    double_dice: bool = False,
) -> list[str]:
    """Combine each category's admitted partials into one flavored term.

    Args:
        groups: Partials grouped by category.
        critical_inclusion: ``critical`` flag values admitted into the terms.
        double_dice: Whether dice and constants are doubled per term.

    Returns:
        Non-empty category terms in CATEGORY_ORDER.
    """
    formulas = []
    for category in CATEGORY_ORDER:
        requested = [p for p in groups.get(category, []) if p.critical in critical_inclusion]
        term = combine_partial_terms(requested, double_dice=double_dice)
        if category in _ENCLOSED_CATEGORIES and has_operators(term):
            term = f"({term})"
        if not term:
            continue
        if category is not None and category != DamageCategory.PERSISTENT:
            term = f"{term}[{category.value}]"
        formulas.append(term)
    return formulas


def assemble_categories(
    groups: CategoryGroups,
    degree: DegreeOfSuccess,
    crit_rule: CritRule = CritRule.DOUBLE_DAMAGE,
) -> CategoryExpressions:
    """Build the non-critical and critical sub-expressions for one damage type.

    On a critical success with the double-damage rule, the non-critical
    subtotal is wrapped as ``2 * (...)``. With the double-dice rule each term
    carries its own ``[doubled]`` dice instead; the two never combine.
    """
    critical = degree == DegreeOfSuccess.CRITICAL_SUCCESS

    if critical:
        inclusion: tuple[bool | None, ...] = (DOUBLE_ON_CRIT,)
    else:
        inclusion = (DOUBLE_ON_CRIT, DONT_DOUBLE_ON_CRIT)

    double_dice = critical and DOUBLE_ON_CRIT in inclusion and crit_rule == CritRule.DOUBLE_DICE
    double = critical and not double_dice
    non_critical = sum_expression(
        create_partial_formulas(groups, inclusion, double_dice=double_dice),
        double=double,
    )

    critical_damage = None
    if critical:
        critical_damage = sum_expression(
            create_partial_formulas(groups, (CRITICAL_ONLY, DONT_DOUBLE_ON_CRIT))
        )
        logger.debug(f"Critical doubling: {'dice' if double_dice else 'subtotal'}")
    return CategoryExpressions(non_critical=non_critical, critical=critical_damage)
