"""
Damage instance finalization.

Each (damage type, persistence) pair becomes one instance: the summed
category sub-expressions, parenthesized as needed and tagged with a flavor
such as ``[fire]`` or ``[bleed,persistent]``, plus its breakdown lines.
"""

import logging
import re
from collections.abc import Sequence

from ..config import FormulaSettings
from ..labels import DamageTypeLabels
from ..models import (
    CATEGORY_ORDER,
    AssembledFormula,
    DamageCategory,
    DamagePartial,
    DegreeOfSuccess,
    TypeMap,
)
from .assembly import CategoryGroups, assemble_categories, group_by_category
from .terms import ensure_valid_formula_head, sum_expression

logger = logging.getLogger("damage-formula.compiler")

_LEADING_PLUS_RE = re.compile(r"^\s+\+\s*")


def instance_flavor(damage_type: str, partials: Sequence[DamagePartial], persistent: bool = False) -> str:
    """Build the bracketed flavor tag of an instance, or an empty string if there is nothing to tag."""
    flavor: list[str] = []
    if damage_type != "untyped" or persistent:
        flavor.append(damage_type)
    if persistent:
        flavor.append(DamageCategory.PERSISTENT.value)
    for partial in partials:
        flavor.extend(partial.materials)
    return f"[{','.join(flavor)}]" if flavor else ""


def instance_breakdown(
    damage_type: str,
    groups: CategoryGroups,
    degree: DegreeOfSuccess,
    labels: DamageTypeLabels,
    persistent: bool = False,
) -> list[str]:
    """Build the breakdown lines of an instance.

    Critical-only partials are listed only on a critical success, and then
    after everything else. The first line carries the damage type label.
    """
    flattened = [p for category in CATEGORY_ORDER for p in groups.get(category, [])]
    breakdown_damage = [p for p in flattened if p.critical is not True]
    if degree == DegreeOfSuccess.CRITICAL_SUCCESS:
        breakdown_damage.extend(p for p in flattened if p.critical is True)

    if not breakdown_damage:
        return []

    if persistent:
        type_label = labels.persistent_label(damage_type)
    else:
        type_label = labels.label(damage_type)

    label_parts = [p.label for p in breakdown_damage]
    label_parts[0] = f"{_LEADING_PLUS_RE.sub('', label_parts[0])} {type_label}"
    return label_parts


def instances_from_type_map(
    type_map: TypeMap,
    degree: DegreeOfSuccess,
    persistent: bool = False,
    settings: FormulaSettings | None = None,
    labels: DamageTypeLabels | None = None,
) -> list[AssembledFormula]:
    """Convert a damage type map into instance formulas.

    Only persistent partials are used when ``persistent`` is set, and only
    non-persistent ones otherwise. Damage types that end up with no
    expression are dropped.
    """
    settings = settings or FormulaSettings()
    if labels is None:
        labels = DamageTypeLabels.load(settings.labels_path)

    instances = []
    for damage_type, type_partials in type_map.items():
        partials = [p for p in type_partials if (p.category == DamageCategory.PERSISTENT) == persistent]
        if not partials:
            continue

        groups = group_by_category(partials)
        expressions = assemble_categories(groups, degree, settings.crit_rule)
        summed = sum_expression([expressions.non_critical, expressions.critical])
        enclosed = ensure_valid_formula_head(summed)
        if not enclosed:
            logger.debug(f"No damage left for {damage_type!r} (persistent={persistent})")
            continue

        flavor = instance_flavor(damage_type, partials, persistent)
        instances.append(AssembledFormula(
            formula=f"{enclosed}{flavor}",
            breakdown=instance_breakdown(damage_type, groups, degree, labels, persistent),
        ))

    return instances
