"""
Damage formula compiler.

Pipeline: outcome gate -> type partitioner -> category assembler ->
instance finalizer -> formula aggregator. Every stage is a pure function
of its inputs; nothing is cached between calls.
"""

from .assembly import CategoryExpressions, assemble_categories, create_partial_formulas, group_by_category
from .formula import create_damage_formula
from .instances import instance_breakdown, instance_flavor, instances_from_type_map
from .outcome import apply_outcome
from .partition import base_label, modifier_label, partition_damage
from .terms import (
    combine_partial_terms,
    ensure_valid_formula_head,
    has_operators,
    parse_terms_from_simple_formula,
    sum_expression,
)

__all__ = [
    "CategoryExpressions",
    "apply_outcome",
    "assemble_categories",
    "base_label",
    "combine_partial_terms",
    "create_damage_formula",
    "create_partial_formulas",
    "ensure_valid_formula_head",
    "group_by_category",
    "has_operators",
    "instance_breakdown",
    "instance_flavor",
    "instances_from_type_map",
    "modifier_label",
    "parse_terms_from_simple_formula",
    "partition_damage",
    "sum_expression",
]
