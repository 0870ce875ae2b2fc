"""
Term-level helpers for damage formulas.

Provides:
- combine_partial_terms: merge dice and flat modifiers into one additive term.
- parse_terms_from_simple_formula: the inverse for flavor-less +/- formulas.
- sum_expression, has_operators, ensure_valid_formula_head: expression
  joining and parenthesization rules shared by the assembler and finalizer.
"""

import re
from collections.abc import Iterable, Sequence

from ..errors import FormulaParseError
from ..models import DamagePartialTerm, DiceSpec

_OPERATORS_RE = re.compile(r"[-+*/]")
_SIMPLE_HEAD_RE = re.compile(r"\d+(d\d+)?")
_SIMPLE_TERM_RE = re.compile(r"(?:(\d*)d(\d+)|(\d+))", re.IGNORECASE)


def combine_partial_terms(terms: Sequence[DamagePartialTerm], double_dice: bool = False) -> str:
    """Combine dice and flat modifiers into a single formula, ignoring damage type and category.

    Dice are summed per die size; a die size whose summed count is zero or
    negative is dropped, so negative dice partials cancel positive ones of
    the same size. Remaining dice are ordered by descending die size.

    Args:
        terms: Partial terms to combine.
        double_dice: Render dice as doubled dice and the constant as ``2 * n``.

    Returns:
        The combined term, or an empty string if nothing contributes.

    Example:
        >>> combine_partial_terms([DamagePartialTerm(dice=DiceSpec(number=1, faces=6), modifier=3)])
        '1d6 + 3'
    """
    constant = sum(term.modifier for term in terms)

    dice_by_faces: dict[int, int] = {}
    for term in terms:
        if term.dice is None:
            continue
        dice_by_faces[term.dice.faces] = dice_by_faces.get(term.dice.faces, 0) + term.dice.number

    dice_terms = []
    for faces in sorted(dice_by_faces, reverse=True):
        number = dice_by_faces[faces]
        if number <= 0:
            continue
        if double_dice:
            dice_terms.append(f"({number * 2}d{faces}[doubled])")
        else:
            dice_terms.append(f"{number}d{faces}")

    parts: list[str] = []
    if dice_terms:
        parts.append(" + ".join(dice_terms))
    if constant:
        parts.append(f"2 * {abs(constant)}" if double_dice else str(abs(constant)))

    return (" + " if constant > 0 else " - ").join(parts)


def parse_terms_from_simple_formula(formula: str) -> list[DamagePartialTerm]:
    """Parse a simple flavor-less formula with only + and - operators into partial terms.

    All subtracted terms become negative terms.

    Args:
        formula: A formula such as ``"2d6 + 1d4 - 3"``.

    Returns:
        One DamagePartialTerm per dice or numeric term, in formula order.

    Raises:
        FormulaParseError: If the formula contains anything other than
            dice, integers, ``+`` and ``-``.
    """
    text = formula.strip()
    if not text:
        raise FormulaParseError(formula)

    # Alternates term, operator, term, ...
    pieces = re.split(r"([+-])", text)
    terms: list[DamagePartialTerm] = []
    sign = 1
    for index, piece in enumerate(pieces):
        if index % 2 == 1:
            sign = -1 if piece == "-" else 1
            continue

        token = piece.strip()
        if not token:
            # Only a leading sign may omit its left-hand term
            if index == 0 and len(pieces) > 1:
                continue
            raise FormulaParseError(formula)

        match = _SIMPLE_TERM_RE.fullmatch(token)
        if not match:
            raise FormulaParseError(formula, token)

        number, faces, constant = match.groups()
        if constant is not None:
            terms.append(DamagePartialTerm(modifier=sign * int(constant), dice=None))
        else:
            dice = DiceSpec(number=sign * int(number or 1), faces=int(faces))
            terms.append(DamagePartialTerm(modifier=0, dice=dice))

    return terms


def has_operators(formula: str | None) -> bool:
    return bool(_OPERATORS_RE.search(formula or ""))


def sum_expression(terms: Iterable[str | None], double: bool = False) -> str | None:
    """Join non-empty terms with ``" + "``, optionally doubling the whole sum.

    Returns None when there is nothing to sum.
    """
    present = [term for term in terms if term]
    if not present:
        return None

    summed = " + ".join(present)
    enclosed = f"({summed})" if double and has_operators(summed) else summed
    return f"2 * {enclosed}" if double else enclosed


def is_wrapped(formula: str) -> bool:
    """Whether a single pair of parentheses encloses the whole formula."""
    if not (formula.startswith("(") and formula.endswith(")")):
        return False

    depth = 0
    for index, char in enumerate(formula):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0 and index < len(formula) - 1:
                return False
    return depth == 0


def ensure_valid_formula_head(formula: str | None) -> str | None:
    """Ensure the formula is valid as a damage instance formula before flavor is attached."""
    if not formula:
        return None
    if is_wrapped(formula) or _SIMPLE_HEAD_RE.fullmatch(formula):
        return formula
    return f"({formula})"
