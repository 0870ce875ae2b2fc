"""
Damage Formula MCP Server
Exposes the damage formula compiler as FastMCP tools.
"""

import json
import logging
from typing import Annotated, Literal

from dotenv import load_dotenv
from fastmcp import FastMCP
from pydantic import Field, ValidationError

from .compiler import combine_partial_terms, create_damage_formula, parse_terms_from_simple_formula
from .config import load_settings
from .errors import FormulaParseError
from .labels import DamageTypeLabels
from .models import CritRule, DamageDefinition, DegreeOfSuccess

logger = logging.getLogger("damage-formula")

logging.basicConfig(
    level=logging.DEBUG,
    )

if not load_dotenv():
    logger.debug(".env file not found, using environment and defaults")

settings = load_settings()
labels = DamageTypeLabels.load(settings.labels_path)
logger.debug(f"Loaded {len(labels)} damage type labels")

mcp = FastMCP(
    name="damage-formula"
)

DegreeName = Literal["critical_failure", "failure", "success", "critical_success"]


@mcp.tool
def compile_damage_formula(
    definition: Annotated[str, Field(description="Damage definition as JSON: base, dice and modifiers")],
    degree: Annotated[DegreeName, Field(description="Degree of success of the preceding check")] = "success",
    crit_rule: Annotated[
        Literal["double-damage", "double-dice"] | None,
        Field(description="Critical hit rule override; the server setting is used when omitted"),
    ] = None,
) -> str:
    """Compile a damage definition into a pooled dice formula and its breakdown.

    Returns JSON with `formula` and `breakdown`. A critical failure deals no damage.
    """
    try:
        damage = DamageDefinition.model_validate_json(definition)
    except ValidationError as e:
        return f"Error: invalid damage definition: {e}"

    call_settings = settings
    if crit_rule is not None:
        call_settings = settings.model_copy(update={"crit_rule": CritRule(crit_rule)})

    result = create_damage_formula(
        damage,
        DegreeOfSuccess[degree.upper()],
        settings=call_settings,
        labels=labels,
    )
    if result is None:
        return "No damage: critical failure."
    return json.dumps(result.model_dump(), indent=2)


@mcp.tool
def parse_damage_formula(
    formula: Annotated[str, Field(description="Simple formula with only + and - operators, e.g. '2d6 + 1d4 - 2'")],
) -> str:
    """Split a simple damage formula into dice and flat terms and recombine them.

    Subtracted terms become negative terms. Dice of the same size are merged
    in the recombined formula.
    """
    try:
        terms = parse_terms_from_simple_formula(formula)
    except FormulaParseError as e:
        return f"Error: {e}"

    return json.dumps({
        "terms": [term.model_dump() for term in terms],
        "combined": combine_partial_terms(terms),
    }, indent=2)


logger.debug("✅ All tools successfully registered. Damage formula server running! 🎲")

def main() -> None:
    """Main entry point for the Damage Formula MCP Server."""
    mcp.run()

if __name__ == "__main__":
    main()
