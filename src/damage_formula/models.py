"""
Data models for the damage formula compiler.

The caller-facing input is a DamageDefinition (base damage plus toggleable
dice and modifier entries). DamagePartial is the transient per-compilation
unit the compiler groups by damage type and category. AssembledFormula is
the output consumed by the dice roller and the chat log.
"""

from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DegreeOfSuccess(IntEnum):
    """Outcome tier of the check that precedes the damage roll."""
    CRITICAL_FAILURE = 0
    FAILURE = 1
    SUCCESS = 2
    CRITICAL_SUCCESS = 3


class DamageCategory(str, Enum):
    """Damage categories with special grouping rules. Plain damage has no category (None)."""
    PERSISTENT = "persistent"
    PRECISION = "precision"
    SPLASH = "splash"


# Processing order for every grouping step: plain, persistent, precision, splash.
CATEGORY_ORDER: tuple[DamageCategory | None, ...] = (
    None,
    DamageCategory.PERSISTENT,
    DamageCategory.PRECISION,
    DamageCategory.SPLASH,
)


class CritRule(str, Enum):
    """How critical hits double damage."""
    DOUBLE_DAMAGE = "double-damage"
    DOUBLE_DICE = "double-dice"


def _normalize_die_size(value: str | None) -> str | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError(f"Invalid die size: {value!r}")
    size = value.strip().lower()
    if not size.startswith("d") or not size[1:].isdigit():
        raise ValueError(f"Invalid die size: {value!r}")
    return size


class BaseDamage(BaseModel):
    """The base damage term of a strike or effect (e.g. a weapon's 2d6 + 4 slashing)."""
    dice_number: int = Field(default=0, description="Number of base damage dice")
    die_size: str | None = Field(default=None, description="Die size, e.g. 'd6'")
    modifier: int = Field(default=0, description="Flat modifier added to the base dice")
    damage_type: str = Field(default="untyped", description="Damage type of the base term")
    category: DamageCategory | None = Field(default=None, description="Category of the base term")
    materials: list[str] = Field(
        default_factory=list,
        description="Material effects carried by the damage (e.g. 'silver', 'cold-iron')"
    )

    @field_validator("die_size", mode="before")
    @classmethod
    def validate_die_size(cls, value: str | None) -> str | None:
        return _normalize_die_size(value)


class DamageDice(BaseModel):
    """An extra damage dice entry (e.g. a striking rune or sneak attack).

    Attributes:
        label: Display label used in the breakdown.
        dice_number: Number of dice; entries with zero or fewer dice are ignored.
        die_size: Die size. Falls back to the base die size when unset.
        damage_type: Damage type. Falls back to the base damage type when unset.
        category: Optional damage category.
        critical: True = critical only, False = never doubled, None = doubled on a critical.
        enabled: Disabled entries are ignored.
    """
    label: str = ""
    dice_number: int = 0
    die_size: str | None = None
    damage_type: str | None = None
    category: DamageCategory | None = None
    critical: bool | None = None
    enabled: bool = True

    @field_validator("die_size", mode="before")
    @classmethod
    def validate_die_size(cls, value: str | None) -> str | None:
        return _normalize_die_size(value)


class DamageModifier(BaseModel):
    """A flat damage modifier entry (e.g. a +2 status bonus)."""
    label: str = ""
    value: int = 0
    damage_type: str | None = None
    damage_category: DamageCategory | None = None
    critical: bool | None = None
    enabled: bool = True


class DamageDefinition(BaseModel):
    """Full damage definition: base term plus independently toggleable dice and modifiers."""
    base: BaseDamage = Field(default_factory=BaseDamage)
    dice: list[DamageDice] = Field(default_factory=list)
    modifiers: list[DamageModifier] = Field(default_factory=list)


class DiceSpec(BaseModel):
    """A number of dice of a single size."""
    number: int
    faces: int


class DamagePartialTerm(BaseModel):
    """A flat amount and/or dice of one damage type and category."""
    modifier: int = 0
    dice: DiceSpec | None = None


class DamagePartial(DamagePartialTerm):
    """A labelled partial term, as grouped by the compiler."""
    label: str = ""
    category: DamageCategory | None = None
    critical: bool | None = None
    materials: list[str] = Field(default_factory=list)


# Damage type -> partials in insertion order (base, dice, modifiers)
TypeMap = dict[str, list[DamagePartial]]


class AssembledFormula(BaseModel):
    """A compiled formula with its associated breakdown."""
    model_config = ConfigDict(frozen=True)

    formula: str
    breakdown: list[str] = Field(default_factory=list)
