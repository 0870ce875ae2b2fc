"""
Pytest configuration and fixtures for damage-formula tests.
"""

import sys
from pathlib import Path
import pytest

# Add src directory to Python path to allow importing damage_formula
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from damage_formula.labels import DamageTypeLabels
from damage_formula.models import (
    BaseDamage,
    DamageCategory,
    DamageDefinition,
    DamageDice,
    DamageModifier,
)


@pytest.fixture
def labels() -> DamageTypeLabels:
    """The bundled damage type labels."""
    return DamageTypeLabels.load()


@pytest.fixture
def fire_splash() -> DamageDefinition:
    """2d6 fire base, a 1d4 fire splash die and a +3 fire bonus."""
    return DamageDefinition(
        base=BaseDamage(dice_number=2, die_size="d6", damage_type="fire"),
        dice=[
            DamageDice(label="Splash", dice_number=1, die_size="d4", damage_type="fire",
                       category=DamageCategory.SPLASH),
        ],
        modifiers=[
            DamageModifier(label="Bonus", value=3, damage_type="fire"),
        ],
    )


@pytest.fixture
def longsword() -> DamageDefinition:
    """A 1d8 slashing longsword with a striking rune, deadly d10 and a flaming rune."""
    return DamageDefinition(
        base=BaseDamage(dice_number=1, die_size="d8", modifier=4, damage_type="slashing"),
        dice=[
            DamageDice(label="Striking", dice_number=1),
            DamageDice(label="Deadly d10", dice_number=1, die_size="d10", critical=True),
            DamageDice(label="Flaming", dice_number=1, die_size="d6", damage_type="fire"),
        ],
        modifiers=[
            DamageModifier(label="Status Bonus", value=1),
        ],
    )
