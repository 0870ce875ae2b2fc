"""
Exceptions raised by the damage formula package.

The compiler itself never raises on malformed damage definitions; entries
that cannot contribute are dropped. Errors are reserved for collaborators
that are handed invalid input, such as the simple-formula parser.
"""


class DamageFormulaError(Exception):
    """Base exception for damage formula errors."""
    pass


class FormulaParseError(DamageFormulaError, ValueError):
    """Raised when a formula is not a simple additive dice expression."""

    def __init__(self, formula: str, token: str | None = None):
        self.formula = formula
        self.token = token
        if token is None:
            message = f"Invalid damage formula: {formula!r}"
        else:
            message = f"Invalid term {token!r} in damage formula {formula!r}"
        super().__init__(message)
