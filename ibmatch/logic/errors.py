"""
Errors raised at the matching engine boundary.
"""

from pydantic import ValidationError


class InvalidInputError(ValueError):
    """
    Input that cannot describe a student or program at all.

    Kept separate from a failed diploma or a low score: those are results,
    this is a caller bug (grade outside 1-7, unknown level, duplicate course).
    """


def from_validation_error(exc: ValidationError, what: str) -> InvalidInputError:
    """Build an InvalidInputError summarising a pydantic ValidationError."""
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or what}: {err['msg']}"
        for err in exc.errors()
    )
    return InvalidInputError(f"Invalid {what}: {problems}")
