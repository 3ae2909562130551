"""
IB Points

TOK/EE bonus strategies and total-points derivation.

The product has two bonus formulas that disagree on the same grade pair:

- POINTS_TABLE (coordinator form): A=3, B=2, C=1, D=0, E=0, summed and
  capped at 3. A missing grade contributes nothing.
- GRADE_INDEX (detailed grade entry): each grade is worth 5 - index in
  A..E, bonus = clamp(tok + ee - 6, 0, 3), and only when both are set.

For B/B the first gives 3 and the second gives 2. POINTS_TABLE is the
default because it is what gets saved as a student's total.
"""

import logging
from typing import Iterable, Optional, Union

from .. import settings
from .constants import (
    BonusStrategy,
    CoreGrade,
    CORE_GRADE_ORDER,
    CORE_GRADE_POINTS,
    DEFAULT_BONUS_STRATEGY,
    GRADE_INDEX_BASE,
    GRADE_INDEX_OFFSET,
    MAX_BONUS_POINTS,
    MAX_IB_POINTS,
)
from .contracts import StudentAcademicProfile, SubjectSelection
from .errors import InvalidInputError

logger = logging.getLogger(__name__)


def resolve_bonus_strategy(
    strategy: Optional[Union[BonusStrategy, str]] = None
) -> BonusStrategy:
    """
    Resolve an explicit strategy, or the configured one when None.

    An unknown explicit value is a caller error; an unknown configured
    value falls back to the default with a warning.
    """
    if strategy is not None:
        try:
            return BonusStrategy(strategy)
        except ValueError as exc:
            raise InvalidInputError(f"Unknown bonus strategy: {strategy!r}") from exc

    try:
        return BonusStrategy(settings.BONUS_STRATEGY)
    except ValueError:
        logger.warning(
            f"Unknown IBMATCH_BONUS_STRATEGY '{settings.BONUS_STRATEGY}', "
            f"using {DEFAULT_BONUS_STRATEGY.value}"
        )
        return DEFAULT_BONUS_STRATEGY


def calculate_bonus_points(
    tok_grade: Optional[Union[CoreGrade, str]],
    ee_grade: Optional[Union[CoreGrade, str]],
    strategy: Optional[Union[BonusStrategy, str]] = None,
) -> int:
    """Bonus points (0-3) for a TOK/EE grade pair."""
    resolved = resolve_bonus_strategy(strategy)
    tok = parse_core_grade(tok_grade)
    ee = parse_core_grade(ee_grade)

    if resolved == BonusStrategy.GRADE_INDEX:
        if tok is None or ee is None:
            return 0
        tok_value = GRADE_INDEX_BASE - CORE_GRADE_ORDER.index(tok)
        ee_value = GRADE_INDEX_BASE - CORE_GRADE_ORDER.index(ee)
        return min(MAX_BONUS_POINTS, max(0, tok_value + ee_value - GRADE_INDEX_OFFSET))

    tok_points = CORE_GRADE_POINTS[tok] if tok is not None else 0
    ee_points = CORE_GRADE_POINTS[ee] if ee is not None else 0
    return min(tok_points + ee_points, MAX_BONUS_POINTS)


def calculate_total_points(
    selections: Iterable[SubjectSelection],
    tok_grade: Optional[Union[CoreGrade, str]],
    ee_grade: Optional[Union[CoreGrade, str]],
    strategy: Optional[Union[BonusStrategy, str]] = None,
) -> int:
    """Sum of subject grades plus the TOK/EE bonus, capped at 45."""
    subject_points = sum(s.grade for s in selections)
    bonus = calculate_bonus_points(tok_grade, ee_grade, strategy)
    return min(subject_points + bonus, MAX_IB_POINTS)


def effective_total_points(
    profile: StudentAcademicProfile,
    strategy: Optional[Union[BonusStrategy, str]] = None,
) -> int:
    """The manual override when present, otherwise the derived total."""
    if profile.total_ib_points is not None:
        return profile.total_ib_points
    return calculate_total_points(profile.subjects, profile.tok_grade, profile.ee_grade, strategy)


def parse_core_grade(grade: Optional[Union[CoreGrade, str]]) -> Optional[CoreGrade]:
    if grade is None or grade == "":
        return None
    try:
        return CoreGrade(grade)
    except ValueError as exc:
        raise InvalidInputError(f"Invalid TOK/EE grade: {grade!r}") from exc
