"""
Diploma Validator

Checks a student's six subjects and core grades against the IB Diploma
award rules. Every violated rule is reported, in a fixed order, so the
grade-entry form can warn the student about all of them at once.

Incomplete data (fewer than six subjects, or TOK/EE unset) is not a
failure: the rules are skipped and the result is valid.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from .constants import (
    BonusStrategy,
    CoreGrade,
    CourseLevel,
    MAX_GRADE_THREE_OR_BELOW_COUNT,
    MAX_GRADE_TWO_COUNT,
    MAX_IB_POINTS,
    MAX_SUBJECTS,
    MIN_DIPLOMA_POINTS,
    MIN_HL_POINTS,
    MIN_SL_POINTS,
)
from .contracts import DiplomaValidationResult, SubjectSelection, coerce, ensure_unique_courses
from .errors import InvalidInputError
from .points import parse_core_grade, calculate_total_points

logger = logging.getLogger(__name__)

SelectionLike = Union[SubjectSelection, Mapping[str, Any]]


def validate_diploma(
    selections: Optional[Iterable[SelectionLike]],
    tok_grade: Optional[Union[CoreGrade, str]],
    ee_grade: Optional[Union[CoreGrade, str]],
    total_points: Optional[int] = None,
    bonus_strategy: Optional[Union[BonusStrategy, str]] = None,
) -> DiplomaValidationResult:
    """
    Apply the IB Diploma award rules.

    Args:
        selections: Up to six subjects (models or mappings); None when none entered
        tok_grade: Theory of Knowledge grade, or None if not entered yet
        ee_grade: Extended Essay grade, or None if not entered yet
        total_points: Total IB points; derived from the selections when None
        bonus_strategy: TOK/EE bonus formula used when deriving the total

    Returns:
        DiplomaValidationResult with one reason per violated rule

    Raises:
        InvalidInputError: malformed selections, more than six subjects,
            duplicate courses, or a total that is not an integer in 0-45
    """
    subjects = _coerce_selections(selections)
    tok = parse_core_grade(tok_grade)
    ee = parse_core_grade(ee_grade)

    if total_points is not None:
        if isinstance(total_points, bool) or not isinstance(total_points, int):
            raise InvalidInputError(f"Total IB points must be an integer, got {total_points!r}")
        if not 0 <= total_points <= MAX_IB_POINTS:
            raise InvalidInputError(f"Total IB points must be between 0 and {MAX_IB_POINTS}, got {total_points}")

    if len(subjects) < MAX_SUBJECTS or tok is None or ee is None:
        logger.debug(f"Diploma check skipped: {len(subjects)} subjects, TOK={tok}, EE={ee}")
        return DiplomaValidationResult(is_valid=True, failing_reasons=[], is_applicable=False)

    if total_points is None:
        total_points = calculate_total_points(subjects, tok, ee, bonus_strategy)

    reasons: List[str] = []

    if tok == CoreGrade.E:
        reasons.append("TOK grade E is an automatic failing condition")

    if ee == CoreGrade.E:
        reasons.append("EE grade E is an automatic failing condition")

    grade_one = [s.display_name for s in subjects if s.grade == 1]
    if grade_one:
        reasons.append(f"Grade 1 awarded in: {', '.join(grade_one)}")

    grade_two_count = sum(1 for s in subjects if s.grade == 2)
    if grade_two_count > MAX_GRADE_TWO_COUNT:
        reasons.append(f"More than {MAX_GRADE_TWO_COUNT} grade 2s awarded ({grade_two_count})")

    low_count = sum(1 for s in subjects if s.grade <= 3)
    if low_count > MAX_GRADE_THREE_OR_BELOW_COUNT:
        reasons.append(
            f"More than {MAX_GRADE_THREE_OR_BELOW_COUNT} grades of 3 or below awarded ({low_count})"
        )

    hl_points = sum(s.grade for s in subjects if s.level == CourseLevel.HL)
    if hl_points < MIN_HL_POINTS:
        reasons.append(f"Fewer than {MIN_HL_POINTS} points on HL subjects ({hl_points})")

    sl_points = sum(s.grade for s in subjects if s.level == CourseLevel.SL)
    if sl_points < MIN_SL_POINTS:
        reasons.append(f"Fewer than {MIN_SL_POINTS} points on SL subjects ({sl_points})")

    if total_points < MIN_DIPLOMA_POINTS:
        reasons.append(f"Fewer than {MIN_DIPLOMA_POINTS} total points ({total_points})")

    if reasons:
        logger.debug(f"Diploma not awarded: {len(reasons)} rule(s) failed")

    return DiplomaValidationResult(is_valid=not reasons, failing_reasons=reasons)


def _coerce_selections(selections: Optional[Iterable[SelectionLike]]) -> List[SubjectSelection]:
    if selections is None:
        return []
    if isinstance(selections, (str, bytes, Mapping)) or not isinstance(selections, Iterable):
        raise InvalidInputError(f"Subject selections must be a list, got {type(selections).__name__}")

    subjects: List[SubjectSelection] = []
    for item in selections:
        subjects.append(coerce(SubjectSelection, item, "subject selection"))

    if len(subjects) > MAX_SUBJECTS:
        raise InvalidInputError(f"At most {MAX_SUBJECTS} subjects allowed, got {len(subjects)}")
    try:
        ensure_unique_courses(subjects)
    except ValueError as exc:
        raise InvalidInputError(str(exc)) from exc
    return subjects
