"""
Subject Matcher

Evaluates a program's course requirements against a student's subjects.

Handles:
- Full matches (level satisfied and grade met)
- Grade shortfalls (subject taken at the right level, grade below minimum)
- Level mismatches (SL taken where HL is required)
- OR-groups (requirements sharing an or_group_id; any member satisfies)
"""

from typing import Dict, List, Optional, Sequence

from .constants import (
    CourseLevel,
    MatchStatus,
    FULL_CREDIT,
    NO_CREDIT,
    ONE_GRADE_SHORT_CRITICAL,
    ONE_GRADE_SHORT_NON_CRITICAL,
    GRADE_SHORTFALL_SCALE,
    MIN_PARTIAL_CREDIT,
    SL_FOR_HL_STRONG,
    SL_FOR_HL_EQUIVALENT,
    SL_FOR_HL_PENALTY,
    SL_TO_HL_GRADE_DROP,
    MIN_GRADE,
)
from .contracts import CourseRequirement, RequirementMatch, StudentAcademicProfile


def match_requirement(
    requirement: CourseRequirement,
    student: StudentAcademicProfile
) -> RequirementMatch:
    """
    Score a single course requirement.

    Args:
        requirement: The program's requirement
        student: Student whose subjects are checked

    Returns:
        RequirementMatch with score 0-1 and match status
    """
    subject = student.find_subject(requirement.ib_course_id)

    if subject is None:
        return _result(requirement, NO_CREDIT, MatchStatus.NO_MATCH, "Subject not taken")

    level_ok = satisfies_level(subject.level, requirement.required_level)
    grade_ok = subject.grade >= requirement.min_grade

    if level_ok and grade_ok:
        return _result(requirement, FULL_CREDIT, MatchStatus.FULL_MATCH, "Requirement met")

    if not level_ok:
        score = _sl_for_hl_score(subject.grade, requirement.min_grade)
        return _result(
            requirement, score, MatchStatus.PARTIAL_MATCH,
            f"Level mismatch: SL instead of HL (grade {subject.grade})"
        )

    gap = requirement.min_grade - subject.grade
    score = _grade_shortfall_score(gap, requirement.min_grade, requirement.is_critical)
    return _result(
        requirement, score, MatchStatus.PARTIAL_MATCH,
        f"Grade {gap} point{'s' if gap > 1 else ''} below requirement"
    )


def match_or_group(
    options: Sequence[CourseRequirement],
    student: StudentAcademicProfile
) -> RequirementMatch:
    """
    Score an OR-group by its best member.
    The group is critical when any member is critical.
    """
    is_critical = any(option.is_critical for option in options)
    group_id = options[0].or_group_id
    course_ids = [option.ib_course_id for option in options]

    best: Optional[RequirementMatch] = None
    best_option: Optional[CourseRequirement] = None
    for option in options:
        match = match_requirement(option, student)
        if best is None or match.score > best.score:
            best, best_option = match, option
        if match.is_met:
            break

    if best is None or best.status == MatchStatus.NO_MATCH:
        return RequirementMatch(
            course_ids=course_ids,
            or_group_id=group_id,
            is_critical=is_critical,
            score=NO_CREDIT,
            status=MatchStatus.NO_MATCH,
            reason="None of the alternatives taken",
        )

    return RequirementMatch(
        course_ids=course_ids,
        or_group_id=group_id,
        is_critical=is_critical,
        score=best.score,
        status=best.status,
        reason=f"Best match via {best_option.display_name}: {best.reason}",
        matched_course_id=best_option.ib_course_id,
        matched_course_name=best_option.display_name,
    )


def evaluate_requirements(
    requirements: Sequence[CourseRequirement],
    student: StudentAcademicProfile
) -> List[RequirementMatch]:
    """
    Evaluate every requirement, collapsing OR-groups into one entry each.
    Entries keep the order in which requirements (or a group's first member) appear.
    """
    groups: Dict[str, List[CourseRequirement]] = {}
    ordered: List[object] = []

    for requirement in requirements:
        if requirement.or_group_id is None:
            ordered.append(requirement)
            continue
        if requirement.or_group_id not in groups:
            groups[requirement.or_group_id] = []
            ordered.append(requirement.or_group_id)
        groups[requirement.or_group_id].append(requirement)

    matches: List[RequirementMatch] = []
    for entry in ordered:
        if isinstance(entry, CourseRequirement):
            matches.append(match_requirement(entry, student))
        else:
            matches.append(match_or_group(groups[entry], student))
    return matches


def satisfies_level(student_level: CourseLevel, required_level: CourseLevel) -> bool:
    """HL covers an SL requirement; SL never covers HL."""
    return student_level == required_level or student_level == CourseLevel.HL


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _result(
    requirement: CourseRequirement,
    score: float,
    status: MatchStatus,
    reason: str
) -> RequirementMatch:
    return RequirementMatch(
        course_ids=[requirement.ib_course_id],
        or_group_id=requirement.or_group_id,
        is_critical=requirement.is_critical,
        score=score,
        status=status,
        reason=reason,
    )


def _grade_shortfall_score(gap: int, required_grade: int, is_critical: bool) -> float:
    """Partial credit for a grade below the minimum at an acceptable level."""
    if gap == 1:
        return ONE_GRADE_SHORT_CRITICAL if is_critical else ONE_GRADE_SHORT_NON_CRITICAL

    # gap >= 2 implies required_grade >= 3
    base = 1 - gap / (required_grade - 1)
    return max(MIN_PARTIAL_CREDIT, base * GRADE_SHORTFALL_SCALE)


def _sl_for_hl_score(student_grade: int, required_grade: int) -> float:
    """Partial credit for an SL subject where HL is required."""
    if student_grade == 7 and required_grade <= 6:
        return SL_FOR_HL_STRONG
    if student_grade == 6 and required_grade <= 5:
        return SL_FOR_HL_STRONG

    # SL counts as roughly two grades lower at HL
    hl_equivalent = max(MIN_GRADE, student_grade - SL_TO_HL_GRADE_DROP)
    if hl_equivalent >= required_grade:
        return SL_FOR_HL_EQUIVALENT

    gap = required_grade - hl_equivalent
    base = _grade_shortfall_score(gap, required_grade, False)
    return max(MIN_PARTIAL_CREDIT, base * SL_FOR_HL_PENALTY)
