"""
Dimension Scorers

Individual scoring functions for each evaluation dimension.
Each scorer produces a normalized score between 0.0 and 1.0.
A missing constraint (no points minimum, no requirements, no preferences,
no program country or field on record) counts as fully satisfied, never as
a zero.
"""

from typing import List, Optional, Sequence, Tuple

from .constants import (
    ACADEMIC_POINTS_WEIGHT,
    ACADEMIC_REQUIREMENTS_WEIGHT,
    CRITICAL_MISSING_CAP,
    CRITICAL_PARTIAL_CAP,
    FULL_CREDIT,
    MatchStatus,
    NO_PREFERENCE_SCORE,
    POINTS_SHORTFALL_CEILING,
    POINTS_ZERO_CREDIT_SHORTFALL,
    PREFERENCE_MATCH_SCORE,
    PREFERENCE_MISS_SCORE,
)
from .contracts import (
    AcademicMatchScore,
    PreferenceMatchScore,
    ProgramMatchInput,
    RequirementMatch,
    StudentAcademicProfile,
)
from .subject_matcher import evaluate_requirements


def score_academic_fit(
    student: StudentAcademicProfile,
    program: ProgramMatchInput,
    student_points: int
) -> AcademicMatchScore:
    """
    Score academic alignment between student and program requirements.

    Combines:
    - Points signal: total IB points vs the program minimum
    - Requirements signal: mean score over requirements and OR-groups

    Any unmet critical requirement caps the result below full credit.
    """
    adjustments: List[str] = []

    points_score, shortfall = points_signal(student_points, program.min_ib_points)
    meets_points = shortfall == 0

    matches = evaluate_requirements(program.course_requirements, student)
    requirements_score = requirements_signal(matches)

    missing_critical = sum(1 for m in matches if m.is_critical and m.status == MatchStatus.NO_MATCH)
    missing_non_critical = sum(1 for m in matches if not m.is_critical and m.status == MatchStatus.NO_MATCH)

    score = (
        points_score * ACADEMIC_POINTS_WEIGHT +
        requirements_score * ACADEMIC_REQUIREMENTS_WEIGHT
    )

    cap_applied = None
    cap = _critical_cap(matches)
    if cap is not None and score > cap:
        if missing_critical:
            adjustments.append(f"Missing {missing_critical} critical requirement(s) - capped at {cap:.2f}")
        else:
            adjustments.append(f"Critical requirement only partially met - capped at {cap:.2f}")
        score = cap
        cap_applied = cap

    if not meets_points:
        adjustments.append(f"{shortfall} IB point(s) below the program minimum")

    return AcademicMatchScore(
        score=max(0.0, min(1.0, score)),
        points_score=points_score,
        requirements_score=requirements_score,
        meets_points_requirement=meets_points,
        points_shortfall=shortfall,
        requirement_matches=matches,
        missing_critical_count=missing_critical,
        missing_non_critical_count=missing_non_critical,
        cap_applied=cap_applied,
        adjustments=adjustments,
    )


def score_location_preference(
    student: StudentAcademicProfile,
    program: ProgramMatchInput
) -> PreferenceMatchScore:
    """Score the program's country against the student's preferred countries."""
    return _preference_score(student.preferred_country_ids, program.country_id)


def score_field_preference(
    student: StudentAcademicProfile,
    program: ProgramMatchInput
) -> PreferenceMatchScore:
    """Score the program's field of study against the student's preferred fields."""
    return _preference_score(student.preferred_field_ids, program.field_of_study_id)


# =============================================================================
# SIGNALS
# =============================================================================

def points_signal(student_points: int, min_points: Optional[int]) -> Tuple[float, int]:
    """
    Points credit and shortfall.

    Meeting the minimum (or having none) is full credit. Below it the
    credit starts under POINTS_SHORTFALL_CEILING and falls linearly to 0
    at POINTS_ZERO_CREDIT_SHORTFALL points short.
    """
    if min_points is None or student_points >= min_points:
        return FULL_CREDIT, 0

    shortfall = min_points - student_points
    decay = max(0.0, 1 - shortfall / POINTS_ZERO_CREDIT_SHORTFALL)
    return POINTS_SHORTFALL_CEILING * decay, shortfall


def requirements_signal(matches: Sequence[RequirementMatch]) -> float:
    if not matches:
        return FULL_CREDIT
    return sum(m.score for m in matches) / len(matches)


def _critical_cap(matches: Sequence[RequirementMatch]) -> Optional[float]:
    critical_unmet = [m for m in matches if m.is_critical and not m.is_met]
    if not critical_unmet:
        return None
    if any(m.status == MatchStatus.NO_MATCH for m in critical_unmet):
        return CRITICAL_MISSING_CAP
    return CRITICAL_PARTIAL_CAP


def _preference_score(preferences: Sequence[str], value: str) -> PreferenceMatchScore:
    if not preferences:
        return PreferenceMatchScore(score=NO_PREFERENCE_SCORE, is_match=False, no_preferences=True)
    if not value:
        return PreferenceMatchScore(
            score=NO_PREFERENCE_SCORE, is_match=False, no_preferences=False, program_unset=True
        )
    if value in preferences:
        return PreferenceMatchScore(score=PREFERENCE_MATCH_SCORE, is_match=True, no_preferences=False)
    return PreferenceMatchScore(score=PREFERENCE_MISS_SCORE, is_match=False, no_preferences=False)
