"""
Confidence Indicator

How reliable a match score is, given the data it was computed from.
Each gap in the student's or the program's data lowers confidence:

- Subjects not entered yet (per missing subject)
- No field or country preferences stated
- Total IB points derived from incomplete grades
- No published points requirement
- Neither a points requirement nor course requirements

Levels:
- HIGH (>= 0.85): prediction is reliable
- MEDIUM (>= 0.65): some uncertainty
- LOW: treat as an estimate
"""

from typing import Dict, List, Union

from .constants import (
    CONFIDENCE_FACTOR_IMPACTS,
    CONFIDENCE_LEVEL_INFO,
    CONFIDENCE_THRESHOLDS,
    ConfidenceFactorType,
    ConfidenceLevel,
    MAX_SUBJECTS,
    SCORE_PRECISION,
)
from .contracts import (
    ConfidenceFactor,
    ConfidenceResult,
    ProgramMatchInput,
    StudentAcademicProfile,
)


def calculate_confidence(
    student: StudentAcademicProfile,
    program: ProgramMatchInput
) -> ConfidenceResult:
    """
    Calculate the confidence of a (student, program) match.

    Returns:
        ConfidenceResult with score, level and the factors that lowered it
    """
    factors: List[ConfidenceFactor] = []

    missing_subjects = max(0, MAX_SUBJECTS - len(student.subjects))
    if missing_subjects:
        factors.append(_factor(
            ConfidenceFactorType.MISSING_SUBJECT_GRADES,
            f"{missing_subjects} subject grade(s) not entered",
            count=missing_subjects,
        ))

    if not student.preferred_field_ids and not student.preferred_country_ids:
        factors.append(_factor(
            ConfidenceFactorType.INCOMPLETE_PROFILE,
            "No field or country preferences stated",
        ))

    core_missing = student.tok_grade is None or student.ee_grade is None
    if student.total_ib_points is None and (missing_subjects or core_missing):
        factors.append(_factor(
            ConfidenceFactorType.ESTIMATION_USED,
            "Total IB points estimated from incomplete grades",
        ))

    if program.min_ib_points is None:
        factors.append(_factor(
            ConfidenceFactorType.MISSING_POINTS_REQUIREMENT,
            "Program has no published points requirement",
        ))
        if not program.course_requirements:
            factors.append(_factor(
                ConfidenceFactorType.FEW_DATA_POINTS,
                "Limited program requirements data available",
            ))

    score = 1.0 - sum(f.impact for f in factors)
    score = round(max(0.0, min(1.0, score)), SCORE_PRECISION)

    return ConfidenceResult(score=score, level=get_confidence_level(score), factors=factors)


def get_confidence_level(score: float) -> ConfidenceLevel:
    for level, lower_bound in CONFIDENCE_THRESHOLDS:
        if score >= lower_bound:
            return level
    return ConfidenceLevel.LOW


def get_confidence_level_info(level: Union[ConfidenceLevel, str]) -> Dict[str, str]:
    """Display label and description for a confidence level."""
    return dict(CONFIDENCE_LEVEL_INFO[ConfidenceLevel(level)])


def _factor(kind: ConfidenceFactorType, description: str, count: int = 1) -> ConfidenceFactor:
    return ConfidenceFactor(
        type=kind,
        impact=CONFIDENCE_FACTOR_IMPACTS[kind] * count,
        description=description,
    )
