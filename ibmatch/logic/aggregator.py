"""
Score Aggregator

Combines the academic, location and field sub-scores into the overall
match score and category for one (student, program) pair.
"""

import logging
from typing import Any, Mapping, Optional, Union

from .. import settings
from .classifier import classify_score
from .confidence import calculate_confidence
from .constants import (
    BonusStrategy,
    DEFAULT_MODE,
    MatchingMode,
    MODE_WEIGHTS,
    SCORE_PRECISION,
)
from .contracts import (
    MatchResult,
    ProgramMatchInput,
    StudentAcademicProfile,
    WeightConfig,
    coerce,
)
from .dimension_scorers import (
    score_academic_fit,
    score_field_preference,
    score_location_preference,
)
from .errors import InvalidInputError
from .points import effective_total_points

logger = logging.getLogger(__name__)

ProfileLike = Union[StudentAcademicProfile, Mapping[str, Any]]
ProgramLike = Union[ProgramMatchInput, Mapping[str, Any]]


def resolve_mode(mode: Optional[Union[MatchingMode, str]] = None) -> MatchingMode:
    """
    Resolve an explicit mode, or the configured default when None.

    An unknown explicit mode is a caller error; an unknown configured
    mode falls back to BALANCED with a warning.
    """
    if mode is not None:
        try:
            return MatchingMode(mode)
        except ValueError as exc:
            raise InvalidInputError(f"Unknown matching mode: {mode!r}") from exc

    try:
        return MatchingMode(settings.DEFAULT_MODE)
    except ValueError:
        logger.warning(f"Unknown IBMATCH_DEFAULT_MODE '{settings.DEFAULT_MODE}', using {DEFAULT_MODE.value}")
        return DEFAULT_MODE


def get_weights(
    mode: MatchingMode,
    custom: Optional[Union[WeightConfig, Mapping[str, Any]]] = None
) -> WeightConfig:
    """Custom weights (normalized) when given, otherwise the mode's weights."""
    if custom is not None:
        return coerce(WeightConfig, custom, "weights").normalized()
    academic, location, field = MODE_WEIGHTS[mode]
    return WeightConfig(academic=academic, location=location, field=field)


def aggregate_scores(
    student: ProfileLike,
    program: ProgramLike,
    mode: Optional[Union[MatchingMode, str]] = None,
    weights: Optional[Union[WeightConfig, Mapping[str, Any]]] = None,
    bonus_strategy: Optional[Union[BonusStrategy, str]] = None,
) -> MatchResult:
    """
    Compute all sub-scores and aggregate them into the overall score.

    Args:
        student: Student's academic profile
        program: Program requirements to score against
        mode: Matching mode; the configured default when None
        weights: Optional custom weights, overriding the mode's
        bonus_strategy: TOK/EE bonus formula used when the profile has no
            manual total

    Returns:
        MatchResult with sub-scores, overall score and category

    Raises:
        InvalidInputError: malformed profile, program, mode or weights
    """
    profile = coerce(StudentAcademicProfile, student, "student profile")
    candidate = coerce(ProgramMatchInput, program, "program")
    resolved_mode = resolve_mode(mode)
    used = get_weights(resolved_mode, weights)

    student_points = effective_total_points(profile, bonus_strategy)

    academic = score_academic_fit(profile, candidate, student_points)
    location = score_location_preference(profile, candidate)
    field = score_field_preference(profile, candidate)

    overall = (
        academic.score * used.academic +
        location.score * used.location +
        field.score * used.field
    )
    overall = round(max(0.0, min(1.0, overall)), SCORE_PRECISION)
    category = classify_score(overall)
    confidence = calculate_confidence(profile, candidate)

    logger.debug(
        f"Scored program {candidate.program_id or '<unnamed>'} for student "
        f"{profile.student_id or 'anonymous'}: {overall:.3f} ({category.value})"
    )

    return MatchResult(
        program_id=candidate.program_id,
        overall_score=overall,
        academic_match=academic,
        location_match=location,
        field_match=field,
        category=category,
        mode=resolved_mode,
        weights_used=used,
        confidence=confidence,
    )
