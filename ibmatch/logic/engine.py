"""
Matching Engine

Main orchestrator combining the diploma validator and the match scorer.
This is the primary entry point for callers in the web layer.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .aggregator import ProfileLike, ProgramLike, aggregate_scores, resolve_mode
from .classifier import get_category_info, get_rating_label
from .confidence import get_confidence_level_info
from .constants import BonusStrategy, CoreGrade, MatchingMode
from .contracts import DiplomaValidationResult, MatchResult, WeightConfig, coerce
from .diploma import SelectionLike, validate_diploma as _validate_diploma
from .points import resolve_bonus_strategy
from .ranker import score_programs as _score_programs

logger = logging.getLogger(__name__)


class MatchingEngine:
    """
    Matching engine holding a student-independent configuration.

    Pipeline flow for a program:
    1. Academic fit - points signal + course requirements (with OR-groups)
    2. Location fit - program country vs preferred countries
    3. Field fit - program field vs preferred fields
    4. Aggregation - weighted overall score
    5. Classification - Safety / Match / Reach / Unlikely

    The engine keeps no per-call state, so one instance can be shared
    across threads.
    """

    def __init__(
        self,
        mode: Optional[Union[MatchingMode, str]] = None,
        bonus_strategy: Optional[Union[BonusStrategy, str]] = None,
        weights: Optional[Union[WeightConfig, Mapping[str, Any]]] = None,
    ):
        """
        Initialize the matching engine.

        Args:
            mode: Matching mode; the configured default when None
            bonus_strategy: TOK/EE bonus formula; the configured one when None
            weights: Optional custom weights overriding the mode's
        """
        self.mode = resolve_mode(mode)
        self.bonus_strategy = resolve_bonus_strategy(bonus_strategy)
        self.weights = coerce(WeightConfig, weights, "weights") if weights is not None else None
        self.version = "1.0.0"
        logger.debug(f"Matching engine ready: mode={self.mode.value}, bonus={self.bonus_strategy.value}")

    def validate_diploma(
        self,
        selections: Optional[Iterable[SelectionLike]],
        tok_grade: Optional[Union[CoreGrade, str]],
        ee_grade: Optional[Union[CoreGrade, str]],
        total_points: Optional[int] = None,
    ) -> DiplomaValidationResult:
        return _validate_diploma(selections, tok_grade, ee_grade, total_points, self.bonus_strategy)

    def score_program(self, student: ProfileLike, program: ProgramLike) -> MatchResult:
        return aggregate_scores(student, program, self.mode, self.weights, self.bonus_strategy)

    def score_programs(
        self,
        student: ProfileLike,
        programs: Iterable[ProgramLike]
    ) -> List[MatchResult]:
        return _score_programs(student, programs, self.mode, self.weights, self.bonus_strategy)

    def score_single_program(self, student: ProfileLike, program: ProgramLike) -> Dict[str, Any]:
        """
        Score a single program and flatten the result for display.

        Useful for the program detail page, which shows the sub-scores,
        the category and the rating label side by side.

        Returns:
            Dict with scoring details
        """
        result = self.score_program(student, program)
        academic = result.academic_match

        return {
            "program_id": result.program_id,
            "overall_score": result.overall_score,
            "category": result.category.value,
            "category_info": get_category_info(result.category),
            "rating_label": get_rating_label(result.overall_score),
            "sub_scores": result.sub_scores(),
            "weights": result.weights_used.model_dump(),
            "academic": {
                "meets_points_requirement": academic.meets_points_requirement,
                "points_shortfall": academic.points_shortfall,
                "missing_critical_count": academic.missing_critical_count,
                "missing_non_critical_count": academic.missing_non_critical_count,
                "requirements": [
                    {
                        "course_ids": m.course_ids,
                        "status": m.status.value,
                        "score": m.score,
                        "reason": m.reason,
                    }
                    for m in academic.requirement_matches
                ],
                "adjustments": academic.adjustments,
            },
            "location": result.location_match.model_dump(),
            "field": result.field_match.model_dump(),
            "confidence": {
                "score": result.confidence.score,
                "level": result.confidence.level.value,
                "info": get_confidence_level_info(result.confidence.level),
                "factors": [f.description for f in result.confidence.factors],
            },
        }


# Convenience functions for simple usage
def validate_diploma(
    selections: Optional[Iterable[SelectionLike]],
    tok_grade: Optional[Union[CoreGrade, str]],
    ee_grade: Optional[Union[CoreGrade, str]],
    total_points: Optional[int] = None,
    bonus_strategy: Optional[Union[BonusStrategy, str]] = None,
) -> DiplomaValidationResult:
    """
    Check whether the entered grades would earn the IB Diploma.

    Returns:
        DiplomaValidationResult; valid and not applicable when data is incomplete
    """
    return _validate_diploma(selections, tok_grade, ee_grade, total_points, bonus_strategy)


def score_program(
    student: ProfileLike,
    program: ProgramLike,
    mode: Optional[Union[MatchingMode, str]] = None,
    weights: Optional[Union[WeightConfig, Mapping[str, Any]]] = None,
    bonus_strategy: Optional[Union[BonusStrategy, str]] = None,
) -> MatchResult:
    """
    Score one program for one student.

    Returns:
        MatchResult
    """
    return aggregate_scores(student, program, mode, weights, bonus_strategy)


def score_programs(
    student: ProfileLike,
    programs: Iterable[ProgramLike],
    mode: Optional[Union[MatchingMode, str]] = None,
    weights: Optional[Union[WeightConfig, Mapping[str, Any]]] = None,
    bonus_strategy: Optional[Union[BonusStrategy, str]] = None,
) -> List[MatchResult]:
    """
    Score a batch of programs, best first.

    Returns:
        List of MatchResult sorted by overall score
    """
    return _score_programs(student, programs, mode, weights, bonus_strategy)
