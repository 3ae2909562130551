"""
Ranker

Batch helpers for callers scoring many programs for one student:
ranking by overall score and grouping by category.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .aggregator import ProfileLike, ProgramLike, aggregate_scores
from .constants import BonusStrategy, MatchCategory, MatchingMode
from .contracts import MatchResult, StudentAcademicProfile, WeightConfig, coerce

logger = logging.getLogger(__name__)


def rank_results(results: Iterable[MatchResult]) -> List[MatchResult]:
    """
    Rank results by overall score (descending).
    Ties keep their input order.
    """
    return sorted(results, key=lambda r: r.overall_score, reverse=True)


def score_programs(
    student: ProfileLike,
    programs: Iterable[ProgramLike],
    mode: Optional[Union[MatchingMode, str]] = None,
    weights: Optional[Union[WeightConfig, Mapping[str, Any]]] = None,
    bonus_strategy: Optional[Union[BonusStrategy, str]] = None,
) -> List[MatchResult]:
    """
    Score every program for one student.

    Args:
        student: Student profile
        programs: Programs to score
        mode: Matching mode
        weights: Optional custom weights
        bonus_strategy: TOK/EE bonus formula for derived totals

    Returns:
        Results sorted by overall score, best first
    """
    profile = coerce(StudentAcademicProfile, student, "student profile")
    results = [
        aggregate_scores(profile, program, mode, weights, bonus_strategy)
        for program in programs
    ]
    logger.info(f"Scored {len(results)} programs for student {profile.student_id or 'anonymous'}")
    return rank_results(results)


def filter_by_category(
    results: Iterable[MatchResult],
    category: Union[MatchCategory, str]
) -> List[MatchResult]:
    """Keep only results in the given category."""
    wanted = MatchCategory(category)
    return [r for r in results if r.category == wanted]


def group_by_category(results: Iterable[MatchResult]) -> Dict[MatchCategory, List[MatchResult]]:
    """
    Group results by category, preserving order within each group.
    Every category is present, possibly with an empty list.
    """
    grouped: Dict[MatchCategory, List[MatchResult]] = {cat: [] for cat in MatchCategory}
    for result in results:
        grouped[result.category].append(result)
    return grouped


def get_category_counts(results: Iterable[MatchResult]) -> Dict[MatchCategory, int]:
    """
    Count results in each category.
    """
    return {cat: len(items) for cat, items in group_by_category(results).items()}
