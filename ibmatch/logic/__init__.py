"""
Matching Logic Module

Provides the deterministic diploma validator and match scorer for IB
students and university programs.
"""

from .contracts import (
    SubjectSelection,
    StudentAcademicProfile,
    CourseRequirement,
    ProgramMatchInput,
    WeightConfig,
    DiplomaValidationResult,
    RequirementMatch,
    AcademicMatchScore,
    PreferenceMatchScore,
    ConfidenceFactor,
    ConfidenceResult,
    MatchResult,
)
from .constants import (
    BonusStrategy,
    ConfidenceFactorType,
    ConfidenceLevel,
    CoreGrade,
    CourseLevel,
    MatchCategory,
    MatchingMode,
    MatchStatus,
)
from .errors import InvalidInputError
from .points import calculate_bonus_points, calculate_total_points, effective_total_points
from .classifier import classify_score, get_category_info, get_rating_label
from .confidence import calculate_confidence, get_confidence_level, get_confidence_level_info
from .ranker import filter_by_category, group_by_category, get_category_counts, rank_results
from .engine import MatchingEngine, validate_diploma, score_program, score_programs

__all__ = [
    # Main engine
    "MatchingEngine",
    "validate_diploma",
    "score_program",
    "score_programs",

    # Contracts
    "SubjectSelection",
    "StudentAcademicProfile",
    "CourseRequirement",
    "ProgramMatchInput",
    "WeightConfig",
    "DiplomaValidationResult",
    "RequirementMatch",
    "AcademicMatchScore",
    "PreferenceMatchScore",
    "ConfidenceFactor",
    "ConfidenceResult",
    "MatchResult",

    # Enums
    "BonusStrategy",
    "ConfidenceFactorType",
    "ConfidenceLevel",
    "CoreGrade",
    "CourseLevel",
    "MatchCategory",
    "MatchingMode",
    "MatchStatus",

    # Errors
    "InvalidInputError",

    # Helpers
    "calculate_bonus_points",
    "calculate_total_points",
    "effective_total_points",
    "classify_score",
    "get_category_info",
    "get_rating_label",
    "calculate_confidence",
    "get_confidence_level",
    "get_confidence_level_info",
    "filter_by_category",
    "group_by_category",
    "get_category_counts",
    "rank_results",
]
