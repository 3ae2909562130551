"""
Matching Engine Constants

Defines the grade tables, weights, thresholds, and enums used by the
diploma validator and the match scorer.
All tables are read-only; nothing here changes after import.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple


# =============================================================================
# ENUMS
# =============================================================================

class CourseLevel(str, Enum):
    """Depth tier of an IB subject."""
    HL = "HL"
    SL = "SL"


class CoreGrade(str, Enum):
    """Letter grade awarded for TOK and the Extended Essay."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"


class MatchingMode(str, Enum):
    """Predefined weightings for the overall score."""
    BALANCED = "BALANCED"
    ACADEMIC_FOCUSED = "ACADEMIC_FOCUSED"
    LOCATION_FOCUSED = "LOCATION_FOCUSED"


class MatchCategory(str, Enum):
    """Four-tier admission likelihood derived from the overall score."""
    SAFETY = "SAFETY"
    MATCH = "MATCH"
    REACH = "REACH"
    UNLIKELY = "UNLIKELY"


class MatchStatus(str, Enum):
    """Outcome of evaluating one requirement or OR-group."""
    FULL_MATCH = "FULL_MATCH"
    PARTIAL_MATCH = "PARTIAL_MATCH"
    NO_MATCH = "NO_MATCH"


class BonusStrategy(str, Enum):
    """
    TOK/EE bonus formulas.

    POINTS_TABLE is the coordinator form's letter table, GRADE_INDEX is the
    detailed grade-entry view's index formula. They disagree on some grade
    pairs (e.g. B/B gives 3 vs 2), so the caller must pick one.
    """
    POINTS_TABLE = "POINTS_TABLE"
    GRADE_INDEX = "GRADE_INDEX"


class ConfidenceLevel(str, Enum):
    """How far a match score can be trusted, given the data behind it."""
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class ConfidenceFactorType(str, Enum):
    MISSING_SUBJECT_GRADES = "MISSING_SUBJECT_GRADES"
    INCOMPLETE_PROFILE = "INCOMPLETE_PROFILE"
    ESTIMATION_USED = "ESTIMATION_USED"
    MISSING_POINTS_REQUIREMENT = "MISSING_POINTS_REQUIREMENT"
    FEW_DATA_POINTS = "FEW_DATA_POINTS"


# =============================================================================
# IB DIPLOMA
# =============================================================================

MIN_GRADE = 1
MAX_GRADE = 7
MAX_SUBJECTS = 6
MAX_IB_POINTS = 45
MAX_BONUS_POINTS = 3

# Award rules
MIN_DIPLOMA_POINTS = 24
MIN_HL_POINTS = 12
MIN_SL_POINTS = 9
MAX_GRADE_TWO_COUNT = 2
MAX_GRADE_THREE_OR_BELOW_COUNT = 3

# Letter grade -> bonus contribution (coordinator quick-edit form)
CORE_GRADE_POINTS: Mapping[CoreGrade, int] = MappingProxyType({
    CoreGrade.A: 3,
    CoreGrade.B: 2,
    CoreGrade.C: 1,
    CoreGrade.D: 0,
    CoreGrade.E: 0,
})

# Ordering used by the index formula (detailed grade-entry view)
CORE_GRADE_ORDER: Tuple[CoreGrade, ...] = (
    CoreGrade.A, CoreGrade.B, CoreGrade.C, CoreGrade.D, CoreGrade.E,
)
GRADE_INDEX_BASE = 5
GRADE_INDEX_OFFSET = 6

DEFAULT_BONUS_STRATEGY = BonusStrategy.POINTS_TABLE


# =============================================================================
# DIMENSION WEIGHTS
# =============================================================================

# (academic, location, field); each row sums to 1.0
MODE_WEIGHTS: Mapping[MatchingMode, Tuple[float, float, float]] = MappingProxyType({
    MatchingMode.BALANCED: (0.6, 0.3, 0.1),
    MatchingMode.ACADEMIC_FOCUSED: (0.8, 0.1, 0.1),
    MatchingMode.LOCATION_FOCUSED: (0.4, 0.5, 0.1),
})

DEFAULT_MODE = MatchingMode.BALANCED

# Overall score precision (float noise only)
SCORE_PRECISION = 9


# =============================================================================
# ACADEMIC SCORING
# =============================================================================

# Points signal
POINTS_SHORTFALL_CEILING = 0.9     # best possible points signal when short
POINTS_ZERO_CREDIT_SHORTFALL = 10  # shortfall at which the signal reaches 0

# Combination of the two academic signals
ACADEMIC_POINTS_WEIGHT = 0.5
ACADEMIC_REQUIREMENTS_WEIGHT = 0.5

# Caps for unmet critical requirements
CRITICAL_MISSING_CAP = 0.45
CRITICAL_PARTIAL_CAP = 0.8

# Requirement partial credit
FULL_CREDIT = 1.0
NO_CREDIT = 0.0
ONE_GRADE_SHORT_CRITICAL = 0.85
ONE_GRADE_SHORT_NON_CRITICAL = 0.78
GRADE_SHORTFALL_SCALE = 0.9
MIN_PARTIAL_CREDIT = 0.25
SL_FOR_HL_STRONG = 0.8
SL_FOR_HL_EQUIVALENT = 0.75
SL_FOR_HL_PENALTY = 0.7
SL_TO_HL_GRADE_DROP = 2


# =============================================================================
# PREFERENCE SCORING
# =============================================================================

PREFERENCE_MATCH_SCORE = 1.0
NO_PREFERENCE_SCORE = 1.0
PREFERENCE_MISS_SCORE = 0.0


# =============================================================================
# CLASSIFICATION THRESHOLDS
# =============================================================================

# Lower bound (inclusive) of each category, checked top-down
CATEGORY_THRESHOLDS: Tuple[Tuple[MatchCategory, float], ...] = (
    (MatchCategory.SAFETY, 0.75),
    (MatchCategory.MATCH, 0.6),
    (MatchCategory.REACH, 0.4),
)

CATEGORY_INFO: Mapping[MatchCategory, Mapping[str, str]] = MappingProxyType({
    MatchCategory.SAFETY: MappingProxyType({
        "label": "Safety",
        "description": "Strong chance of admission",
    }),
    MatchCategory.MATCH: MappingProxyType({
        "label": "Match",
        "description": "You meet the requirements. Good chance of admission.",
    }),
    MatchCategory.REACH: MappingProxyType({
        "label": "Reach",
        "description": "Aspirational choice. You may need to strengthen your application.",
    }),
    MatchCategory.UNLIKELY: MappingProxyType({
        "label": "Unlikely",
        "description": "Significant gaps exist. Consider this for future planning.",
    }),
})

# Presentation-only rating labels shown on program pages
RATING_LABEL_THRESHOLDS: Tuple[Tuple[str, float], ...] = (
    ("Excellent", 0.9),
    ("Strong", 0.75),
    ("Good", 0.6),
    ("Fair", 0.4),
)
DEFAULT_RATING_LABEL = "Weak"


# =============================================================================
# CONFIDENCE
# =============================================================================

# How much each data gap lowers confidence (missing subjects: per subject)
CONFIDENCE_FACTOR_IMPACTS: Mapping[ConfidenceFactorType, float] = MappingProxyType({
    ConfidenceFactorType.MISSING_SUBJECT_GRADES: 0.05,
    ConfidenceFactorType.INCOMPLETE_PROFILE: 0.1,
    ConfidenceFactorType.ESTIMATION_USED: 0.1,
    ConfidenceFactorType.MISSING_POINTS_REQUIREMENT: 0.05,
    ConfidenceFactorType.FEW_DATA_POINTS: 0.15,
})

# Lower bound (inclusive) of each level, checked top-down
CONFIDENCE_THRESHOLDS: Tuple[Tuple[ConfidenceLevel, float], ...] = (
    (ConfidenceLevel.HIGH, 0.85),
    (ConfidenceLevel.MEDIUM, 0.65),
)

CONFIDENCE_LEVEL_INFO: Mapping[ConfidenceLevel, Mapping[str, str]] = MappingProxyType({
    ConfidenceLevel.HIGH: MappingProxyType({
        "label": "High Confidence",
        "description": "Match prediction is reliable based on complete data",
    }),
    ConfidenceLevel.MEDIUM: MappingProxyType({
        "label": "Medium Confidence",
        "description": "Some uncertainty exists due to incomplete data",
    }),
    ConfidenceLevel.LOW: MappingProxyType({
        "label": "Low Confidence",
        "description": "Significant uncertainty, treat as a rough estimate",
    }),
})
