"""
Classifier

Maps an overall score onto:
- the admission category (Safety / Match / Reach / Unlikely)
- the presentation rating label (Excellent ... Weak)

The two are separate scales and must not be mixed up.
"""

from typing import Dict

from .constants import (
    CATEGORY_INFO,
    CATEGORY_THRESHOLDS,
    DEFAULT_RATING_LABEL,
    MatchCategory,
    RATING_LABEL_THRESHOLDS,
)


def classify_score(score: float) -> MatchCategory:
    """
    Classify an overall score into a match category.
    Each threshold is the inclusive lower bound of its category.
    """
    for category, lower_bound in CATEGORY_THRESHOLDS:
        if score >= lower_bound:
            return category
    return MatchCategory.UNLIKELY


def get_category_info(category: MatchCategory) -> Dict[str, str]:
    """Display label and description for a category."""
    return dict(CATEGORY_INFO[MatchCategory(category)])


def get_rating_label(score: float) -> str:
    """Five-tier rating shown on program detail pages."""
    for label, lower_bound in RATING_LABEL_THRESHOLDS:
        if score >= lower_bound:
            return label
    return DEFAULT_RATING_LABEL
