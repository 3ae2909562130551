"""
Data Contracts for the Matching Engine

Defines Pydantic models for the student profile and program requirements
(input) and the diploma validation and match results (output).
These contracts are the API boundary for the matching engine; every model
is frozen and validates its invariants at construction.
"""

from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .constants import (
    ConfidenceFactorType,
    ConfidenceLevel,
    CoreGrade,
    CourseLevel,
    MatchCategory,
    MatchingMode,
    MatchStatus,
    MAX_GRADE,
    MAX_IB_POINTS,
    MAX_SUBJECTS,
    MIN_GRADE,
)
from .errors import from_validation_error

ModelT = TypeVar("ModelT", bound=BaseModel)


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class SubjectSelection(BaseModel):
    """One IB course taken by a student."""
    model_config = ConfigDict(frozen=True)

    course_id: str = Field(min_length=1)
    course_name: str = ""
    level: CourseLevel
    grade: int = Field(ge=MIN_GRADE, le=MAX_GRADE)

    @property
    def display_name(self) -> str:
        return self.course_name or self.course_id


class StudentAcademicProfile(BaseModel):
    """
    Input contract for the match scorer.
    Represents a student's diploma data and preferences.
    """
    model_config = ConfigDict(frozen=True)

    # Identity (optional, for logging)
    student_id: Optional[str] = None

    # Diploma data
    subjects: List[SubjectSelection] = Field(default_factory=list, max_length=MAX_SUBJECTS)
    tok_grade: Optional[CoreGrade] = None
    ee_grade: Optional[CoreGrade] = None
    total_ib_points: Optional[int] = Field(default=None, ge=0, le=MAX_IB_POINTS)  # manual override

    # Preferences
    preferred_field_ids: List[str] = Field(default_factory=list)
    preferred_country_ids: List[str] = Field(default_factory=list)

    @field_validator("subjects", "preferred_field_ids", "preferred_country_ids", mode="before")
    @classmethod
    def unset_list_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="after")
    def check_unique_courses(self) -> "StudentAcademicProfile":
        ensure_unique_courses(self.subjects)
        return self

    def find_subject(self, course_id: str) -> Optional[SubjectSelection]:
        for subject in self.subjects:
            if subject.course_id == course_id:
                return subject
        return None


class CourseRequirement(BaseModel):
    """One course requirement imposed by a program."""
    model_config = ConfigDict(frozen=True)

    ib_course_id: str = Field(min_length=1)
    course_name: str = ""
    required_level: CourseLevel
    min_grade: int = Field(ge=MIN_GRADE, le=MAX_GRADE)
    is_critical: bool = False
    or_group_id: Optional[str] = None  # shared id = substitutable alternatives

    @property
    def display_name(self) -> str:
        return self.course_name or self.ib_course_id


class ProgramMatchInput(BaseModel):
    """The subset of a program's data needed for scoring."""
    model_config = ConfigDict(frozen=True)

    program_id: Optional[str] = None
    program_name: str = ""
    min_ib_points: Optional[int] = Field(default=None, ge=0, le=MAX_IB_POINTS)
    course_requirements: List[CourseRequirement] = Field(default_factory=list)
    field_of_study_id: str = ""
    country_id: str = ""

    @field_validator("course_requirements", mode="before")
    @classmethod
    def unset_requirements_are_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("field_of_study_id", "country_id", mode="before")
    @classmethod
    def unset_id_is_blank(cls, value: Any) -> Any:
        return "" if value is None else value


class WeightConfig(BaseModel):
    """Custom weighting of the three sub-scores."""
    model_config = ConfigDict(frozen=True)

    academic: float = Field(ge=0.0)
    location: float = Field(ge=0.0)
    field: float = Field(ge=0.0)

    @model_validator(mode="after")
    def check_not_all_zero(self) -> "WeightConfig":
        if self.academic + self.location + self.field <= 0:
            raise ValueError("at least one weight must be positive")
        return self

    def normalized(self) -> "WeightConfig":
        total = self.academic + self.location + self.field
        return WeightConfig(
            academic=self.academic / total,
            location=self.location / total,
            field=self.field / total,
        )


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class DiplomaValidationResult(BaseModel):
    """Outcome of applying the IB Diploma award rules."""
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    failing_reasons: List[str] = Field(default_factory=list)
    is_applicable: bool = True  # False when data is incomplete and rules were skipped


class RequirementMatch(BaseModel):
    """A single requirement, or an OR-group, evaluated against the student."""
    model_config = ConfigDict(frozen=True)

    course_ids: List[str]
    or_group_id: Optional[str] = None
    is_critical: bool = False
    score: float = Field(ge=0.0, le=1.0)
    status: MatchStatus
    reason: str = ""
    matched_course_id: Optional[str] = None
    matched_course_name: Optional[str] = None

    @property
    def is_met(self) -> bool:
        return self.status == MatchStatus.FULL_MATCH


class AcademicMatchScore(BaseModel):
    """Academic sub-score with the signals it was built from."""
    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0.0, le=1.0)
    points_score: float = Field(ge=0.0, le=1.0)
    requirements_score: float = Field(ge=0.0, le=1.0)
    meets_points_requirement: bool
    points_shortfall: int = 0
    requirement_matches: List[RequirementMatch] = Field(default_factory=list)
    missing_critical_count: int = 0
    missing_non_critical_count: int = 0
    cap_applied: Optional[float] = None
    adjustments: List[str] = Field(default_factory=list)


class PreferenceMatchScore(BaseModel):
    """Location or field sub-score."""
    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0.0, le=1.0)
    is_match: bool
    no_preferences: bool
    program_unset: bool = False  # program has no country/field on record


class ConfidenceFactor(BaseModel):
    """One data gap lowering confidence in a match score."""
    model_config = ConfigDict(frozen=True)

    type: ConfidenceFactorType
    impact: float = Field(ge=0.0, le=1.0)
    description: str


class ConfidenceResult(BaseModel):
    """Reliability of a match score, from the completeness of its inputs."""
    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0.0, le=1.0)
    level: ConfidenceLevel
    factors: List[ConfidenceFactor] = Field(default_factory=list)


class MatchResult(BaseModel):
    """
    Output contract for the match scorer.
    One (student, program) pair; recomputed on demand, never persisted here.
    """
    model_config = ConfigDict(frozen=True)

    program_id: Optional[str] = None
    overall_score: float = Field(ge=0.0, le=1.0)
    academic_match: AcademicMatchScore
    location_match: PreferenceMatchScore
    field_match: PreferenceMatchScore
    category: MatchCategory
    mode: MatchingMode
    weights_used: WeightConfig
    confidence: ConfidenceResult

    def sub_scores(self) -> Dict[str, float]:
        return {
            "academic": self.academic_match.score,
            "location": self.location_match.score,
            "field": self.field_match.score,
        }


# =============================================================================
# HELPERS
# =============================================================================

def ensure_unique_courses(subjects: List[SubjectSelection]) -> None:
    """Raise ValueError when a course appears more than once."""
    seen = set()
    for subject in subjects:
        if subject.course_id in seen:
            raise ValueError(f"course '{subject.course_id}' selected more than once")
        seen.add(subject.course_id)


def coerce(model_cls: Type[ModelT], value: Union[ModelT, Mapping[str, Any]], what: str) -> ModelT:
    """
    Accept a model instance or a plain mapping at the public boundary.
    Mappings that fail validation raise InvalidInputError.
    """
    if isinstance(value, model_cls):
        return value
    try:
        return model_cls.model_validate(value)
    except ValidationError as exc:
        raise from_validation_error(exc, what) from exc
