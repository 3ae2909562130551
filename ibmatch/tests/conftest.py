"""
Shared fixtures for the matching engine tests.
"""

import pytest

from ibmatch import settings
from ibmatch.logic import (
    CourseRequirement,
    ProgramMatchInput,
    StudentAcademicProfile,
    SubjectSelection,
)

HL_COURSES = [("bio", "Biology"), ("chem", "Chemistry"), ("math", "Mathematics AA")]
SL_COURSES = [("eng", "English A"), ("spa", "Spanish B"), ("econ", "Economics")]


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Pin configuration so a local .env cannot change results."""
    monkeypatch.setattr(settings, "BONUS_STRATEGY", "POINTS_TABLE")
    monkeypatch.setattr(settings, "DEFAULT_MODE", "BALANCED")


@pytest.fixture
def make_selections():
    """Six subjects: three HL then three SL, with the given grades."""
    def _make(hl=(7, 6, 6), sl=(6, 6, 5)):
        selections = []
        for (course_id, name), grade in zip(HL_COURSES, hl):
            selections.append(SubjectSelection(course_id=course_id, course_name=name, level="HL", grade=grade))
        for (course_id, name), grade in zip(SL_COURSES, sl):
            selections.append(SubjectSelection(course_id=course_id, course_name=name, level="SL", grade=grade))
        return selections
    return _make


@pytest.fixture
def strong_student(make_selections):
    # 36 subject points + A/B bonus (3) = 39
    return StudentAcademicProfile(
        student_id="student-strong",
        subjects=make_selections(),
        tok_grade="A",
        ee_grade="B",
        total_ib_points=39,
        preferred_field_ids=["field-medicine"],
        preferred_country_ids=["country-uk", "country-nl"],
    )


@pytest.fixture
def make_program():
    def _make(**overrides):
        data = {
            "program_id": "prog-medicine",
            "program_name": "Medicine",
            "min_ib_points": 36,
            "course_requirements": [],
            "field_of_study_id": "field-medicine",
            "country_id": "country-uk",
        }
        data.update(overrides)
        return ProgramMatchInput(**data)
    return _make


@pytest.fixture
def requirement():
    def _make(course_id, level="HL", min_grade=5, critical=False, group=None, name=""):
        return CourseRequirement(
            ib_course_id=course_id,
            course_name=name,
            required_level=level,
            min_grade=min_grade,
            is_critical=critical,
            or_group_id=group,
        )
    return _make
