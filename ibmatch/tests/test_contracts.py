"""
Tests for the input and output contracts.
"""

import pytest
from pydantic import ValidationError

from ibmatch.logic import (
    InvalidInputError,
    ProgramMatchInput,
    StudentAcademicProfile,
    SubjectSelection,
    WeightConfig,
)
from ibmatch.logic.contracts import coerce


def test_subject_grade_must_be_in_range():
    with pytest.raises(ValidationError):
        SubjectSelection(course_id="math", level="HL", grade=8)


def test_contracts_are_frozen():
    subject = SubjectSelection(course_id="math", level="HL", grade=6)

    with pytest.raises(ValidationError):
        subject.grade = 7


def test_display_name_falls_back_to_id():
    assert SubjectSelection(course_id="math", level="SL", grade=5).display_name == "math"
    assert SubjectSelection(course_id="math", course_name="Maths", level="SL", grade=5).display_name == "Maths"


def test_profile_rejects_seven_subjects(make_selections):
    extra = SubjectSelection(course_id="phys", level="SL", grade=5)

    with pytest.raises(ValidationError):
        StudentAcademicProfile(subjects=make_selections() + [extra])


def test_find_subject(strong_student):
    assert strong_student.find_subject("chem").grade == 6
    assert strong_student.find_subject("phys") is None


def test_weights_cannot_all_be_zero():
    with pytest.raises(ValidationError):
        WeightConfig(academic=0, location=0, field=0)


def test_weights_normalized():
    weights = WeightConfig(academic=3, location=1, field=0).normalized()

    assert weights.academic == pytest.approx(0.75)
    assert weights.location == pytest.approx(0.25)
    assert weights.field == 0.0


def test_coerce_wraps_validation_errors():
    with pytest.raises(InvalidInputError) as excinfo:
        coerce(StudentAcademicProfile, {"total_ib_points": 50}, "student profile")

    assert isinstance(excinfo.value, ValueError)
    assert "total_ib_points" in str(excinfo.value)


def test_coerce_passes_instances_through(strong_student):
    assert coerce(StudentAcademicProfile, strong_student, "student profile") is strong_student


def test_unset_lists_are_empty():
    profile = StudentAcademicProfile(subjects=None, preferred_field_ids=None, preferred_country_ids=None)

    assert profile.subjects == []
    assert profile.preferred_field_ids == []
    assert profile.preferred_country_ids == []


def test_unset_program_fields_are_blank():
    program = ProgramMatchInput(course_requirements=None, field_of_study_id=None, country_id=None)

    assert program.course_requirements == []
    assert program.field_of_study_id == ""
    assert program.country_id == ""
