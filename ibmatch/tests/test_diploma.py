"""
Tests for the IB Diploma award rules.
"""

import pytest

from ibmatch.logic import InvalidInputError, SubjectSelection, validate_diploma


def test_valid_diploma(make_selections):
    result = validate_diploma(make_selections(), "A", "B", 39)

    assert result.is_valid
    assert result.failing_reasons == []
    assert result.is_applicable


def test_fewer_than_six_subjects_is_not_yet_applicable(make_selections):
    selections = make_selections(hl=(1, 1, 1), sl=(1, 1, 1))[:5]

    result = validate_diploma(selections, "E", "E", 5)

    assert result.is_valid
    assert result.failing_reasons == []
    assert not result.is_applicable


@pytest.mark.parametrize("tok, ee", [(None, "A"), ("A", None), (None, None), ("", "B")])
def test_missing_core_grade_is_not_yet_applicable(make_selections, tok, ee):
    result = validate_diploma(make_selections(hl=(1, 1, 1)), tok, ee, 10)

    assert result.is_valid
    assert not result.is_applicable


def test_no_selections_is_not_yet_applicable():
    result = validate_diploma(None, "A", "A")

    assert result.is_valid
    assert result.failing_reasons == []
    assert not result.is_applicable


@pytest.mark.parametrize("selections", [42, "bio", {"course_id": "bio", "level": "HL", "grade": 5}])
def test_selections_that_are_not_a_list_raise(selections):
    with pytest.raises(InvalidInputError):
        validate_diploma(selections, "A", "A")


def test_grade_one_names_the_subject(make_selections):
    selections = make_selections(hl=(7, 6, 1), sl=(6, 6, 5))

    result = validate_diploma(selections, "B", "B", 34)

    assert not result.is_valid
    assert len(result.failing_reasons) == 1
    assert "Mathematics AA" in result.failing_reasons[0]


def test_low_hl_points_fails_only_the_hl_rule(make_selections):
    # HL 4+3+3 = 10, SL 4+4+4 = 12
    selections = make_selections(hl=(4, 3, 3), sl=(4, 4, 4))

    result = validate_diploma(selections, "A", "A", 25)

    assert not result.is_valid
    assert result.failing_reasons == ["Fewer than 12 points on HL subjects (10)"]


def test_tok_and_ee_grade_e_both_reported(make_selections):
    result = validate_diploma(make_selections(), "E", "E")

    assert not result.is_valid
    assert result.failing_reasons == [
        "TOK grade E is an automatic failing condition",
        "EE grade E is an automatic failing condition",
    ]


def test_three_grade_twos(make_selections):
    selections = make_selections(hl=(7, 7, 7), sl=(2, 2, 2))

    result = validate_diploma(selections, "A", "A", 30)

    assert result.failing_reasons == [
        "More than 2 grade 2s awarded (3)",
        "Fewer than 9 points on SL subjects (6)",
    ]


def test_four_grades_of_three_or_below(make_selections):
    selections = make_selections(hl=(7, 7, 3), sl=(3, 3, 3))

    result = validate_diploma(selections, "A", "A", 29)

    assert result.failing_reasons == ["More than 3 grades of 3 or below awarded (4)"]


def test_total_below_24(make_selections):
    result = validate_diploma(make_selections(), "A", "A", 23)

    assert result.failing_reasons == ["Fewer than 24 total points (23)"]


def test_all_rules_reported_in_order(make_selections):
    selections = make_selections(hl=(1, 2, 2), sl=(2, 3, 3))

    result = validate_diploma(selections, "E", "E")

    reasons = result.failing_reasons
    assert len(reasons) == 8
    assert reasons[0].startswith("TOK")
    assert reasons[1].startswith("EE")
    assert reasons[2] == "Grade 1 awarded in: Biology"
    assert reasons[3] == "More than 2 grade 2s awarded (3)"
    assert reasons[4] == "More than 3 grades of 3 or below awarded (6)"
    assert reasons[5] == "Fewer than 12 points on HL subjects (5)"
    assert reasons[6] == "Fewer than 9 points on SL subjects (8)"
    assert reasons[7] == "Fewer than 24 total points (13)"


def test_derived_total_depends_on_bonus_strategy(make_selections):
    # 21 subject points; B/B is worth 3 in the points table and 2 by grade index
    selections = make_selections(hl=(4, 4, 4), sl=(3, 3, 3))

    table = validate_diploma(selections, "B", "B", bonus_strategy="POINTS_TABLE")
    index = validate_diploma(selections, "B", "B", bonus_strategy="GRADE_INDEX")

    assert table.is_valid
    assert not index.is_valid
    assert index.failing_reasons == ["Fewer than 24 total points (23)"]


def test_repeated_calls_give_the_same_result(make_selections):
    selections = make_selections(hl=(7, 3, 2), sl=(2, 2, 4))

    assert validate_diploma(selections, "C", "D", 20) == validate_diploma(selections, "C", "D", 20)


def test_accepts_plain_mappings():
    selections = [
        {"course_id": f"c{i}", "course_name": f"Course {i}", "level": "HL" if i < 3 else "SL", "grade": 6}
        for i in range(6)
    ]

    result = validate_diploma(selections, "B", "C", 39)

    assert result.is_valid
    assert result.is_applicable


@pytest.mark.parametrize("bad", [
    {"course_id": "bio", "level": "HL", "grade": 8},
    {"course_id": "bio", "level": "HL", "grade": 0},
    {"course_id": "bio", "level": "XL", "grade": 5},
    {"course_id": "", "level": "SL", "grade": 5},
])
def test_malformed_selection_raises(bad):
    with pytest.raises(InvalidInputError):
        validate_diploma([bad], "A", "A", 30)


def test_more_than_six_subjects_raises(make_selections):
    extra = SubjectSelection(course_id="phys", level="SL", grade=5)

    with pytest.raises(InvalidInputError):
        validate_diploma(make_selections() + [extra], "A", "A", 40)


def test_duplicate_course_raises(make_selections):
    selections = make_selections()[:5] + [SubjectSelection(course_id="bio", level="SL", grade=5)]

    with pytest.raises(InvalidInputError):
        validate_diploma(selections, "A", "A", 35)


@pytest.mark.parametrize("total", [-1, 46])
def test_total_out_of_range_raises(make_selections, total):
    with pytest.raises(InvalidInputError):
        validate_diploma(make_selections(), "A", "A", total)


@pytest.mark.parametrize("total", ["30", 30.0, True])
def test_non_integer_total_raises(make_selections, total):
    with pytest.raises(InvalidInputError):
        validate_diploma(make_selections(), "A", "A", total)


def test_unknown_core_grade_raises(make_selections):
    with pytest.raises(InvalidInputError):
        validate_diploma(make_selections(), "F", "A", 30)
