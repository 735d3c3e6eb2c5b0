"""Tests for question and authoring payload validation."""
import pytest
from pydantic import ValidationError as PydanticValidationError

from surveydesk.models.base import QuestionType
from surveydesk.schemas.question import Question
from surveydesk.schemas.survey import SurveyCreate
from surveydesk.schemas.template import TemplateCreate


def test_choice_questions_require_options():
    with pytest.raises(PydanticValidationError):
        Question(type="multiple-choice", text="Pick one")

    with pytest.raises(PydanticValidationError):
        Question(type="dropdown", text="Pick one", options=["  ", ""])


def test_options_are_stripped_and_blank_ones_dropped():
    question = Question(type="dropdown", text="Pick one", options=[" A ", "", "B"])

    assert question.options == ["A", "B"]


def test_options_dropped_for_non_choice_types():
    question = Question(type="text-input", text="Say something", options=["ignored"])

    assert question.options is None


def test_range_bounds_only_kept_for_range_types():
    text = Question(type="text-input", text="Words", min=1, max=3)
    slider = Question(type="slider", text="How much", min=0, max=10)

    assert (text.min, text.max) == (None, None)
    assert (slider.min, slider.max) == (0, 10)


def test_min_must_be_lower_than_max():
    with pytest.raises(PydanticValidationError):
        Question(type="rating-scale", text="Rate", min=5, max=5)


def test_missing_id_is_generated():
    first = Question(type=QuestionType.TEXT_INPUT, text="A")
    second = Question(type=QuestionType.TEXT_INPUT, text="B")

    assert first.id and second.id
    assert first.id != second.id


def test_unknown_question_type_rejected():
    with pytest.raises(PydanticValidationError):
        Question(type="essay", text="Write")


def test_duplicate_question_ids_rejected_in_surveys_and_templates():
    questions = [
        {"id": "same", "type": "text-input", "text": "One"},
        {"id": "same", "type": "text-input", "text": "Two"},
    ]

    with pytest.raises(PydanticValidationError):
        SurveyCreate(title="Dup", questions=questions)
    with pytest.raises(PydanticValidationError):
        TemplateCreate(title="Dup", questions=questions)


def test_survey_create_defaults_to_draft():
    payload = SurveyCreate(title="Fresh")

    assert payload.status == "draft"
    assert payload.questions == []
