"""Database models."""
from surveydesk.models.links import group_memberships, survey_group_assignments
from surveydesk.models.user import User
from surveydesk.models.group import Group
from surveydesk.models.survey import Survey
from surveydesk.models.template import Template
from surveydesk.models.survey_response import SurveyResponse

__all__ = [
    "group_memberships",
    "survey_group_assignments",
    "User",
    "Group",
    "Survey",
    "Template",
    "SurveyResponse",
]
