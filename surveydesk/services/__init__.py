from surveydesk.services.errors import ServiceError, NotFoundError, ValidationError, ConflictError
from surveydesk.services.auth_service import AuthService, AuthError
from surveydesk.services.authorization import Capability, Principal, AdminPrincipal, MemberPrincipal
from surveydesk.services.user_service import UserService, canonicalize_username, normalize_email
from surveydesk.services.group_service import GroupService
from surveydesk.services.template_service import TemplateService
from surveydesk.services.survey_service import SurveyService, check_status_transition
from surveydesk.services.response_service import ResponseService, validate_answers
from surveydesk.services.assignment_service import AssignmentService

# Analytics
from surveydesk.services.aggregation_service import (
    AggregationService,
    aggregate_by_survey,
    average_response_time,
    compute_time_series,
    leaderboard,
    question_breakdown,
    summarize,
)

__all__ = [
    "ServiceError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthService",
    "AuthError",
    "Capability",
    "Principal",
    "AdminPrincipal",
    "MemberPrincipal",
    "UserService",
    "canonicalize_username",
    "normalize_email",
    "GroupService",
    "TemplateService",
    "SurveyService",
    "check_status_transition",
    "ResponseService",
    "validate_answers",
    "AssignmentService",
    "AggregationService",
    "aggregate_by_survey",
    "average_response_time",
    "compute_time_series",
    "leaderboard",
    "question_breakdown",
    "summarize",
]
