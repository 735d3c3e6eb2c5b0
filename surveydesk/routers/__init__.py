"""API routers."""
from surveydesk.routers import analytics, auth, groups, health, responses, surveys, templates, users

__all__ = [
    "analytics",
    "auth",
    "groups",
    "health",
    "responses",
    "surveys",
    "templates",
    "users",
]
