"""Translation of service errors into HTTP errors."""
from fastapi import HTTPException

from surveydesk.services.errors import ServiceError


def raise_http(exc: ServiceError) -> None:
    """Re-raise a service error as an HTTPException carrying its code."""
    raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc
