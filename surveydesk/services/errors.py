"""Service-layer error taxonomy.

Services raise these with a short snake_case code as the message; routers
map them onto HTTP status codes.
"""


class ServiceError(RuntimeError):
    """Base class for expected service failures."""

    status_code = 400

    @property
    def code(self) -> str:
        return str(self)


class NotFoundError(ServiceError):
    """A referenced entity does not exist."""

    status_code = 404


class ValidationError(ServiceError):
    """A required field or list is missing, or a value is not allowed."""

    status_code = 400


class ConflictError(ServiceError):
    """A unique field is already in use."""

    status_code = 409
