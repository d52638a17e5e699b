"""Domain errors raised by the services and rendered by the app error handlers."""


class GymError(Exception):
    """Base error. Carries the HTTP status and a stable error code for clients."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message, code=None, details=None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.details = details or {}

    def to_dict(self):
        payload = {"msg": self.message, "code": self.code}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(GymError):
    status_code = 400
    code = "VALIDATION_ERROR"


class AuthenticationError(GymError):
    status_code = 401
    code = "INVALID_CREDENTIALS"


class AuthorizationError(GymError):
    status_code = 403
    code = "FORBIDDEN"


class NotFoundError(GymError):
    status_code = 404
    code = "NOT_FOUND"


class ConflictError(GymError):
    status_code = 409
    code = "CONFLICT"


class LastAdminError(ConflictError):
    code = "LAST_ADMIN"

    def __init__(self, message="Cannot delete the last remaining administrator", **kwargs):
        super().__init__(message, **kwargs)


class RoutinePublishError(GymError):
    """Previous routines were archived but the new one could not be stored."""

    code = "ROUTINE_PUBLISH_FAILED"
