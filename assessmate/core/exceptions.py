"""Error taxonomy shared by repositories, use cases and routers.

Every error carries the HTTP status it maps to; the FastAPI exception
handler in ``assessmate.main`` turns them into ``{"success": false,
"message": ...}`` bodies.
"""


class AssessMateError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AssessMateError):
    status_code = 400


class ConflictError(AssessMateError):
    status_code = 400


class NotFoundError(AssessMateError):
    status_code = 404


class AuthenticationError(AssessMateError):
    status_code = 401


class PermissionDeniedError(AssessMateError):
    status_code = 403


class StorageError(AssessMateError):
    """Underlying query failure. The message is logged, never sent to clients."""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
