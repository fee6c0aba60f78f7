"""
Domain exceptions and their HTTP status mapping
"""


class PromptMasterError(Exception):
    """Base class for errors surfaced to API clients"""

    status_code = 500
    error = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# Not found

class NotFoundError(PromptMasterError):
    status_code = 404
    error = "not_found"


class ModuleNotFound(NotFoundError):
    def __init__(self, module_id: str):
        super().__init__(f"Module '{module_id}' not found")
        self.module_id = module_id


class ExerciseNotFound(NotFoundError):
    def __init__(self, module_id: str, exercise_id: str):
        super().__init__(f"Exercise '{exercise_id}' not found in module '{module_id}'")
        self.module_id = module_id
        self.exercise_id = exercise_id


# Auth

class AuthError(PromptMasterError):
    status_code = 401
    error = "auth_error"


class InvalidCredentials(AuthError):
    error = "invalid_credentials"

    def __init__(self):
        super().__init__("Invalid email or password")


class Forbidden(AuthError):
    status_code = 403
    error = "forbidden"

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class ConflictError(PromptMasterError):
    status_code = 400
    error = "conflict"


class DuplicateEmail(ConflictError):
    error = "duplicate_email"

    def __init__(self):
        super().__init__("User with this email already exists")


class DuplicateUsername(ConflictError):
    error = "duplicate_username"

    def __init__(self):
        super().__init__("Username is already taken")


class InvalidOrExpiredToken(PromptMasterError):
    status_code = 400
    error = "invalid_or_expired_token"

    def __init__(self):
        super().__init__("Invalid or expired reset token")


# Upstream LLM failures. Absorbed by the evaluator, never returned to clients.

class UpstreamError(PromptMasterError):
    status_code = 502
    error = "upstream_error"


class UpstreamUnavailable(UpstreamError):
    """Network failure, timeout or missing credentials"""


class MalformedUpstreamResponse(UpstreamError):
    """Upstream answered but without a usable score/suggestions object"""
