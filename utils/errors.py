"""
Error taxonomy shared by the account service and the matching core.

Each error carries the HTTP status the boundary layer should answer with;
the core itself never builds responses.
"""


class MatchingError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(MatchingError):
    status_code = 404


class DuplicateKey(MatchingError):
    status_code = 400

    def __init__(self, field: str):
        super().__init__(f"{field} already exists")
        self.field = field


class ValidationFailure(MatchingError):
    status_code = 400

    def __init__(self, errors: dict[str, str]):
        super().__init__("Validation failed")
        self.errors = errors


class Unauthorized(MatchingError):
    status_code = 401


class Forbidden(MatchingError):
    status_code = 403


class InvalidStateTransition(MatchingError):
    status_code = 400
