class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    code: str = 'error'

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    code = 'domain_error'

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ForbiddenError(CustomBaseError):
    code = 'forbidden'

    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    code = 'not_found'

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    code = 'conflict'

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class AuthenticationError(CustomBaseError):
    code = 'authentication_failed'

    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class LoginError(CustomBaseError):
    code = 'login_failed'

    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


# === Malformed input ===


class ValidationError(DomainError):
    code = 'validation_error'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class InvalidStudentIdError(ValidationError):
    code = 'invalid_student_id'


class InvalidSeatFormatError(ValidationError):
    code = 'invalid_seat_format'


class PastDateError(ValidationError):
    code = 'past_date'


# === Conflicts ===


class DuplicateEmailError(ConflictError):
    code = 'duplicate_email'


class DuplicateStudentIdError(ConflictError):
    code = 'duplicate_student_id'


class SeatUnavailableError(ConflictError):
    code = 'seat_unavailable'


class InvalidStateError(ConflictError):
    code = 'invalid_state'


class NotYetEligibleError(ConflictError):
    code = 'not_yet_eligible'


# === Session ===


class NotAuthenticatedError(AuthenticationError):
    code = 'not_authenticated'

    def __init__(self, message: str = 'Not authenticated') -> None:
        super().__init__(message)
