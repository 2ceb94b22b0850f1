"""
Errors raised by the employee services and their HTTP status mapping
"""


class ErrorKind:
    VALIDATION = 'validation'
    NOT_FOUND = 'not_found'
    INTERNAL = 'internal'


STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}


class EmployeeServiceError(Exception):
    """Base error carrying the user-visible message and its kind"""
    kind = ErrorKind.INTERNAL

    def __init__(self, message, kind=None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def __repr__(self):
        return f'<{type(self).__name__} {self.kind}: {self.message}>'


class ValidationError(EmployeeServiceError):
    """Client-caused error: bad parameters, malformed body, bad dates"""
    kind = ErrorKind.VALIDATION


class NotFoundError(EmployeeServiceError):
    """Employee or department does not exist"""
    kind = ErrorKind.NOT_FOUND


class InternalError(EmployeeServiceError):
    """Statement or row-mapping failure in the data access layer"""
    kind = ErrorKind.INTERNAL


def status_code_for(error):
    """Map an error to its HTTP status code; anything unclassified is a 500"""
    return STATUS_CODES.get(getattr(error, 'kind', None), 500)
