from fastapi import HTTPException, status


class InvalidInputError(ValueError):
    """Raised when classifier input is malformed (bad timestamp, missing login, ...)."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)


class ForbiddenError(HTTPException):
    """Raised when a caller presents the wrong shared secret."""

    def __init__(self, message: str = "Invalid cron secret"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=message,
        )


class ServiceUnavailableError(HTTPException):
    """Raised when a required piece of configuration is missing."""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=message,
        )
