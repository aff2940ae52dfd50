from fastapi import HTTPException, status


class AuthRequiredException(HTTPException):
    def __init__(self, detail: str = "Access token required"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class InvalidTokenException(HTTPException):
    def __init__(self, detail: str = "Invalid or expired token"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotAuthenticatedException(HTTPException):
    def __init__(self, detail: str = "Access denied. User not authenticated"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class InsufficientPrivilegesException(HTTPException):
    def __init__(self, detail: str = "Access denied. Insufficient privileges"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class RateLimitExceededException(HTTPException):
    def __init__(self, detail: str = "Too many chat requests. Please try again later"):
        super().__init__(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=detail)


class InvalidIdError(ValueError):
    """Raised when an identifier does not have the expected format."""
