"""
Custom exception classes
"""
from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """Exception raised when a requested record does not exist"""
    def __init__(self, entity: str, entity_id: int):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{entity} not found",
        )
        self.entity = entity
        self.entity_id = entity_id


class AuthenticationError(HTTPException):
    """Exception raised when the caller cannot be identified"""
    def __init__(self, detail: str = "Authentication required"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class PermissionDeniedError(HTTPException):
    """Exception raised when the caller's role does not allow the operation"""
    def __init__(self, detail: str, status_code: int = status.HTTP_403_FORBIDDEN):
        super().__init__(status_code=status_code, detail=detail)


class ConflictError(HTTPException):
    """Exception raised when a write would duplicate an existing record"""
    def __init__(self, detail: str, status_code: int = status.HTTP_409_CONFLICT):
        super().__init__(status_code=status_code, detail=detail)


class ValidationError(HTTPException):
    """Exception raised for validation errors"""
    def __init__(self, detail: str, status_code: int = status.HTTP_422_UNPROCESSABLE_ENTITY):
        super().__init__(status_code=status_code, detail=detail)
