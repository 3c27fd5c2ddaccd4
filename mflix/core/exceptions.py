from typing import Optional, Any

class MflixError(Exception):
    """
    Base exception for the MFlix data-access layer.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class IncorrectOperationError(MflixError):
    """
    Raised when a caller asks for an operation with malformed or missing input.
    """
    def __init__(self, message: str = "Incorrect operation", code: str = "INCORRECT_OPERATION", status_code: int = 400, details: Optional[Any] = None):
        super().__init__(message, code=code, status_code=status_code, details=details)

class InvalidArgumentError(IncorrectOperationError):
    """
    Raised when a required argument is empty or absent.
    """
    def __init__(self, message: str = "Invalid argument", details: Optional[Any] = None):
        super().__init__(message, code="INVALID_ARGUMENT", status_code=400, details=details)

class DuplicateKeyError(IncorrectOperationError):
    """
    Raised when a document with the same unique key already exists.
    """
    def __init__(self, message: str = "Duplicate key", details: Optional[Any] = None):
        super().__init__(message, code="DUPLICATE_KEY", status_code=409, details=details)
