from pydantic import BaseModel
from typing import Optional, Any

from mflix.core.exceptions import MflixError


class ErrorResponse(BaseModel):
    """
    JSON body returned to API clients when a repository raises a typed error.

    `code` is the MflixError code (INVALID_ARGUMENT, DUPLICATE_KEY, ...);
    `details` carries the offending values, e.g. the duplicate email.
    """
    error: str
    code: str
    details: Optional[Any] = None

    @classmethod
    def from_error(cls, exc: MflixError) -> "ErrorResponse":
        return cls(error=exc.message, code=exc.code, details=exc.details)
