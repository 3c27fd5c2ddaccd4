"""
mflix/utils/validation_utils.py

Purpose: Input validation

- Required-argument checks raising InvalidArgumentError
- Comment identifier normalisation (ObjectId or plain string)
- Preference map coercion
"""

from bson import ObjectId
from typing import Any, Dict, Optional, Union

from mflix.core.exceptions import InvalidArgumentError


def require_text(value: Optional[str], message: str) -> str:
    """
    Ensures a required string argument is present and non-empty.

    Raises:
        InvalidArgumentError: If value is None or empty
    """
    if value is None or value == "":
        raise InvalidArgumentError(message)
    return value


def to_document_id(value: Optional[str]) -> Optional[Union[ObjectId, str]]:
    """
    Converts a caller-supplied identifier into the value stored under _id.

    24-character hex strings become ObjectIds so they match the documents
    imported into the catalog; anything else is stored as given.
    """
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def coerce_preferences(preferences: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """
    Converts every preference value to its string representation.

    Raises:
        InvalidArgumentError: If preferences is None or empty
    """
    if not preferences:
        raise InvalidArgumentError("User preferences can not be null or empty")
    return {str(key): str(value) for key, value in preferences.items()}
