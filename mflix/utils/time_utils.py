"""
mflix/utils/time_utils.py

Purpose: Timestamp helpers
"""

from datetime import datetime


def utc_now() -> datetime:
    """
    Current UTC time truncated to milliseconds, the precision BSON dates keep.
    """
    now = datetime.utcnow()
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)
