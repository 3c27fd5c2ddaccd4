"""
mflix/utils/constants.py

Purpose: Centralized static values

- Document field names shared by repositories and the report pipeline
- Log/error messages reused across repositories

(Prevents hardcoding across the codebase)
"""

# ============================================================
# DOCUMENT FIELDS
# ============================================================

EMAIL_FIELD = "email"
USER_ID_FIELD = "user_id"
JWT_FIELD = "jwt"
PREFERENCES_FIELD = "preferences"
COMMENT_COUNT_FIELD = "commentCount"

# Fields never exposed by the commenters report
PRIVATE_USER_FIELDS = ("name", "password")

# ============================================================
# MESSAGES
# ============================================================

DUPLICATE_USER_MESSAGE = "Such user already exists"
EMPTY_COMMENT_ID_MESSAGE = "Empty comment ID"
EMPTY_COMMENT_TEXT_MESSAGE = "Empty text"
NULL_COMMENT_ID_MESSAGE = "comment id is null"
UNKNOWN_AUTHOR_MESSAGE = "Comment author does not have an account"
