# stocktake/constants/error_codes.py

from enum import Enum


class ErrorCode(str, Enum):
    # ---------------- GENERIC ----------------
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # ---------------- USERS ----------------
    USER_NOT_FOUND = "USER_NOT_FOUND"
    USER_INACTIVE = "USER_INACTIVE"
    USER_EMAIL_EXISTS = "USER_EMAIL_EXISTS"
    USER_USERNAME_EXISTS = "USER_USERNAME_EXISTS"

    # ---------------- PROJECTS ----------------
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    PROJECT_INACTIVE = "PROJECT_INACTIVE"

    # ---------------- STORAGE LOCATIONS ----------------
    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"
    LOCATION_CODE_EXISTS = "LOCATION_CODE_EXISTS"
    LOCATION_QR_EXISTS = "LOCATION_QR_EXISTS"

    # ---------------- PARTS ----------------
    PART_NOT_FOUND = "PART_NOT_FOUND"
    PART_VERSION_CONFLICT = "PART_VERSION_CONFLICT"

    # ---------------- SESSIONS ----------------
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    SESSION_NOT_ACTIVE = "SESSION_NOT_ACTIVE"
    SESSION_STATE_INVALID = "SESSION_STATE_INVALID"
