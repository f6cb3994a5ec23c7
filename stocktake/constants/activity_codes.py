from enum import Enum


class ActivityCode(str, Enum):
    # ---------------- AUTH ----------------
    LOGIN = "LOGIN"

    # ---------------- USERS ----------------
    CREATE_USER = "CREATE_USER"

    # ---------------- PROJECTS ----------------
    CREATE_PROJECT = "CREATE_PROJECT"
    DEACTIVATE_PROJECT = "DEACTIVATE_PROJECT"

    # ---------------- STORAGE LOCATIONS ----------------
    CREATE_LOCATION = "CREATE_LOCATION"

    # ---------------- PARTS ----------------
    IMPORT_MASTER_DATA = "IMPORT_MASTER_DATA"
    UPDATE_PART_QUANTITIES = "UPDATE_PART_QUANTITIES"

    # ---------------- SESSIONS ----------------
    CREATE_SESSION = "CREATE_SESSION"
    COMPLETE_SESSION = "COMPLETE_SESSION"
    CANCEL_SESSION = "CANCEL_SESSION"
