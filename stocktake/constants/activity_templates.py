from stocktake.constants.activity_codes import ActivityCode


ACTIVITY_TEMPLATES = {
    # ---------------- AUTH ----------------
    ActivityCode.LOGIN:
        "{actor_role} ({actor_email}) logged in",

    # ---------------- USERS ----------------
    ActivityCode.CREATE_USER:
        "{actor_role} ({actor_email}) created user {target_email} with role {target_role}",

    # ---------------- PROJECTS ----------------
    ActivityCode.CREATE_PROJECT:
        "{actor_role} ({actor_email}) created project {target_name}",

    ActivityCode.DEACTIVATE_PROJECT:
        "{actor_role} ({actor_email}) deactivated project {target_name}",

    # ---------------- STORAGE LOCATIONS ----------------
    ActivityCode.CREATE_LOCATION:
        "{actor_role} ({actor_email}) created storage location {target_name}",

    # ---------------- PARTS ----------------
    ActivityCode.IMPORT_MASTER_DATA:
        "{actor_role} ({actor_email}) imported {imported_count} parts into project {target_name} "
        "({error_count} rows rejected)",

    ActivityCode.UPDATE_PART_QUANTITIES:
        "{actor_role} ({actor_email}) updated part {target_name}: {changes}",

    # ---------------- SESSIONS ----------------
    ActivityCode.CREATE_SESSION:
        "{actor_role} ({actor_email}) started stock taking session {target_name}",

    ActivityCode.COMPLETE_SESSION:
        "{actor_role} ({actor_email}) completed stock taking session {target_name}",

    ActivityCode.CANCEL_SESSION:
        "{actor_role} ({actor_email}) cancelled stock taking session {target_name}",
}
