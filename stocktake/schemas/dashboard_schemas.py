from pydantic import BaseModel


class DashboardCounts(BaseModel):
    total_active_projects: int
    user_active_sessions: int
    total_parts_in_active_projects: int
    records_in_last_7_days: int
