# stocktake/routers/__init__.py

from .auth.auth_router import router as auth_router
from .auth.activity_router import router as activity_router
from .users.user_router import router as user_router

from .masters.project_router import router as project_router
from .masters.storage_location_router import router as storage_location_router
from .masters.part_router import router as part_router
from .master_data.master_data_router import router as master_data_router

from .stocktaking.session_router import router as session_router
from .stocktaking.record_router import router as record_router

from .reports.report_router import router as report_router
from .dashboard.dashboard_router import router as dashboard_router


__all__ = [
"auth_router",
"activity_router",
"user_router",

"project_router",
"storage_location_router",
"part_router",
"master_data_router",

"session_router",
"record_router",

"report_router",
"dashboard_router",
]
