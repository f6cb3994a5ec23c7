# Users and audit
from stocktake.models.users.user_models import User
from stocktake.models.support.activity_models import UserActivity

# Masters
from stocktake.models.masters.project_models import Project
from stocktake.models.masters.storage_location_models import StorageLocation
from stocktake.models.masters.part_models import Part

# Stock taking
from stocktake.models.stocktaking.session_models import StockTakingSession
from stocktake.models.stocktaking.record_models import StockTakingRecord
