from app.db.database import Base

# Import models
from app.db.models.stores import Stores
from app.db.models.campaigns import Campaigns
from app.db.models.store_activity_settings import StoreActivitySettings
from app.db.models.event_dates import EventDates, EventType
from app.db.models.campaign_schedules import CampaignSchedules

__all__ = [
    "Base",
    # Models
    "Stores",
    "Campaigns",
    "StoreActivitySettings",
    "EventDates",
    "CampaignSchedules",
    # Enums
    "EventType",
]
