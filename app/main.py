from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.routes import auto_schedule, campaign_schedules, campaigns, event_dates, store_activity_settings, stores
from app.core.config import settings
from app.core.logging import configure_logging
from app.db import models
from app.db.database import engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.ENV == "development":
        models.Base.metadata.create_all(bind=engine)
    yield


configure_logging()

app = FastAPI(title="StoreOps API", version="0.1.0", debug=settings.DEBUG, lifespan=lifespan)

app.include_router(stores.router, prefix="/api/v1")
app.include_router(campaigns.router, prefix="/api/v1")
app.include_router(auto_schedule.router, prefix="/api/v1")
app.include_router(campaign_schedules.router, prefix="/api/v1")
app.include_router(store_activity_settings.router, prefix="/api/v1")
app.include_router(event_dates.router, prefix="/api/v1")


@app.get("/health")
def health_check():
    return {"status": "ok"}
