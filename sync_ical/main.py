# sync_ical/main.py

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sync_ical.config import ALLOWED_ORIGINS
from sync_ical.logging_config import setup_logging
from sync_ical.middleware import RequestIDMiddleware
from sync_ical.routes.calendar import router as calendar_router
from sync_ical.routes.health import router as health_router
from sync_ical.routes.metrics import router as metrics_router
from sync_ical.routes.sync import router as sync_router

# Initialize structured logging
setup_logging()
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="Calendar Sync API",
    description="Imports external iCal feeds into reservations and publishes tenant calendars",
    version="1.0.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS if "*" not in ALLOWED_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIDMiddleware)

# Register routers
app.include_router(health_router, tags=["Health"])
app.include_router(metrics_router, tags=["Metrics"])
app.include_router(sync_router, tags=["Sync"])
app.include_router(calendar_router, tags=["Calendar"])

logger.info("app_initialized", routes=len(app.routes))
