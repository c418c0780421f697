import os

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEBUG = LOG_LEVEL == "DEBUG"

DRY_RUN = os.getenv("DRY_RUN", "false").lower() == "true"

DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise ValueError("DATABASE_URL must be set in the environment")

SCHEMA = "calsync"

ALLOWED_ORIGINS_RAW = os.getenv("ALLOWED_ORIGINS")
if not ALLOWED_ORIGINS_RAW:
    raise ValueError("ALLOWED_ORIGINS must be set in the environment")

ALLOWED_ORIGINS: list[str] = [
    origin.strip() for origin in ALLOWED_ORIGINS_RAW.split(",")
]

# Shared secret presented by the scheduler on /sync requests
CRON_SECRET = os.getenv("CRON_SECRET")

# Signing key for calendar feed tokens (falls back to the scheduler secret)
ICAL_SECRET = os.getenv("ICAL_SECRET") or CRON_SECRET

APP_BASE_URL = os.getenv("APP_BASE_URL", "http://localhost:8000").rstrip("/")

FEED_TIMEOUT_SECONDS = float(os.getenv("FEED_TIMEOUT_SECONDS", "15"))
FEED_MAX_RETRIES = int(os.getenv("FEED_MAX_RETRIES", "2"))

CALENDAR_NAME = os.getenv("CALENDAR_NAME", "ConciergeOS")
CALENDAR_TIMEZONE = os.getenv("CALENDAR_TIMEZONE", "Europe/Paris")
CALENDAR_PRODID = os.getenv("CALENDAR_PRODID", "-//ConciergeOS//Calendar//EN")
CALENDAR_UID_DOMAIN = os.getenv("CALENDAR_UID_DOMAIN", "conciergeos")
