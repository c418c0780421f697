"""Public iCal feed of a tenant's missions and reservations."""

from typing import Optional
from urllib.parse import quote

import structlog
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import PlainTextResponse, Response
from sqlalchemy.engine import Engine

from sync_ical.dependencies import get_db_engine
from sync_ical.errors import FeedUnauthorizedError
from sync_ical.services.calendar_export import export_feed

router = APIRouter()
logger = structlog.get_logger(__name__)

CALENDAR_MEDIA_TYPE = "text/calendar; charset=utf-8"


@router.get("/calendar/{tenant_id}", response_class=Response)
def calendar_feed(
    tenant_id: str,
    token: Optional[str] = Query(None, description="Feed token issued for this tenant"),
    engine: Engine = Depends(get_db_engine),
) -> Response:
    """
    Serve the tenant's calendar as an .ics attachment.

    No session is involved: the token query parameter is the only credential.

    Returns:
        Response: 200 with the iCalendar document, or 401 "Unauthorized"
    """
    try:
        document = export_feed(engine, tenant_id, token)
    except FeedUnauthorizedError:
        logger.warning("calendar_feed_unauthorized", tenant_id=tenant_id)
        return PlainTextResponse("Unauthorized", status_code=status.HTTP_401_UNAUTHORIZED)
    except Exception as e:
        logger.exception("calendar_export_failed", tenant_id=tenant_id, error=str(e))
        return PlainTextResponse(
            "Internal server error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return Response(
        content=document,
        media_type=CALENDAR_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{quote(tenant_id, safe="")}.ics"',
            "Cache-Control": "no-cache, no-store, must-revalidate",
        },
    )
