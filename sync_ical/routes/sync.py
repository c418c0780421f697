"""Scheduler-facing routes that run iCal imports."""

from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from sync_ical.config import DRY_RUN
from sync_ical.db.readers.housing_units import get_housing_unit
from sync_ical.dependencies import get_db_engine
from sync_ical.errors import FeedFetchError, FeedNotConfiguredError, FeedParseError
from sync_ical.routes._auth import validate_bearer_secret
from sync_ical.schemas.sync import SyncReport, UnitSyncResult
from sync_ical.services.importer import import_for_unit
from sync_ical.services.sync import sync_all_units

logger = structlog.get_logger(__name__)
router = APIRouter()


def _unauthorized() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"error": "Unauthorized"},
    )


@router.post("/sync/{tenant_id}", response_model=SyncReport)
def sync_tenant(
    tenant_id: str,
    request: Request,
    dry_run: Optional[bool] = Query(None, description="Override DRY_RUN setting"),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    """
    Import the iCal feeds of every housing unit of a tenant.

    Authentication: "Authorization: Bearer <CRON_SECRET>".

    Args:
        tenant_id: Tenant to sync
        request: Incoming request (for the Authorization header)
        dry_run: Override DRY_RUN setting (optional)
        engine: SQLAlchemy engine

    Returns:
        SyncReport: Aggregated counts and per-unit errors
    """
    if not validate_bearer_secret(request.headers.get("Authorization")):
        logger.warning("sync_authentication_failed", tenant_id=tenant_id)
        return _unauthorized()

    use_dry_run = DRY_RUN if dry_run is None else dry_run

    try:
        report = sync_all_units(engine, tenant_id, dry_run=use_dry_run)
    except Exception as e:
        logger.exception("tenant_sync_request_failed", tenant_id=tenant_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")

    return report


@router.post("/sync/{tenant_id}/units/{unit_id}", response_model=UnitSyncResult)
def sync_unit(
    tenant_id: str,
    unit_id: int,
    request: Request,
    dry_run: Optional[bool] = Query(None, description="Override DRY_RUN setting"),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    """
    Import the iCal feed of a single housing unit.

    Args:
        tenant_id: Tenant owning the unit
        unit_id: Housing unit to sync
        request: Incoming request (for the Authorization header)
        dry_run: Override DRY_RUN setting (optional)
        engine: SQLAlchemy engine

    Returns:
        UnitSyncResult: created / updated / skipped counts
    """
    if not validate_bearer_secret(request.headers.get("Authorization")):
        logger.warning("sync_authentication_failed", tenant_id=tenant_id, unit_id=unit_id)
        return _unauthorized()

    use_dry_run = DRY_RUN if dry_run is None else dry_run

    try:
        with engine.connect() as conn:
            unit = get_housing_unit(conn, unit_id)

        if unit is None or unit["tenant_id"] != tenant_id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Housing unit {unit_id} not found",
            )

        result = import_for_unit(engine, unit_id, dry_run=use_dry_run)

    except HTTPException:
        raise
    except FeedNotConfiguredError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except (FeedFetchError, FeedParseError) as e:
        logger.warning("unit_sync_request_failed", unit_id=unit_id, error=str(e))
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except Exception as e:
        logger.exception("unit_sync_request_failed", unit_id=unit_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")

    return UnitSyncResult(
        message=(
            f"Sync completed: {result.created} created, "
            f"{result.updated} updated, {result.skipped} skipped"
        ),
        **result.as_dict(),
    )
