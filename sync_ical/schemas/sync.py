from typing import List, Optional

from pydantic import BaseModel, Field


class UnitSyncError(BaseModel):
    """
    A housing unit whose import failed during a sync run.
    """

    unit_id: int = Field(..., description="Housing unit ID")
    unit: str = Field(..., description="Housing unit name")
    error: str = Field(..., description="Reason the import failed")


class UnitSyncResult(BaseModel):
    """
    Response of a single housing unit import.
    """

    success: bool = True
    message: str
    created: int = 0
    updated: int = 0
    skipped: int = 0


class SyncReport(BaseModel):
    """
    Consolidated report of a tenant-wide sync run.

    Counts only include units that were imported successfully; failed units are
    listed in errors.
    """

    success: bool = True
    message: str
    tenant_id: Optional[str] = None
    units_synced: int = 0
    created: int = 0
    updated: int = 0
    skipped: int = 0
    errors: List[UnitSyncError] = Field(default_factory=list)
