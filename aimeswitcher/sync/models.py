"""Data models for synchronization operations."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class CycleStatus(str, Enum):
    """Outcome of one sync cycle."""

    UPLOADED = "uploaded"
    UNCHANGED = "unchanged"
    FAILED = "failed"


class CycleResult(BaseModel):
    """Report of one synchronization cycle."""

    status: CycleStatus = Field(..., description="Cycle outcome")
    fingerprint: str | None = Field(
        default=None, description="Fingerprint of the content read this cycle, if computed"
    )
    error: str | None = Field(default=None, description="Error message when the cycle failed")
    start_time: datetime = Field(..., description="Cycle start timestamp")
    end_time: datetime = Field(..., description="Cycle end timestamp")
    duration_seconds: float = Field(default=0.0, ge=0.0, description="Cycle duration in seconds")

    @property
    def success(self) -> bool:
        """Check if the cycle completed without errors."""
        return self.status is not CycleStatus.FAILED

    @property
    def uploaded(self) -> bool:
        return self.status is CycleStatus.UPLOADED
