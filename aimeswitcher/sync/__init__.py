"""Synchronization components for the periodic snapshot upload."""

from aimeswitcher.sync.change_detector import ChangeDetector
from aimeswitcher.sync.models import CycleResult, CycleStatus
from aimeswitcher.sync.sync_loop import SyncLoop, create_sync_loop

__all__ = [
    "ChangeDetector",
    "CycleResult",
    "CycleStatus",
    "SyncLoop",
    "create_sync_loop",
]
