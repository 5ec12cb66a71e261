"""Periodic synchronization of the rating snapshot to the object store."""

import threading
from collections.abc import Callable
from contextlib import AbstractContextManager
from datetime import datetime

import structlog
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError

from aimeswitcher.errors import InitialSyncError, QueryError
from aimeswitcher.ingestion.snapshot_reader import Connection, SnapshotReader
from aimeswitcher.models.config import AppConfig
from aimeswitcher.processing.content_hasher import ContentHasher
from aimeswitcher.storage.blob_publisher import BlobPublisher
from aimeswitcher.sync.change_detector import ChangeDetector
from aimeswitcher.sync.models import CycleResult, CycleStatus

log = structlog.stdlib.get_logger()

ConnectionFactory = Callable[[], AbstractContextManager[Connection]]


class SyncLoop:
    """Reads, fingerprints and uploads the snapshot on a fixed interval.

    The loop owns the fingerprint of the last uploaded content. Only the thread
    running the loop touches it, and a new cycle starts only after the previous
    one has returned.
    """

    def __init__(
        self,
        connect: ConnectionFactory,
        publisher: BlobPublisher,
        reader: SnapshotReader | None = None,
        hasher: ContentHasher | None = None,
        change_detector: ChangeDetector | None = None,
        interval_seconds: float = 60.0,
    ):
        """
        Initialize the sync loop.

        Args:
            connect: Returns a context manager yielding an open database connection
            publisher: Uploads serialized content
            reader: Snapshot reader (default schemas if None)
            hasher: Content hasher
            change_detector: Fingerprint comparison
            interval_seconds: Delay between the end of a cycle and the start of the next
        """
        self._connect = connect
        self._publisher = publisher
        self._reader = reader or SnapshotReader()
        self._hasher = hasher or ContentHasher()
        self._change_detector = change_detector or ChangeDetector()
        self.interval_seconds = interval_seconds

        self.last_fingerprint: str = ""
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> CycleResult:
        """
        Run the mandatory initial sync.

        Returns:
            Result of the initial cycle

        Raises:
            InitialSyncError: If the initial cycle fails
        """
        log.info("initial_sync_started")
        result = self.run_cycle()
        if not result.success:
            raise InitialSyncError(f"Initial sync failed: {result.error}")
        return result

    def start_background(self) -> threading.Thread:
        """Run the loop on a dedicated daemon thread."""
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("sync loop is already running")

        self._stop_event.clear()
        self._thread = threading.Thread(target=self.run, name="snapshot-sync", daemon=True)
        self._thread.start()
        log.info("sync_loop_started", interval_seconds=self.interval_seconds)
        return self._thread

    def stop(self, timeout: float | None = None) -> None:
        """Signal the loop to stop and wait for the current cycle to return."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        log.info("sync_loop_stopped")

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def run(self, max_cycles: int | None = None) -> list[CycleResult]:
        """
        Run cycles until stopped, waiting the interval before each one.

        Failed cycles are logged and the loop continues.

        Args:
            max_cycles: Stop after this many cycles (unbounded if None)

        Returns:
            Results of the cycles that ran
        """
        results: list[CycleResult] = []

        while max_cycles is None or len(results) < max_cycles:
            if self._stop_event.wait(self.interval_seconds):
                break
            results.append(self.run_cycle())

        return results

    def run_cycle(self) -> CycleResult:
        """
        Perform one sync cycle.

        Reads the snapshot, fingerprints it, and uploads it when the fingerprint
        differs from the last uploaded one. The stored fingerprint is updated
        only after a successful upload.

        Returns:
            CycleResult describing the outcome; errors are captured, not raised
        """
        start_time = datetime.now()
        fingerprint: str | None = None

        try:
            try:
                with self._connect() as connection:
                    content = self._reader.read(connection)
            except SQLAlchemyError as e:
                raise QueryError(f"Database connection failed: {e}") from e

            data, fingerprint = self._hasher.serialize_and_fingerprint(content)

            if self._change_detector.has_changed(fingerprint, self.last_fingerprint):
                log.info("snapshot_uploading", fingerprint=fingerprint)
                self._publisher.publish(data)
                self.last_fingerprint = fingerprint
                status = CycleStatus.UPLOADED
            else:
                status = CycleStatus.UNCHANGED

            end_time = datetime.now()
            result = CycleResult(
                status=status,
                fingerprint=fingerprint,
                start_time=start_time,
                end_time=end_time,
                duration_seconds=(end_time - start_time).total_seconds(),
            )
            log.info(
                "sync_cycle_completed",
                status=status.value,
                fingerprint=fingerprint,
                duration_seconds=result.duration_seconds,
            )
            return result

        except Exception as e:
            end_time = datetime.now()
            duration = (end_time - start_time).total_seconds()

            log.error(
                "sync_cycle_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_seconds=duration,
            )

            return CycleResult(
                status=CycleStatus.FAILED,
                fingerprint=fingerprint,
                error=str(e),
                start_time=start_time,
                end_time=end_time,
                duration_seconds=duration,
            )


def create_sync_loop(config: AppConfig) -> SyncLoop:
    """
    Build a sync loop from application configuration.

    Args:
        config: Application configuration with database and object store sections

    Returns:
        Configured SyncLoop

    Raises:
        ValueError: If the sync half is not configured
    """
    if not config.sync_enabled or config.object_store is None:
        raise ValueError("database.url and object_store are required to create the sync loop")

    engine = create_engine(config.database.url, pool_pre_ping=True)
    publisher = BlobPublisher(
        config.object_store,
        place=config.game.place,
        game=config.game.name,
    )

    log.info("sync_enabled", place=config.game.place, game=config.game.name)

    return SyncLoop(
        connect=engine.connect,
        publisher=publisher,
        interval_seconds=config.sync.interval_seconds,
    )
