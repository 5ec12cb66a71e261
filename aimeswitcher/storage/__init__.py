"""Object store publishing."""

from aimeswitcher.storage.blob_publisher import BlobPublisher, snapshot_key

__all__ = ["BlobPublisher", "snapshot_key"]
