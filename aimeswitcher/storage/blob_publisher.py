"""Uploads rating snapshots to an S3-compatible object store."""

from typing import Any

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from aimeswitcher.errors import UploadError
from aimeswitcher.models.config import ObjectStoreConfig

log = structlog.stdlib.get_logger()

KEY_PREFIX = "ratings-v0"
CONTENT_TYPE = "application/json"


def snapshot_key(place: str, game: str) -> str:
    """Object key for the latest snapshot of a game at a place."""
    return f"{KEY_PREFIX}/{place}/{game}.json"


class BlobPublisher:
    """Wrapper around a boto3 S3 client that overwrites the snapshot object."""

    def __init__(
        self,
        config: ObjectStoreConfig,
        place: str,
        game: str,
        client: Any | None = None,
    ):
        """
        Initialize the publisher.

        Args:
            config: Object store configuration
            place: Place label used in the object key
            game: Game label used in the object key
            client: Optional preconfigured S3 client (built from config if None)
        """
        self._bucket = config.bucket
        self._key = snapshot_key(place, game)

        if client is None:
            session = boto3.session.Session(
                aws_access_key_id=config.access_key_id,
                aws_secret_access_key=config.secret_access_key,
                region_name=config.region,
            )
            client = session.client("s3", endpoint_url=config.resolved_endpoint_url)
        self._client = client

        log.info(
            "blob_publisher_initialized",
            endpoint_url=config.resolved_endpoint_url,
            bucket=self._bucket,
            key=self._key,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def key(self) -> str:
        return self._key

    def publish(self, data: bytes) -> None:
        """
        Upload serialized content, replacing any existing object at the key.

        Args:
            data: Serialized snapshot bytes

        Raises:
            UploadError: On any transport or authorization failure
        """
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=self._key,
                Body=data,
                ContentType=CONTENT_TYPE,
            )
        except (BotoCoreError, ClientError) as e:
            log.error("snapshot_upload_failed", bucket=self._bucket, key=self._key, error=str(e))
            raise UploadError(f"Failed to upload s3://{self._bucket}/{self._key}: {e}") from e

        log.info("snapshot_uploaded", bucket=self._bucket, key=self._key, size_bytes=len(data))
