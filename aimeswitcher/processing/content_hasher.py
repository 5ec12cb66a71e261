"""Canonical serialization and fingerprinting of snapshot content."""

import hashlib
import json

import structlog

from aimeswitcher.models.records import Content

log = structlog.stdlib.get_logger()


class ContentHasher:
    """Serializes Content to canonical JSON bytes and fingerprints them."""

    def serialize(self, content: Content) -> bytes:
        """
        Serialize content as compact UTF-8 JSON.

        Keys follow model field declaration order and are never sorted, so the
        same content always produces the same bytes.

        Args:
            content: Snapshot content

        Returns:
            JSON document bytes
        """
        document = content.model_dump(mode="json", by_alias=True)
        return json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode("utf-8")

    def fingerprint(self, data: bytes) -> str:
        """Lowercase hex SHA-256 digest of serialized content."""
        return hashlib.sha256(data).hexdigest()

    def serialize_and_fingerprint(self, content: Content) -> tuple[bytes, str]:
        data = self.serialize(content)
        digest = self.fingerprint(data)
        log.debug("content_fingerprinted", size_bytes=len(data), fingerprint=digest)
        return data, digest
