"""Snapshot content processing."""

from aimeswitcher.processing.content_hasher import ContentHasher

__all__ = ["ContentHasher"]
