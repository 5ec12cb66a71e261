"""Change detection between the current and last uploaded snapshot."""

import structlog

log = structlog.stdlib.get_logger()


class ChangeDetector:
    """Decides whether a snapshot needs uploading by comparing fingerprints."""

    def has_changed(self, current_fingerprint: str, last_fingerprint: str) -> bool:
        """
        Compare fingerprints.

        Args:
            current_fingerprint: Fingerprint of the content just read
            last_fingerprint: Fingerprint of the last uploaded content, empty if none

        Returns:
            True if the content must be uploaded, False if it is unchanged
        """
        if last_fingerprint and current_fingerprint == last_fingerprint:
            log.info("snapshot_unchanged", fingerprint=current_fingerprint)
            return False

        log.info(
            "snapshot_changed",
            fingerprint=current_fingerprint,
            last_fingerprint=last_fingerprint or None,
        )
        return True
