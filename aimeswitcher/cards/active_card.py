"""File store for the currently active AIME card."""

import os
import tempfile
from pathlib import Path

import structlog

log = structlog.stdlib.get_logger()


class ActiveCardStore:
    """Reads and replaces the file whose whole content is the active card number."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> str:
        """
        Read the active card number.

        Raises:
            OSError: If the file cannot be read
        """
        return self._path.read_text(encoding="utf-8")

    def write(self, card_number: str) -> None:
        """
        Replace the active card number.

        The new content is written to a temporary file next to the target and
        renamed over it, so readers see either the old or the new number.

        Raises:
            OSError: If the file cannot be written
        """
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{self._path.name}.", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(card_number)
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, self._path)
        except OSError:
            Path(tmp_path).unlink(missing_ok=True)
            raise

        log.info("active_card_written", path=str(self._path))
