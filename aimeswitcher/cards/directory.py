"""Card directory mapping player names to AIME card numbers."""

from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

import structlog

from aimeswitcher.errors import LoadError

log = structlog.stdlib.get_logger()

REDACTION_VISIBLE_CHARS = 4


def redact_card_number(card_number: str) -> str:
    """
    Hide all but the last four characters of a card number.

    Numbers shorter than four characters are returned unchanged.

    Example:
        >>> redact_card_number("1234567890")
        '*7890'
    """
    if len(card_number) < REDACTION_VISIBLE_CHARS:
        return card_number
    return f"*{card_number[-REDACTION_VISIBLE_CHARS:]}"


class CardDirectory(Mapping[str, str]):
    """Read-only name to card number mapping.

    Instances never change after construction; reloading builds a new instance.
    Iteration follows the order of the source file.
    """

    def __init__(self, cards: Mapping[str, str] | None = None):
        self._cards: Mapping[str, str] = MappingProxyType(dict(cards or {}))

    @classmethod
    def parse(cls, text: str) -> "CardDirectory":
        """
        Parse directory text: one ``<card_number> <name>`` record per line.

        Blank lines are skipped. A later record for the same name replaces the
        earlier one.

        Args:
            text: File contents

        Returns:
            Parsed directory

        Raises:
            LoadError: If a non-blank line does not have exactly two tokens
        """
        cards: dict[str, str] = {}
        for line_number, line in enumerate(text.splitlines(), start=1):
            parts = line.split()
            if not parts:
                continue
            if len(parts) != 2:
                raise LoadError(
                    f"Invalid line {line_number} in card directory: {line.strip()!r}",
                    line_number=line_number,
                )
            card_number, name = parts
            cards[name] = card_number
        return cls(cards)

    @classmethod
    def from_file(cls, path: str | Path) -> "CardDirectory":
        """
        Load a directory file.

        Raises:
            LoadError: If the file cannot be read or is malformed
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise LoadError(f"Failed to read card directory {path}: {e}") from e

        directory = cls.parse(text)
        log.info("card_directory_loaded", path=str(path), cards=len(directory))
        return directory

    def name_for(self, card_number: str) -> str | None:
        """Name registered for a card number, or None if unknown."""
        for name, number in self._cards.items():
            if number == card_number:
                return name
        return None

    def __getitem__(self, name: str) -> str:
        return self._cards[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"CardDirectory({len(self._cards)} cards)"
