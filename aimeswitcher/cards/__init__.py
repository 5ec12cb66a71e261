"""Card directory and active card file handling."""

from aimeswitcher.cards.active_card import ActiveCardStore
from aimeswitcher.cards.directory import CardDirectory, redact_card_number

__all__ = ["ActiveCardStore", "CardDirectory", "redact_card_number"]
