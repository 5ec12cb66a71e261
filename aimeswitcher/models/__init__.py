"""Data models for the AIME switcher."""

from aimeswitcher.models.config import (
    AppConfig,
    CardsConfig,
    DatabaseConfig,
    DiscordConfig,
    GameConfig,
    LoggingConfig,
    NotificationConfig,
    ObjectStoreConfig,
    SyncConfig,
)
from aimeswitcher.models.records import CONTENT_VERSION, Content, ProfileDetail, RatingRecord

__all__ = [
    "AppConfig",
    "CardsConfig",
    "DatabaseConfig",
    "DiscordConfig",
    "GameConfig",
    "LoggingConfig",
    "NotificationConfig",
    "ObjectStoreConfig",
    "SyncConfig",
    "CONTENT_VERSION",
    "Content",
    "ProfileDetail",
    "RatingRecord",
]
