"""Exception hierarchy for the AIME switcher."""


class AimeSwitcherError(Exception):
    """Base exception for all AIME switcher errors."""

    pass


class ConfigError(AimeSwitcherError):
    """
    Configuration is missing or invalid.

    Raised when:
    - The configuration file is missing, empty or not valid YAML
    - A referenced environment variable is not set
    - Values fail validation
    """

    pass


class LoadError(AimeSwitcherError):
    """Card directory file could not be read or contains a malformed line."""

    def __init__(self, message: str, line_number: int | None = None):
        super().__init__(message)
        self.line_number = line_number


class SyncError(AimeSwitcherError):
    """Base class for errors raised while performing a snapshot sync cycle."""

    pass


class QueryError(SyncError):
    """A snapshot query against the database failed."""

    pass


class DecodeError(QueryError):
    """
    A database row could not be decoded into a record.

    Raised when the row has a different number of columns than the table
    schema, or a column value has an unexpected type.
    """

    def __init__(self, message: str, table: str | None = None, column: str | None = None):
        super().__init__(message)
        self.table = table
        self.column = column


class UploadError(SyncError):
    """Uploading the snapshot to the object store failed."""

    pass


class InitialSyncError(SyncError):
    """The mandatory first sync at startup did not succeed."""

    pass


class CommandError(AimeSwitcherError):
    """A chat command could not be completed; the message is shown to the user."""

    pass
