"""Snapshot reader assembling rating content from the profile database."""

from typing import Any, Protocol

import structlog
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from aimeswitcher.errors import QueryError
from aimeswitcher.ingestion.schema import PROFILE_DETAIL_SCHEMA, RATING_SCHEMA, RecordT, TableSchema
from aimeswitcher.models.records import CONTENT_VERSION, Content, ProfileDetail, RatingRecord

log = structlog.stdlib.get_logger()


class Connection(Protocol):
    """The part of a SQLAlchemy connection the reader uses."""

    def execute(self, statement: Any) -> Any: ...


class SnapshotReader:
    """Reads the rating and profile tables into a Content document."""

    def __init__(
        self,
        rating_schema: TableSchema[RatingRecord] = RATING_SCHEMA,
        profile_schema: TableSchema[ProfileDetail] = PROFILE_DETAIL_SCHEMA,
    ):
        self._rating_schema = rating_schema
        self._profile_schema = profile_schema

    def read(self, connection: Connection) -> Content:
        """
        Query both tables and build a Content document.

        Args:
            connection: Open database connection

        Returns:
            Content with records in primary-key order

        Raises:
            QueryError: If a query fails
            DecodeError: If a row does not match its table schema
        """
        rating_records = self.read_table(connection, self._rating_schema)
        profile_details = self.read_table(connection, self._profile_schema)

        log.info(
            "snapshot_read",
            rating_records=len(rating_records),
            profile_details=len(profile_details),
        )

        return Content(
            rating_records=rating_records,
            profile_details=profile_details,
            version=CONTENT_VERSION,
        )

    def read_table(self, connection: Connection, schema: TableSchema[RecordT]) -> list[RecordT]:
        """
        Read every row of one table.

        Args:
            connection: Open database connection
            schema: Schema of the table to read

        Returns:
            Decoded records in the order the database returned them
        """
        log.debug("querying_table", table=schema.table, columns=len(schema.columns))

        try:
            rows = list(connection.execute(text(schema.select_statement())))
        except SQLAlchemyError as e:
            log.error("table_query_failed", table=schema.table, error=str(e))
            raise QueryError(f"Failed to query {schema.table}: {e}") from e

        return [schema.decode_row(row) for row in rows]
