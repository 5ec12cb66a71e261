"""Table schema descriptors mapping database rows onto record models."""

import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from aimeswitcher.errors import DecodeError
from aimeswitcher.models.records import ProfileDetail, RatingRecord

RecordT = TypeVar("RecordT", bound=BaseModel)

# MySQL text protocol rendering of DATETIME columns
MYSQL_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def decode_int(value: Any) -> int:
    """Decode an integer column. NULL is rejected."""
    if value is None:
        raise ValueError("NULL is not allowed for an integer column")
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, (bytes, str)):
        return int(value)
    raise ValueError(f"expected an integer, got {type(value).__name__}")


def decode_str(value: Any) -> str:
    """Decode a string column. NULL is rejected, dates use MySQL text format."""
    if value is None:
        raise ValueError("NULL is not allowed for a string column")
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8")
    if isinstance(value, datetime):
        return value.strftime(MYSQL_DATETIME_FORMAT)
    if isinstance(value, date):
        return value.isoformat()
    raise ValueError(f"expected a string, got {type(value).__name__}")


def decode_json(value: Any) -> Any:
    """Decode an opaque JSON blob column. NULL becomes None."""
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode("utf-8")
    if isinstance(value, str):
        return json.loads(value)
    raise ValueError(f"expected JSON text, got {type(value).__name__}")


_DECODERS: dict[Any, Callable[[Any], Any]] = {
    int: decode_int,
    str: decode_str,
}


@dataclass(frozen=True)
class Column:
    """A selected column and the function that decodes its raw value."""

    name: str
    decode: Callable[[Any], Any]


@dataclass(frozen=True)
class TableSchema(Generic[RecordT]):
    """Ordered column list of a table and the record model its rows decode into."""

    table: str
    columns: tuple[Column, ...]
    model: type[RecordT]
    order_by: str = "id"

    @classmethod
    def from_model(cls, table: str, model: type[RecordT]) -> "TableSchema[RecordT]":
        """
        Build a schema whose columns follow the model's field declaration order.

        Column names are the field aliases. Fields annotated ``int`` or ``str``
        use the matching scalar decoder; anything else is an opaque JSON blob.
        """
        columns = tuple(
            Column(
                name=field.alias or name,
                decode=_DECODERS.get(field.annotation, decode_json),
            )
            for name, field in model.model_fields.items()
        )
        return cls(table=table, columns=columns, model=model)

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]

    def select_statement(self) -> str:
        """SQL selecting every column in schema order, ascending by primary key."""
        return (
            f"SELECT {', '.join(self.column_names)} FROM {self.table} "
            f"ORDER BY {self.order_by} ASC"
        )

    def decode_row(self, row: Sequence[Any]) -> RecordT:
        """
        Decode one row into a record.

        Args:
            row: Column values in schema order

        Returns:
            Decoded record

        Raises:
            DecodeError: If the column count differs or a value cannot be decoded
        """
        values = tuple(row)
        if len(values) != len(self.columns):
            raise DecodeError(
                f"{self.table}: expected {len(self.columns)} columns, got {len(values)}",
                table=self.table,
            )

        decoded: dict[str, Any] = {}
        for column, value in zip(self.columns, values):
            try:
                decoded[column.name] = column.decode(value)
            except (ValueError, UnicodeDecodeError) as e:
                raise DecodeError(
                    f"{self.table}.{column.name}: {e}", table=self.table, column=column.name
                ) from e

        try:
            return self.model.model_validate(decoded)
        except ValidationError as e:
            raise DecodeError(f"{self.table}: {e}", table=self.table) from e


RATING_SCHEMA: TableSchema[RatingRecord] = TableSchema.from_model(
    "mai2_profile_rating", RatingRecord
)
PROFILE_DETAIL_SCHEMA: TableSchema[ProfileDetail] = TableSchema.from_model(
    "mai2_profile_detail", ProfileDetail
)
