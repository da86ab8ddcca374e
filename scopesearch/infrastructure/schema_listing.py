"""Schema Listing — column names of a table from the database or declared metadata.

Invariants:
    - Unknown table -> UnknownTableError, never an empty list
    - Other SQLAlchemy failures -> DatabaseError
    - Column order follows the table definition

Design Decisions:
    - InspectorColumnLister reflects the live schema (sqlalchemy.inspect), so
      columns added outside the ORM show up; MetadataColumnLister answers from
      declared MetaData without a connection, for tests and offline use
    - "schema.table" identifiers supported by both
"""

import logging

from sqlalchemy import MetaData, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import NoSuchTableError, SQLAlchemyError

from scopesearch.core.errors import DatabaseError, UnknownTableError

logger = logging.getLogger(__name__)


def _split_table(table: str) -> tuple[str | None, str]:
    if "." in table:
        schema, name = table.split(".", 1)
        return schema, name
    return None, table


class InspectorColumnLister:
    """Lists columns by reflecting the live database schema."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def list_columns(self, table_name: str) -> list[str]:
        schema, name = _split_table(table_name)
        try:
            columns = inspect(self.engine).get_columns(name, schema=schema)
        except NoSuchTableError:
            logger.error(
                "Column listing failed: unknown table",
                extra={"table": table_name, "error_code": "UNKNOWN_TABLE"},
            )
            raise UnknownTableError(table_name) from None
        except SQLAlchemyError as e:
            logger.error(f"Column listing failed: {e}", extra={"table": table_name})
            raise DatabaseError("Schema reflection error", "inspect") from e
        return [c["name"] for c in columns]


class MetadataColumnLister:
    """Lists columns from declared table metadata, no database access."""

    def __init__(self, metadata: MetaData):
        self.metadata = metadata

    def list_columns(self, table_name: str) -> list[str]:
        table = self.metadata.tables.get(table_name)
        if table is None:
            raise UnknownTableError(table_name)
        return [c.name for c in table.columns]
