# =============================================================================
# Feature Database Errors
# =============================================================================
# Single tagged error type raised by schema initialization and batch loading.
# The ErrorKind tag identifies the failing stage; the payload carries the SQL
# text, the underlying database error and, for inserts, the offending row.
# =============================================================================

from enum import Enum
from typing import Any, Optional, Sequence

__all__ = ["ErrorKind", "FeatureDBError"]


class ErrorKind(str, Enum):
    """Stage at which a feature database operation failed."""
    CONNECTION = "connection"
    CONFIGURATION = "configuration"
    SCHEMA = "schema"
    TABLE_CREATION = "table_creation"
    UNKNOWN_TABLE = "unknown_table"
    INSERT = "insert"
    TRANSACTION = "transaction"


class FeatureDBError(Exception):
    """
    Error raised by the feature database layer.

    Callers branch on ``kind`` rather than on exception subclasses.

    Attributes:
        kind: Failing stage (see ErrorKind)
        message: Human-readable summary
        sql: SQL text that failed, if any
        cause: Underlying database/driver exception, if any
        row: Offending row values (insert failures only)
        row_number: 1-based position of the offending row within its batch
        table: Table name involved, if any
        diagnostics: Secondary problems observed while unwinding (for example
            a failed rollback). They never replace the primary error.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        sql: Optional[str] = None,
        cause: Optional[BaseException] = None,
        row: Optional[Sequence[Any]] = None,
        row_number: Optional[int] = None,
        table: Optional[str] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.sql = sql
        self.cause = cause
        self.row = list(row) if row is not None else None
        self.row_number = row_number
        self.table = table
        self.diagnostics: list[str] = []

    def add_diagnostic(self, note: str) -> None:
        """Record a secondary problem without masking this error."""
        self.diagnostics.append(note)

    def __str__(self) -> str:
        parts = [self.message]
        if self.cause is not None:
            parts.append(f"SQL Error: {self.cause}")
        if self.sql is not None:
            parts.append(f"in query {self.sql}")
        if self.row is not None:
            parts.append(f"(row {self.row_number}: {self.row!r})")
        return " ".join(parts)

    # -------------------------------------------------------------------------
    # Constructors, one per kind
    # -------------------------------------------------------------------------

    @classmethod
    def connection(cls, cause: BaseException, sql: Optional[str] = None) -> "FeatureDBError":
        return cls(ErrorKind.CONNECTION, "Database connection check failed", sql=sql, cause=cause)

    @classmethod
    def configuration(cls, message: str) -> "FeatureDBError":
        return cls(ErrorKind.CONFIGURATION, message)

    @classmethod
    def schema(cls, schema: str, sql: str, cause: BaseException) -> "FeatureDBError":
        return cls(
            ErrorKind.SCHEMA,
            f"Failed to ensure schema '{schema}'",
            sql=sql,
            cause=cause,
        )

    @classmethod
    def table_creation(cls, table: str, sql: str, cause: BaseException) -> "FeatureDBError":
        return cls(
            ErrorKind.TABLE_CREATION,
            f"Failed to create table '{table}'",
            sql=sql,
            cause=cause,
            table=table,
        )

    @classmethod
    def unknown_table(cls, table: str) -> "FeatureDBError":
        return cls(ErrorKind.UNKNOWN_TABLE, f"unknown table: {table}", table=table)

    @classmethod
    def insert(
        cls,
        table: str,
        sql: str,
        cause: BaseException,
        row: Optional[Sequence[Any]] = None,
        row_number: Optional[int] = None,
    ) -> "FeatureDBError":
        return cls(
            ErrorKind.INSERT,
            f"Failed to insert into '{table}'",
            sql=sql,
            cause=cause,
            row=row,
            row_number=row_number,
            table=table,
        )

    @classmethod
    def transaction(cls, table: str, sql: str, cause: BaseException) -> "FeatureDBError":
        return cls(
            ErrorKind.TRANSACTION,
            f"Transaction failed for '{table}'",
            sql=sql,
            cause=cause,
            table=table,
        )
