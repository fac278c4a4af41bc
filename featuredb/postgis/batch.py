# =============================================================================
# Batch Insert Engine
# =============================================================================
# Inserts a batch of rows into one table inside a single transaction, using a
# server-side prepared statement executed once per row. All-or-nothing: the
# first failing row rolls back the whole batch.
# =============================================================================

import logging
import uuid
from typing import Any, Sequence

from sqlalchemy.engine import Connection, Engine, RootTransaction
from sqlalchemy.exc import SQLAlchemyError

from featuredb.errors import FeatureDBError
from featuredb.models import TableSpec
from featuredb.sql import insert_sql

__all__ = ["insert_batch"]

logger = logging.getLogger(__name__)

Row = Sequence[Any]


def _statement_name() -> str:
    # Prepared statements are per-session; pooled connections are reused.
    return f"featuredb_insert_{uuid.uuid4().hex}"


def _execute_sql(statement_name: str, arity: int) -> str:
    if arity == 0:
        return f"EXECUTE {statement_name}"
    return f"EXECUTE {statement_name} ({', '.join(['%s'] * arity)})"


def insert_batch(engine: Engine, spec: TableSpec, rows: Sequence[Row]) -> int:
    """
    Insert ``rows`` into the table described by ``spec`` atomically.

    The INSERT is prepared once (``PREPARE ... AS INSERT ...``) and executed
    for every row with that row's values as positional arguments, in column
    order. Either every row is committed or none is.

    Args:
        engine: SQLAlchemy engine of the target database
        spec: Target table
        rows: Row values, one sequence per row, ordered like ``spec.columns``

    Returns:
        Number of rows inserted

    Raises:
        FeatureDBError: INSERT error (with SQL, cause and offending row) when
            preparing or executing fails; TRANSACTION error when BEGIN or
            COMMIT fails. Rollback problems are attached as diagnostics.
    """
    if not rows:
        logger.debug(f"Empty batch for {spec.schema_name}.{spec.name}, nothing to insert")
        return 0

    sql = insert_sql(spec)
    arity = len(spec.columns)
    statement_name = _statement_name()
    execute_sql = _execute_sql(statement_name, arity)

    with engine.connect() as conn:
        try:
            trans = conn.begin()
        except SQLAlchemyError as e:
            raise FeatureDBError.transaction(spec.name, "BEGIN", e) from e

        prepared = False
        try:
            try:
                conn.exec_driver_sql(f"PREPARE {statement_name} AS {sql}")
            except SQLAlchemyError as e:
                raise FeatureDBError.insert(spec.name, sql, e) from e
            prepared = True

            for row_number, row in enumerate(rows, start=1):
                _execute_row(conn, execute_sql, spec, sql, arity, row, row_number)

            try:
                trans.commit()
            except SQLAlchemyError as e:
                raise FeatureDBError.transaction(spec.name, "COMMIT", e) from e

        except BaseException as err:
            # Any failure, including interrupts, discards the whole batch
            _rollback(trans, err)
            raise

        finally:
            if prepared:
                _deallocate(conn, statement_name)

    logger.debug(f"Inserted {len(rows)} row(s) into {spec.schema_name}.{spec.name}")
    return len(rows)


def _execute_row(
    conn: Connection,
    execute_sql: str,
    spec: TableSpec,
    sql: str,
    arity: int,
    row: Row,
    row_number: int,
) -> None:
    """
    Execute the prepared INSERT for one row.

    Driver-side adaptation failures (psycopg2 raises ValueError for strings
    containing NUL, TypeError for unadaptable values) are reported like
    database errors, with the offending row.
    """
    try:
        if len(row) != arity:
            raise ValueError(f"expected {arity} values, got {len(row)}")
        conn.exec_driver_sql(execute_sql, tuple(row))
    except (SQLAlchemyError, ValueError, TypeError) as e:
        raise FeatureDBError.insert(
            spec.name, sql, e, row=_row_values(row), row_number=row_number
        ) from e


def _row_values(row: Any) -> Any:
    try:
        return list(row)
    except TypeError:
        return [row]


def _rollback(trans: RootTransaction, err: BaseException) -> None:
    """Roll back after a failure; a rollback error only becomes a diagnostic."""
    if not trans.is_active:
        return
    try:
        trans.rollback()
    except SQLAlchemyError as e:
        logger.warning(f"rollback failed: {e}")
        if isinstance(err, FeatureDBError):
            err.add_diagnostic(f"rollback failed: {e}")


def _deallocate(conn: Connection, statement_name: str) -> None:
    # DEALLOCATE is not transactional and runs after the batch transaction ended
    try:
        conn.exec_driver_sql(f"DEALLOCATE {statement_name}")
    except SQLAlchemyError as e:
        logger.warning(f"Failed to deallocate prepared statement {statement_name}: {e}")
