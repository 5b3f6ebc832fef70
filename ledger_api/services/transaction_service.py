"""
Transaction repository — the only code that talks SQL.

Two statements, both against the `transactions` table:

  - list_transactions: SELECT of all ten columns, no ORDER BY. Row order is
    whatever the database returns; callers must not depend on it.
  - add_transaction: INSERT of all ten columns with RETURNING, so the
    response reflects exactly what was stored.

Connection handling:
  The session borrows a pooled connection when the statement executes and
  returns it on commit or rollback. Nothing holds a connection across a
  request.

Errors:
  Every driver or pool failure (sqlalchemy.exc.SQLAlchemyError, or an OSError
  raised by the driver while connecting) is converted into StorageError right
  here, with the original exception chained. An INSERT that comes back with no
  row raises NotFoundError. Nothing is retried.
"""

import logging

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ledger_api.exceptions import NotFoundError, StorageError
from ledger_api.models.transaction import Transaction
from ledger_api.schemas.transaction import TransactionRecord

STORAGE_ERRORS = (SQLAlchemyError, OSError)


async def list_transactions(db: AsyncSession) -> list[TransactionRecord]:
    """
    Return every stored transaction.

    An empty table yields an empty list, not an error. The read transaction
    is closed before returning, so the pooled connection goes back to the
    pool as soon as the rows are mapped.

    Raises:
        StorageError: If a connection can't be acquired or the query fails.
    """
    try:
        result = await db.execute(select(Transaction))
        listed = [TransactionRecord.model_validate(row) for row in result.scalars().all()]
        await db.commit()
    except STORAGE_ERRORS as exc:
        raise StorageError() from exc

    return listed


async def add_transaction(
    db: AsyncSession,
    record: TransactionRecord,
) -> TransactionRecord:
    """
    Insert a transaction and return the row as stored.

    Args:
        db: Database session.
        record: The transaction to store; its id is caller-assigned.

    Returns:
        The inserted row, mapped back to a TransactionRecord.

    Raises:
        StorageError: On connection failure or a constraint violation
                      (e.g., the id already exists). The session is
                      rolled back first.
        NotFoundError: If the INSERT succeeded but RETURNING gave no row.
    """
    try:
        result = await db.scalars(
            insert(Transaction).returning(Transaction),
            [record.model_dump()],
        )
        # Map before commit so nothing is read from expired instances
        stored = [TransactionRecord.model_validate(row) for row in result.all()]
        await db.commit()
    except STORAGE_ERRORS as exc:
        await _rollback_quietly(db, record.id)
        raise StorageError() from exc

    if not stored:
        raise NotFoundError(f"Transaction {record.id} was not returned by the insert")

    logging.debug(f"Stored transaction {record.id}")
    return stored[-1]


async def _rollback_quietly(db: AsyncSession, transaction_id: str) -> None:
    """Roll back after a failed insert; a dead connection must not hide the original error."""
    try:
        await db.rollback()
    except STORAGE_ERRORS as exc:
        logging.warning(f"Rollback after failed insert of {transaction_id} also failed: {exc!r}")
