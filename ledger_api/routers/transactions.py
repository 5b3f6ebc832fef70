"""
Transactions router — list and create ledger entries.

  GET  /transactions — List every stored transaction
  POST /transactions — Store a new transaction

Request bodies that fail to parse (bad JSON, missing required fields, wrong
types) are rejected by FastAPI with 422 before the handler runs. Repository
errors propagate to the handlers in ledger_api.exceptions.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ledger_api.database import get_db
from ledger_api.schemas.transaction import TransactionRecord
from ledger_api.services import transaction_service

router = APIRouter()


@router.get(
    "",
    response_model=list[TransactionRecord],
    summary="List all transactions",
)
async def list_transactions(db: AsyncSession = Depends(get_db)):
    """
    Return every stored transaction as a JSON array.

    The order is whatever the database returns. An empty ledger gives `[]`.
    """
    return await transaction_service.list_transactions(db)


@router.post(
    "",
    response_model=TransactionRecord,
    summary="Create a transaction",
)
async def add_transaction(
    request: TransactionRecord,
    db: AsyncSession = Depends(get_db),
):
    """
    Store a transaction and return it as stored.

    The `id` is chosen by the caller and must be unique. `wallet_from`,
    `wallet_to`, `fee` and `description` may be omitted or null.

    All amounts are in **integer minor units** (e.g., $10.50 = 1050).
    """
    return await transaction_service.add_transaction(db, request)
