"""
Pydantic schema for the Transaction wire format.

The same record is accepted by POST /transactions and returned by both
endpoints. Optional fields may be omitted or sent as null on input, and are
always present (null when unset) on output.

Monetary amounts are integer minor units (e.g., $10.50 = 1050) and must fit
in a signed 64-bit column. Integers are strict: 10.0 or "10" is rejected.
"""

from typing import Annotated

from pydantic import BaseModel, Field

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

MinorUnits = Annotated[int, Field(strict=True, ge=INT64_MIN, le=INT64_MAX)]


class TransactionRecord(BaseModel):
    """A single ledger entry, as it travels over HTTP."""
    id: str
    datetime: str
    trx_type: str = Field(description='Category, e.g. "deposit" or "transfer"')
    trx_subtype: str
    wallet_from: str | None = Field(None, description="Source wallet (absent for deposits)")
    wallet_to: str | None = Field(None, description="Destination wallet (absent for withdrawals)")
    name: str
    amount: MinorUnits = Field(description="Amount in minor units")
    fee: MinorUnits | None = Field(None, description="Fee in minor units")
    description: str | None = None

    model_config = {"from_attributes": True}
