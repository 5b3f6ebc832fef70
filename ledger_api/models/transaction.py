"""
Transaction model — one row per ledger entry in the `transactions` table.

The row mirrors the JSON record field for field:

  - id: Caller-assigned identifier; the primary key enforces uniqueness
  - datetime: Timestamp text, stored exactly as received
  - trx_type / trx_subtype: Category and finer classification
  - wallet_from: Source wallet (NULL for deposits)
  - wallet_to: Destination wallet (NULL for withdrawals)
  - name: Display label
  - amount / fee: Signed 64-bit integers in minor units (fee is optional)
  - description: Optional free-text note

No checks beyond NULL-ability live here. The API trusts the caller with
amount signs and wallet formats.
"""

from sqlalchemy import BigInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ledger_api.database import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(String, primary_key=True)

    datetime: Mapped[str] = mapped_column(String, nullable=False)

    # e.g. "deposit", "transfer"
    trx_type: Mapped[str] = mapped_column(String, nullable=False)
    trx_subtype: Mapped[str] = mapped_column(String, nullable=False)

    wallet_from: Mapped[str | None] = mapped_column(String, nullable=True)
    wallet_to: Mapped[str | None] = mapped_column(String, nullable=True)

    name: Mapped[str] = mapped_column(String, nullable=False)

    # Minor units (cents)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    fee: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)
