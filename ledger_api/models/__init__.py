"""
SQLAlchemy ORM models package.

Models are imported here so that Base.metadata knows every table before
create_all() runs, and so other modules can import from ledger_api.models.
"""

from ledger_api.models.transaction import Transaction  # noqa: F401
