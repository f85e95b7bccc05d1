"""
SQLAlchemy ORM models package.

All models are imported here so that Base.metadata knows about every table
before create_all() runs, and so other modules can import from app.models.
"""

from app.models.cash_card import CashCard  # noqa: F401
