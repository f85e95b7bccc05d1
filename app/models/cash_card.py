"""
CashCard model — the single business record of the API.

A cash card is just an id, a monetary amount and the username of its owner.
The owner is the authenticated principal's username (there is no users table:
principals come from the static user store), so every query that touches a
card filters on this column.

Money is stored as integer cents (amount_cents) so storage and sorting never
involve floating point. The `amount` property converts to and from a
two-place Decimal for the API layer.
"""

from decimal import Decimal

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

CENTS = Decimal("100")


class CashCard(Base):
    __tablename__ = "cash_cards"

    # Server-generated on insert
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    amount_cents: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    # Username of the principal that owns this card; indexed for owner-scoped lookups
    owner: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )

    @property
    def amount(self) -> Decimal:
        return (Decimal(self.amount_cents) / CENTS).quantize(Decimal("0.01"))

    @amount.setter
    def amount(self, value: Decimal) -> None:
        self.amount_cents = int((Decimal(value) * CENTS).to_integral_value())

    def __repr__(self) -> str:
        return f"CashCard(id={self.id!r}, amount={self.amount}, owner={self.owner!r})"
