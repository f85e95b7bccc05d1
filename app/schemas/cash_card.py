"""
Pydantic schemas for CashCard endpoints.

Amounts are Decimals with at most two decimal places on the way in, and are
serialized as plain JSON numbers on the way out (Pydantic would otherwise
render a Decimal as a string).

The request bodies accept, and ignore, `id` and `owner`: the id is assigned
by the database and the owner is always the authenticated user, so a client
can't create or move a card into someone else's name.
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer

Amount = Annotated[
    Decimal,
    Field(ge=0, max_digits=17, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class CashCardCreateRequest(BaseModel):
    """Body for POST /cashcards."""
    amount: Amount


class CashCardUpdateRequest(BaseModel):
    """Body for PUT /cashcards/{id}. Only the amount can change."""
    amount: Amount


class CashCardResponse(BaseModel):
    """Public representation of a cash card."""
    id: int
    amount: Amount
    owner: str

    model_config = {"from_attributes": True}
