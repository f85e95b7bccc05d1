"""
Cash card service — data access for cash cards, always scoped by owner.

Ownership enforcement:
  Every function takes an `owner` argument, which is always the username of
  the authenticated principal (set by the dependency layer). Lookups filter
  on id AND owner in the same query, so a card owned by someone else is
  simply "not found". Callers get CashCardNotFoundError in both cases and
  can't distinguish them.

Sorting:
  The API exposes `amount`, but the column is `amount_cents`; SORTABLE maps
  API property names to columns. Results are always ordered by id as a final
  tie-breaker so pages are stable.
"""

import logging
from decimal import Decimal

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import CashCardNotFoundError
from app.models.cash_card import CashCard
from app.paging import Direction, PageRequest, SortOrder

logger = logging.getLogger("cashcard.service")

SORTABLE = {
    "id": CashCard.id,
    "amount": CashCard.amount_cents,
    "owner": CashCard.owner,
}

DEFAULT_SORT = (SortOrder(prop="amount", direction=Direction.ASC),)


async def find_by_id_and_owner(
    db: AsyncSession,
    cash_card_id: int,
    owner: str,
) -> CashCard | None:
    """Return the card if it exists and belongs to `owner`, else None."""
    result = await db.execute(
        select(CashCard).where(
            CashCard.id == cash_card_id,
            CashCard.owner == owner,
        )
    )
    return result.scalar_one_or_none()


async def get_cash_card(
    db: AsyncSession,
    cash_card_id: int,
    owner: str,
) -> CashCard:
    """
    Get a single cash card owned by `owner`.

    Raises:
        CashCardNotFoundError: If the card doesn't exist or belongs to someone else.
    """
    cash_card = await find_by_id_and_owner(db, cash_card_id, owner)
    if cash_card is None:
        raise CashCardNotFoundError(cash_card_id)
    return cash_card


async def exists_by_id_and_owner(
    db: AsyncSession,
    cash_card_id: int,
    owner: str,
) -> bool:
    result = await db.execute(
        select(
            exists().where(
                CashCard.id == cash_card_id,
                CashCard.owner == owner,
            )
        )
    )
    return bool(result.scalar())


async def find_all_by_owner(
    db: AsyncSession,
    owner: str,
    page_request: PageRequest,
) -> list[CashCard]:
    """
    List one page of the cash cards belonging to `owner`.

    Falls back to DEFAULT_SORT (amount ascending) when the request has no
    sort orders. A page past the end yields an empty list.
    """
    orders = page_request.sort or DEFAULT_SORT
    order_by = []
    for order in orders:
        column = SORTABLE[order.prop]
        order_by.append(column.desc() if order.direction == Direction.DESC else column.asc())
    order_by.append(CashCard.id.asc())

    result = await db.execute(
        select(CashCard)
        .where(CashCard.owner == owner)
        .order_by(*order_by)
        .offset(page_request.offset)
        .limit(page_request.size)
    )
    return list(result.scalars().all())


async def create_cash_card(
    db: AsyncSession,
    owner: str,
    amount: Decimal,
) -> CashCard:
    """Insert a new cash card for `owner`; the id is assigned by the database."""
    cash_card = CashCard(owner=owner)
    cash_card.amount = amount
    db.add(cash_card)
    await db.flush()

    logger.info("Created cash card %s for %r", cash_card.id, owner)
    return cash_card


async def update_cash_card(
    db: AsyncSession,
    cash_card_id: int,
    owner: str,
    amount: Decimal,
) -> CashCard:
    """
    Replace the amount of a card owned by `owner`. Id and owner never change.

    Raises:
        CashCardNotFoundError: If the card doesn't exist or belongs to someone else.
    """
    cash_card = await get_cash_card(db, cash_card_id, owner)
    cash_card.amount = amount
    await db.flush()

    logger.info("Updated cash card %s for %r", cash_card_id, owner)
    return cash_card


async def delete_cash_card(
    db: AsyncSession,
    cash_card_id: int,
    owner: str,
) -> None:
    """
    Delete a card owned by `owner`.

    Raises:
        CashCardNotFoundError: If the card doesn't exist or belongs to someone else.
    """
    if not await exists_by_id_and_owner(db, cash_card_id, owner):
        raise CashCardNotFoundError(cash_card_id)

    await db.execute(
        delete(CashCard).where(
            CashCard.id == cash_card_id,
            CashCard.owner == owner,
        )
    )
    logger.info("Deleted cash card %s for %r", cash_card_id, owner)
