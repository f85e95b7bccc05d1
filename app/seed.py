"""
Demo data loaded at startup.

When settings.SEED_DEMO_DATA is true and the cash_cards table is empty,
main.py's lifespan inserts the records below. The test suite loads the same
records into its in-memory database so tests can refer to them by id.

    ┌─────┬────────┬───────┐
    │ id  │ amount │ owner │
    ├─────┼────────┼───────┤
    │  99 │ 123.45 │ Thai  │
    │ 100 │   1.00 │ Thai  │
    │ 101 │ 150.00 │ Thai  │
    │ 102 │ 111.45 │ Thai  │
    │ 103 │  11.58 │ Mike  │
    └─────┴────────┴───────┘
"""

import logging
from decimal import Decimal

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.cash_card import CashCard

logger = logging.getLogger("cashcard.seed")

DEMO_CASH_CARDS = [
    (99, Decimal("123.45"), "Thai"),
    (100, Decimal("1.00"), "Thai"),
    (101, Decimal("150.00"), "Thai"),
    (102, Decimal("111.45"), "Thai"),
    (103, Decimal("11.58"), "Mike"),
]


async def seed_demo_data(db: AsyncSession) -> int:
    """
    Insert DEMO_CASH_CARDS if the table is empty.

    Returns:
        The number of cards inserted (0 if the table already had data).
    """
    count = await db.scalar(select(func.count()).select_from(CashCard))
    if count:
        logger.info("Skipping demo seed: %d cash cards already present", count)
        return 0

    for cash_card_id, amount, owner in DEMO_CASH_CARDS:
        cash_card = CashCard(id=cash_card_id, owner=owner)
        cash_card.amount = amount
        db.add(cash_card)
    await db.flush()
    await advance_id_sequence(db)
    await db.commit()

    logger.info("Seeded %d demo cash cards", len(DEMO_CASH_CARDS))
    return len(DEMO_CASH_CARDS)


async def advance_id_sequence(db: AsyncSession) -> bool:
    """
    Move the id sequence past the explicitly inserted demo ids.

    SQLite picks max(rowid) + 1 on its own; PostgreSQL's serial sequence
    doesn't see explicit ids and would eventually hand out 99 again.

    Returns:
        True if a sequence was reset.
    """
    if db.get_bind().dialect.name != "postgresql":
        return False

    await db.execute(
        text(
            "SELECT setval(pg_get_serial_sequence('cash_cards', 'id'), "
            "(SELECT MAX(id) FROM cash_cards))"
        )
    )
    logger.info("Advanced cash_cards id sequence past demo ids")
    return True
