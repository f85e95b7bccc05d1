"""
Tests for monetary precision — amounts are exact two-place decimals.

The API accepts and returns amounts as JSON numbers, but stores them as
integer cents. These tests verify:
  - Amounts come back as numbers (not strings) with their exact value
  - Storage really is integer cents
  - More than two decimal places, or negative amounts, are rejected
  - Sorting by amount compares numerically, not lexically
"""

from decimal import Decimal

from sqlalchemy import select

from app.models.cash_card import CashCard
from conftest import THAI


class TestAmountPrecision:

    async def test_amount_is_a_json_number(self, client):
        response = await client.get("/cashcards/100", auth=THAI)
        amount = response.json()["amount"]
        assert isinstance(amount, float)
        assert amount == 1.00

    async def test_amount_stored_as_integer_cents(self, client, db_session):
        created = await client.post("/cashcards", json={"amount": 0.1}, auth=THAI)
        card_id = int(created.headers["location"].rsplit("/", 1)[-1])

        result = await db_session.execute(select(CashCard).where(CashCard.id == card_id))
        card = result.scalar_one()
        assert card.amount_cents == 10
        assert isinstance(card.amount_cents, int)

    async def test_amount_accepts_string_decimal(self, client):
        """Clients that send amounts as strings keep full precision."""
        created = await client.post("/cashcards", json={"amount": "1234567.89"}, auth=THAI)
        assert created.status_code == 201

        fetched = await client.get(created.headers["location"], auth=THAI)
        assert fetched.json()["amount"] == 1234567.89

    async def test_too_many_decimal_places_rejected(self, client):
        response = await client.post("/cashcards", json={"amount": "1.005"}, auth=THAI)
        assert response.status_code == 422

    async def test_negative_amount_rejected(self, client):
        response = await client.post("/cashcards", json={"amount": -5.00}, auth=THAI)
        assert response.status_code == 422

        response = await client.put("/cashcards/99", json={"amount": -5.00}, auth=THAI)
        assert response.status_code == 422

    async def test_zero_amount_allowed(self, client):
        response = await client.put("/cashcards/99", json={"amount": 0}, auth=THAI)
        assert response.status_code == 204

        fetched = await client.get("/cashcards/99", auth=THAI)
        assert fetched.json()["amount"] == 0

    async def test_sort_is_numeric(self, client):
        """9.99 sorts below 10.00 (a string sort would put it last)."""
        await client.put("/cashcards/99", json={"amount": 9.99}, auth=THAI)
        await client.put("/cashcards/100", json={"amount": 10.00}, auth=THAI)

        response = await client.get("/cashcards?sort=amount,asc&size=2", auth=THAI)
        assert [c["amount"] for c in response.json()] == [9.99, 10.00]


class TestCashCardModel:

    def test_amount_property_round_trips_cents(self):
        card = CashCard(owner="Thai")
        card.amount = Decimal("123.45")
        assert card.amount_cents == 12345
        assert card.amount == Decimal("123.45")

    def test_amount_always_has_two_places(self):
        card = CashCard(owner="Thai", amount_cents=100)
        assert str(card.amount) == "1.00"
