"""
Cash cards router — CRUD over the authenticated user's cash cards.

Endpoints:
  GET    /cashcards/{cash_card_id} — Get one of your cash cards
  GET    /cashcards                — List your cash cards (page, size, sort)
  POST   /cashcards                — Create a cash card (201 + Location)
  PUT    /cashcards/{cash_card_id} — Replace a card's amount (204)
  DELETE /cashcards/{cash_card_id} — Delete a card (204)

The whole router is mounted behind require_card_owner in main.py. Handlers
re-declare the same dependency to receive the principal; FastAPI caches it
per request, so credentials are only checked once.

Every handler passes the principal's username to the service as the owner.
A card that exists but belongs to another user yields the same 404 as a
card that doesn't exist.
"""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import require_card_owner
from app.paging import PageParams
from app.schemas.cash_card import (
    CashCardCreateRequest,
    CashCardResponse,
    CashCardUpdateRequest,
)
from app.services import cash_card_service
from app.user_store import UserAccount

router = APIRouter()


@router.get(
    "/{cash_card_id}",
    response_model=CashCardResponse,
    summary="Get a cash card",
)
async def get_cash_card(
    cash_card_id: int,
    user: UserAccount = Depends(require_card_owner),
    db: AsyncSession = Depends(get_db),
):
    """Return the cash card if it exists and you own it; otherwise 404."""
    return await cash_card_service.get_cash_card(db, cash_card_id, user.username)


@router.get(
    "",
    response_model=list[CashCardResponse],
    summary="List your cash cards",
)
async def list_cash_cards(
    params: PageParams = Depends(),
    user: UserAccount = Depends(require_card_owner),
    db: AsyncSession = Depends(get_db),
):
    """
    List one page of your cash cards.

    - **page**: zero-based page index (default 0)
    - **size**: page size (default 20)
    - **sort**: e.g. `amount,desc`; repeatable; defaults to `amount,asc`
    """
    page_request = params.to_page_request(
        allowed=cash_card_service.SORTABLE.keys(),
        default=cash_card_service.DEFAULT_SORT,
    )
    return await cash_card_service.find_all_by_owner(db, user.username, page_request)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    summary="Create a cash card",
)
async def create_cash_card(
    body: CashCardCreateRequest,
    request: Request,
    user: UserAccount = Depends(require_card_owner),
    db: AsyncSession = Depends(get_db),
):
    """
    Create a cash card owned by you.

    Any `id` or `owner` in the body is ignored. The response has no body;
    the `Location` header points at the new card.
    """
    cash_card = await cash_card_service.create_cash_card(db, user.username, body.amount)
    location = request.url_for("get_cash_card", cash_card_id=cash_card.id)
    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": str(location)},
    )


@router.put(
    "/{cash_card_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Update a cash card's amount",
)
async def update_cash_card(
    cash_card_id: int,
    body: CashCardUpdateRequest,
    user: UserAccount = Depends(require_card_owner),
    db: AsyncSession = Depends(get_db),
):
    """Replace the amount of one of your cash cards. Id and owner are immutable."""
    await cash_card_service.update_cash_card(db, cash_card_id, user.username, body.amount)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{cash_card_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a cash card",
)
async def delete_cash_card(
    cash_card_id: int,
    user: UserAccount = Depends(require_card_owner),
    db: AsyncSession = Depends(get_db),
):
    await cash_card_service.delete_cash_card(db, cash_card_id, user.username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
