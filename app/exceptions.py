"""
Custom exception classes and FastAPI exception handlers.

The service layer raises domain-specific errors without importing HTTP
concepts; the handlers registered here translate them into consistent
JSON responses of the form {"detail": ..., "error_type": ...}.

Authentication (401) and role (403) failures are raised as FastAPI
HTTPExceptions directly from the dependency layer, since they are HTTP
concerns through and through. The request-validation handler re-checks them
on /cashcards paths, so a malformed body never turns a 401/403 into a 422.

Exception hierarchy:
    CashCardAPIError (base)
    ├── CashCardNotFoundError  — card doesn't exist OR belongs to someone else
    └── InvalidSortError       — sort parameter names an unknown property
"""

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exception_handlers import (
    http_exception_handler,
    request_validation_exception_handler,
)
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.dependencies import enforce_card_owner, is_protected_path

logger = logging.getLogger("cashcard.errors")


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class CashCardAPIError(Exception):
    """Base exception for all Cash Card API domain errors."""

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(self.detail)


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class CashCardNotFoundError(CashCardAPIError):
    """
    Raised when a cash card is missing or is not owned by the caller.

    Both cases produce the same message so a caller can't probe for the
    existence of other owners' cards.
    """

    def __init__(self, cash_card_id: int):
        self.cash_card_id = cash_card_id
        super().__init__(f"Cash card {cash_card_id} not found")


class InvalidSortError(CashCardAPIError):
    """Raised when a sort parameter references a property that can't be sorted on."""

    def __init__(self, prop: str, allowed: list[str]):
        self.prop = prop
        self.allowed = allowed
        super().__init__(
            f"Cannot sort by '{prop}'; allowed properties: {', '.join(allowed)}"
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register custom exception handlers with the FastAPI application.

    This is called once during app creation in main.py.
    """

    @app.exception_handler(CashCardNotFoundError)
    async def cash_card_not_found_handler(
        request: Request, exc: CashCardNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={"detail": exc.detail, "error_type": "cash_card_not_found"},
        )

    @app.exception_handler(InvalidSortError)
    async def invalid_sort_handler(
        request: Request, exc: InvalidSortError
    ) -> JSONResponse:
        logger.info("Rejected sort property %r on %s", exc.prop, request.url.path)
        return JSONResponse(
            status_code=400,
            content={
                "detail": exc.detail,
                "error_type": "invalid_sort",
                "allowed": exc.allowed,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Credentials and role outrank a malformed body on gated paths
        if is_protected_path(request.url.path):
            try:
                await enforce_card_owner(request)
            except HTTPException as auth_exc:
                return await http_exception_handler(request, auth_exc)
        return await request_validation_exception_handler(request, exc)
