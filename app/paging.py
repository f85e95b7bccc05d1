"""
Pagination and sorting parameters for list endpoints.

Query parameter conventions:

  page  zero-based page index (default 0)
  size  items per page (default settings.DEFAULT_PAGE_SIZE)
  sort  repeatable, "property[,property...][,asc|desc]"

A trailing "asc" or "desc" token sets the direction for every property
listed before it in the same parameter, so these are all valid:

  ?sort=amount               -> amount ASC
  ?sort=amount,desc          -> amount DESC
  ?sort=owner,amount,desc    -> owner DESC, amount DESC
  ?sort=owner&sort=amount,desc

The set of sortable properties is supplied by the caller (the service layer
knows which API fields map to which columns), so this module stays free of
ORM imports.
"""

import enum
from dataclasses import dataclass, field
from typing import Iterable

from fastapi import Query

from app.config import settings
from app.exceptions import InvalidSortError


class Direction(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortOrder:
    prop: str
    direction: Direction = Direction.ASC


@dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = settings.DEFAULT_PAGE_SIZE
    sort: tuple[SortOrder, ...] = field(default_factory=tuple)

    @property
    def offset(self) -> int:
        return self.page * self.size


def parse_sort(values: Iterable[str], allowed: Iterable[str]) -> tuple[SortOrder, ...]:
    """
    Parse raw `sort` query values into SortOrders.

    Empty tokens are skipped, so "amount," behaves like "amount".

    Raises:
        InvalidSortError: If a property isn't in `allowed`.
    """
    allowed = list(allowed)
    orders: list[SortOrder] = []

    for value in values:
        tokens = [token.strip() for token in value.split(",") if token.strip()]
        if not tokens:
            continue

        direction = Direction.ASC
        if tokens[-1].lower() in (Direction.ASC.value, Direction.DESC.value):
            direction = Direction(tokens.pop().lower())

        for prop in tokens:
            if prop not in allowed:
                raise InvalidSortError(prop, allowed)
            orders.append(SortOrder(prop=prop, direction=direction))

    return tuple(orders)


class PageParams:
    """
    FastAPI dependency collecting page/size/sort from the query string.

    `sort` is kept raw here and parsed by the service, which owns the list
    of sortable properties and the default ordering.
    """

    def __init__(
        self,
        page: int = Query(0, ge=0, description="Zero-based page index"),
        size: int = Query(
            settings.DEFAULT_PAGE_SIZE,
            ge=1,
            le=settings.MAX_PAGE_SIZE,
            description="Page size",
        ),
        sort: list[str] | None = Query(
            None,
            description="Sort order: property[,property...][,asc|desc]. Repeatable.",
        ),
    ):
        self.page = page
        self.size = size
        self.sort = sort or []

    def to_page_request(
        self,
        allowed: Iterable[str],
        default: tuple[SortOrder, ...] = (),
    ) -> PageRequest:
        orders = parse_sort(self.sort, allowed)
        return PageRequest(page=self.page, size=self.size, sort=orders or default)
