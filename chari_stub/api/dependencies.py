"""Request-scoped helpers injected with ``Depends``."""

from dataclasses import dataclass
from typing import Optional

from fastapi import Query, Request

from chari_stub.exceptions import ValidationError
from chari_stub.store import FixtureStore


def get_store(request: Request) -> FixtureStore:
    """The store owned by the running application."""
    return request.app.state.store


def require(value, message: str):
    """Return ``value`` or raise a 400 with ``message`` when it is empty."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(message)
    return value


def phone_number(phoneNumber: Optional[str] = Query(None)) -> str:
    return require(phoneNumber, "Phone number is required")


@dataclass
class PageParams:
    """Raw pagination inputs; parsed leniently by the pagination engine."""

    size: Optional[str]
    offset: Optional[str]
    number: Optional[str]


def page_params(
    limit: Optional[str] = Query(None),
    pageSize: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    pageNumber: Optional[str] = Query(None),
) -> PageParams:
    """Accept both ``limit/offset/page`` and ``pageSize/pageNumber`` spellings."""
    return PageParams(
        size=limit if limit not in (None, "") else pageSize,
        offset=offset,
        number=page if page not in (None, "") else pageNumber,
    )
