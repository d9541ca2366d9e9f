"""Pagination and pre-filtering shared by every list endpoint."""

import math
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from chari_stub.exceptions import PaginationError
from chari_stub.models import Transaction, TransactionStatus, TransactionType
from chari_stub.operations import operation_status_of, operation_type_of

DEFAULT_PAGE_SIZE = 10


@dataclass
class Page:
    """One slice of a collection plus its navigation metadata."""

    items: list[Any]
    total: int
    limit: int
    start: int
    page: int
    total_pages: int
    has_more: bool
    has_previous: bool


def parse_int(value: Any, default: int) -> int:
    """Lenient integer parsing; missing or non-numeric input yields ``default``.

    Only whole numbers parse: ``"1.5"`` or ``"10abc"`` give ``default``
    rather than their leading digits.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def _is_present(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


def paginate(
    items: Sequence[Any],
    page_size: Any = None,
    offset: Any = None,
    page_number: Any = None,
) -> Page:
    """Slice ``items`` by offset or by page number.

    A present, non-empty ``offset`` wins; otherwise the start index is
    ``(page_number - 1) * page_size`` with ``page_number`` defaulting to 1.
    Out-of-range starts give an empty page with correct metadata.

    Raises
    ------
    PaginationError
        If the page size is zero or negative.
    """
    size = parse_int(page_size, DEFAULT_PAGE_SIZE)
    if size <= 0:
        raise PaginationError(f"Page size must be greater than zero, got {size}")

    if _is_present(offset):
        start = max(0, parse_int(offset, 0))
    else:
        start = (max(1, parse_int(page_number, 1)) - 1) * size

    total = len(items)
    return Page(
        items=list(items[start : start + size]),
        total=total,
        limit=size,
        start=start,
        page=start // size + 1,
        total_pages=math.ceil(total / size),
        has_more=start + size < total,
        has_previous=start > 0,
    )


def _as_list(value: str | Iterable[str] | None) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    return [part.strip() for v in value if v for part in v.split(",") if part.strip()]


def _matches_type(tx: Transaction, wanted: list[str]) -> bool:
    code = str(int(operation_type_of(tx.type)))
    name = TransactionType(tx.type).value
    return any(w.upper() == name or w == code for w in wanted)


def _matches_status(tx: Transaction, wanted: list[str]) -> bool:
    code = str(int(operation_status_of(tx.status)))
    name = TransactionStatus(tx.status).value
    return any(w.upper() == name or w == code for w in wanted)


def filter_transactions(
    transactions: Iterable[Transaction],
    types: str | Iterable[str] | None = None,
    statuses: str | Iterable[str] | None = None,
) -> list[Transaction]:
    """Keep transactions matching any requested type and any requested status.

    Types match a transaction type name (``TRANSFER_OUT``) or an operation
    type code (``3``). Statuses match a status name, case-insensitively,
    or an operation status code (``2`` for completed).
    """
    wanted_types = _as_list(types)
    wanted_statuses = _as_list(statuses)

    result = []
    for tx in transactions:
        if wanted_types and not _matches_type(tx, wanted_types):
            continue
        if wanted_statuses and not _matches_status(tx, wanted_statuses):
            continue
        result.append(tx)
    return result
