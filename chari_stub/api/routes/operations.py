"""Operation listing, transfers and cash request routes."""

from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from chari_stub.api.dependencies import PageParams, get_store, page_params, phone_number, require
from chari_stub.api.responses import envelope, now_iso
from chari_stub.api.schemas import AmountRequest, CashRequestBody, TransferRequest
from chari_stub.exceptions import EntityNotFoundError, ValidationError
from chari_stub.logging import get_logger
from chari_stub.models import CashRequest, Operation, OperationType
from chari_stub.pagination import filter_transactions, paginate
from chari_stub.serialization import dataclass_to_dict
from chari_stub.store import FixtureStore, to_amount

logger = get_logger(__name__)

router = APIRouter(prefix="/operations", tags=["operations"])


def _operation_view(operation: Operation) -> dict:
    view = dataclass_to_dict(operation)
    view["beneficiaryName"] = operation.beneficiary_name
    return view


def _cash_request_lookup_view(request: CashRequest) -> dict:
    return {
        "reference": request.reference,
        "entity": None,
        "createdAt": request.created_at,
        "executedAt": request.closed_at,
        "phoneNumber": request.phone_number,
        "amount": request.amount,
        "description": request.description or None,
        "partner": "ChariMoney",
        "status": request.operation_status,
        "type": request.operation_type,
    }


def _transfer_fields(body: TransferRequest) -> tuple[str, str, Decimal]:
    if not (body.customerPhoneNumber and body.amount and body.recipientPhoneNumber):
        raise ValidationError("Missing required fields")
    return body.customerPhoneNumber, body.recipientPhoneNumber, to_amount(body.amount)


@router.get("")
def list_operations(
    request: Request,
    phone: str = Depends(phone_number),
    operationType: Optional[List[str]] = Query(None),
    transactionStatus: Optional[List[str]] = Query(None),
    params: PageParams = Depends(page_params),
    store: FixtureStore = Depends(get_store),
):
    transactions = filter_transactions(
        store.transactions_of(phone),
        types=operationType,
        statuses=transactionStatus,
    )
    page = paginate(transactions, params.size, params.offset, params.number)
    operations = store.operations_of(phone, page.items, first_id=page.start + 1)
    logger.info("Returning %d of %d operations for %s", len(operations), page.total, phone)
    return envelope(
        {
            "collection": [_operation_view(op) for op in operations],
            "count": len(operations),
            "total": page.total,
            "pageSize": page.limit,
            "pageNumber": page.page,
            "totalPages": page.total_pages,
            "hasMore": page.has_more,
            "hasPrevious": page.has_previous,
        },
        request,
    )


@router.post("/cashin/card/preview")
def cashin_card_preview(
    request: Request,
    body: AmountRequest,
    phoneNumber: Optional[str] = Query(None),
):
    if not (phoneNumber and body.amount):
        raise ValidationError("Phone number and amount are required")
    return envelope(
        {
            "type": OperationType.CASHIN,
            "operation": {
                "phoneNumber": phoneNumber,
                "amount": to_amount(body.amount),
                "method": 2,
                "acceptedBy": 0,
                "description": "",
            },
            "feesAmount": 0,
            "checkedAt": now_iso(),
            "openLoop": False,
        },
        request,
    )


@router.post("/transfer/preview")
def transfer_preview(request: Request, body: TransferRequest):
    sender, recipient, amount = _transfer_fields(body)
    logger.info("Transfer preview from %s to %s, amount %s", sender, recipient, amount)
    return envelope(
        {
            "type": OperationType.TRANSFER,
            "operation": {
                "customerPhoneNumber": sender,
                "amount": amount,
                "reason": body.reason or "",
                "beneficiaryId": None,
                "recipientPhoneNumber": recipient,
            },
            "feesAmount": 0,
            "totalAmount": amount,
            "checkedAt": now_iso(),
            "openLoop": False,
        },
        request,
    )


@router.post("/transfer")
def transfer(request: Request, body: TransferRequest, store: FixtureStore = Depends(get_store)):
    sender, recipient, amount = _transfer_fields(body)
    amount = store.transfer(sender, recipient, amount)
    return envelope(
        {
            "operationType": OperationType.TRANSFER,
            "amount": amount,
            "feesAmount": 0,
            "totalAmount": amount,
            "reason": body.reason or "",
            "recipientPhoneNumber": recipient,
            "checkedAt": now_iso(),
        },
        request,
    )


def _open_cash_request(body: CashRequestBody, store: FixtureStore, operation_type: OperationType) -> CashRequest:
    if not (body.phone and body.amount):
        raise ValidationError("Phone number and amount are required")
    return store.request_cash(body.phone, body.amount, operation_type)


@router.post("/cashin/request")
def request_cashin(request: Request, body: CashRequestBody, store: FixtureStore = Depends(get_store)):
    cash_request = _open_cash_request(body, store, OperationType.CASHIN)
    return envelope(dataclass_to_dict(cash_request), request)


@router.post("/cashout/request")
def request_cashout(request: Request, body: CashRequestBody, store: FixtureStore = Depends(get_store)):
    cash_request = _open_cash_request(body, store, OperationType.CASHOUT)
    return envelope(dataclass_to_dict(cash_request), request)


@router.get("/cashin/request")
def get_cashin(
    request: Request,
    reference: Optional[str] = Query(None),
    store: FixtureStore = Depends(get_store),
):
    require(reference, "Reference is required")
    return envelope(_cash_request_lookup_view(store.cash_request(reference, OperationType.CASHIN)), request)


@router.get("/cashout/request")
def get_cashout(
    request: Request,
    reference: Optional[str] = Query(None),
    store: FixtureStore = Depends(get_store),
):
    require(reference, "Reference is required")
    return envelope(_cash_request_lookup_view(store.cash_request(reference, OperationType.CASHOUT)), request)


@router.get("/{operation_id}")
def get_operation(
    operation_id: str,
    request: Request,
    phone: str = Depends(phone_number),
    store: FixtureStore = Depends(get_store),
):
    if not operation_id.isdigit():
        raise EntityNotFoundError(f"Operation not found: {operation_id}")
    operation = store.find_operation(phone, int(operation_id))
    return envelope(_operation_view(operation), request)
