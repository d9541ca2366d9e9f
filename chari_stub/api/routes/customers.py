"""Customer lifecycle, balance and transaction routes."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from chari_stub.api.dependencies import PageParams, get_store, page_params, phone_number
from chari_stub.api.responses import envelope, now_iso
from chari_stub.api.schemas import (
    ConfirmRequest,
    CreatePinRequest,
    LoginRequest,
    RegisterRequest,
    UpdatePinRequest,
)
from chari_stub.exceptions import ValidationError
from chari_stub.logging import get_logger
from chari_stub.models import Customer
from chari_stub.pagination import filter_transactions, paginate
from chari_stub.serialization import dataclass_to_dict
from chari_stub.store import FixtureStore

logger = get_logger(__name__)

router = APIRouter(prefix="/customers", tags=["customers"])

RIB_PREFIX = "827640000010000000"


def _status_view(customer: Customer, currency: str) -> dict:
    registration = customer.registration
    return {
        "id": f"customer-{customer.numeric_id}",
        "phoneNumber": customer.phone_number,
        "status": customer.status,
        "walletType": registration.wallet_type if registration else "P",
        "balance": customer.balance,
        "currency": currency,
        "firstName": registration.first_name if registration else None,
        "lastName": registration.last_name if registration else None,
        "registeredAt": registration.registered_at if registration else None,
    }


def _info_view(customer: Customer) -> dict:
    registration = customer.registration
    return {
        "id": customer.numeric_id,
        "phoneNumber": customer.phone_number,
        "firstName": registration.first_name,
        "lastName": registration.last_name,
        "cin": registration.cin,
        "walletType": registration.wallet_type,
        "status": customer.status,
        "customer_status": customer.status,
        "rib": f"{RIB_PREFIX}{customer.phone_number[-4:]}",
        "balance": customer.balance,
        "createdAt": registration.registered_at,
        "updatedAt": now_iso(),
    }


@router.get("/status")
def customer_status(
    request: Request,
    phone: str = Depends(phone_number),
    store: FixtureStore = Depends(get_store),
):
    logger.info("Customer status check for: %s", phone)
    customer = store.status_of(phone)
    return envelope(_status_view(customer, store.config.currency), request)


@router.get("/default")
def default_wallet(
    request: Request,
    phone: str = Depends(phone_number),
    store: FixtureStore = Depends(get_store),
):
    store.require(phone)
    return envelope({"isDefaultWallet": True}, request)


@router.post("/register")
def register(request: Request, body: RegisterRequest, store: FixtureStore = Depends(get_store)):
    fields = (body.phoneNumber, body.firstName, body.lastName, body.cin, body.walletType)
    if not all(fields):
        raise ValidationError("Missing required fields")
    store.register(*fields)
    return envelope(True, request)


@router.post("/confirm")
def confirm(request: Request, body: ConfirmRequest, store: FixtureStore = Depends(get_store)):
    if not (body.phoneNumber and body.code and body.walletType):
        raise ValidationError("Missing required fields")
    store.confirm(body.phoneNumber, body.code, body.walletType)
    return envelope(True, request)


@router.post("/confirm/resend-otp")
def resend_otp(request: Request, phone: str = Depends(phone_number)):
    logger.info("OTP resent to: %s", phone)
    return envelope(True, request)


@router.post("/login")
def login(request: Request, body: LoginRequest, store: FixtureStore = Depends(get_store)):
    if not (body.phoneNumber and body.pin):
        raise ValidationError("Phone number and PIN are required")
    result = store.login(body.phoneNumber, body.pin)
    logger.info("Login result for %s: %s", body.phoneNumber, result)
    return envelope(result, request)


@router.post("/pin")
def create_pin(request: Request, body: CreatePinRequest, store: FixtureStore = Depends(get_store)):
    if not (body.phoneNumber and body.pin):
        raise ValidationError("Phone number and PIN are required")
    store.create_pin(body.phoneNumber, body.pin)
    return envelope(True, request)


@router.put("/pin")
def update_pin(request: Request, body: UpdatePinRequest, store: FixtureStore = Depends(get_store)):
    if not (body.phoneNumber and body.oldPin and body.newPin):
        raise ValidationError("Phone number, old PIN, and new PIN are required")
    store.update_pin(body.phoneNumber, body.oldPin, body.newPin)
    return envelope(True, request)


@router.get("/balance")
def balance(
    request: Request,
    phone: str = Depends(phone_number),
    store: FixtureStore = Depends(get_store),
):
    amount = store.balance_of(phone)
    logger.info("Balance for %s: %s", phone, amount)
    return envelope({"balance": amount, "currency": store.config.currency}, request)


@router.get("/info")
def info(
    request: Request,
    phone: str = Depends(phone_number),
    store: FixtureStore = Depends(get_store),
):
    return envelope(_info_view(store.registered(phone)), request)


@router.delete("/unregister")
def unregister(
    request: Request,
    phone: str = Depends(phone_number),
    store: FixtureStore = Depends(get_store),
):
    store.unregister(phone)
    return envelope(True, request)


@router.get("/transactions")
def list_transactions(
    request: Request,
    phone: str = Depends(phone_number),
    type: Optional[List[str]] = Query(None),
    status: Optional[List[str]] = Query(None),
    params: PageParams = Depends(page_params),
    store: FixtureStore = Depends(get_store),
):
    transactions = filter_transactions(store.transactions_of(phone), types=type, statuses=status)
    page = paginate(transactions, params.size, params.offset, params.number)
    logger.info("Returning %d of %d transactions for %s", len(page.items), page.total, phone)
    return envelope(
        {
            "transactions": [dataclass_to_dict(tx) for tx in page.items],
            "total": page.total,
            "limit": page.limit,
            "offset": page.start,
            "page": page.page,
            "totalPages": page.total_pages,
            "hasMore": page.has_more,
            "hasPrevious": page.has_previous,
        },
        request,
    )


@router.get("/transactions/{transaction_id}")
def get_transaction(
    transaction_id: str,
    request: Request,
    phone: str = Depends(phone_number),
    store: FixtureStore = Depends(get_store),
):
    tx = store.find_transaction(phone, transaction_id)
    return envelope(dataclass_to_dict(tx), request)
