"""Beneficiary routes. Beneficiaries are shared fixtures, not stored per customer."""

from fastapi import APIRouter, Depends, Request

from chari_stub.api.dependencies import PageParams, get_store, page_params, phone_number
from chari_stub.api.responses import envelope
from chari_stub.api.schemas import BeneficiaryRequest
from chari_stub.exceptions import ValidationError
from chari_stub.logging import get_logger
from chari_stub.pagination import paginate
from chari_stub.serialization import dataclass_to_dict
from chari_stub.store import FixtureStore

logger = get_logger(__name__)

router = APIRouter(prefix="/customer/beneficiaries", tags=["beneficiaries"])


@router.get("")
def list_beneficiaries(
    request: Request,
    phone: str = Depends(phone_number),
    params: PageParams = Depends(page_params),
    store: FixtureStore = Depends(get_store),
):
    page = paginate(store.list_beneficiaries(), params.size, params.offset, params.number)
    return envelope(
        {
            "collection": [dataclass_to_dict(b) for b in page.items],
            "count": page.total,
            "pageSize": page.limit,
            "pageNumber": page.page,
            "totalPages": page.total_pages,
            "hasMore": page.has_more,
            "hasPrevious": page.has_previous,
        },
        request,
    )


@router.post("")
def add_beneficiary(
    request: Request,
    body: BeneficiaryRequest,
    phone: str = Depends(phone_number),
    store: FixtureStore = Depends(get_store),
):
    if not body.name:
        raise ValidationError("Phone number and name are required")
    beneficiary = store.new_beneficiary(body.name, body.phoneNumber, body.rib, body.email)
    logger.info("Beneficiary %d added for %s", beneficiary.id, phone)
    return envelope(dataclass_to_dict(beneficiary), request)


@router.put("/{beneficiary_id}")
def update_beneficiary(
    beneficiary_id: int,
    request: Request,
    body: BeneficiaryRequest,
    phone: str = Depends(phone_number),
    store: FixtureStore = Depends(get_store),
):
    if not body.name:
        raise ValidationError("Phone number and name are required")
    beneficiary = store.update_beneficiary(beneficiary_id, body.name, body.phoneNumber, body.rib, body.email)
    return envelope(dataclass_to_dict(beneficiary), request)


@router.delete("/{beneficiary_id}")
def delete_beneficiary(
    beneficiary_id: int,
    request: Request,
    phone: str = Depends(phone_number),
):
    logger.info("Beneficiary %d deleted for %s", beneficiary_id, phone)
    return envelope(True, request)
