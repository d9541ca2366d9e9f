from fastapi import APIRouter

from chari_stub.api.responses import now_iso

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    return {"status": "OK", "timestamp": now_iso(), "service": "Chari API Stub"}
