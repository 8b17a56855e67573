from typing import Optional

from fastapi import APIRouter, Depends, Query

from ipv6request.deps import get_client_ip, get_lookup_service
from ipv6request.models import PageData
from ipv6request.services.lookups import LookupService
from ipv6request.services.orchestrator import build_page

router = APIRouter()


@router.get(
    "/api/lookup",
    response_model=PageData,
    tags=["Lookup"],
    summary="Lookup results as JSON",
)
async def lookup(
    asn: Optional[str] = Query(None, description="ASN to query, e.g. 19625 or AS19625"),
    client_ip: str = Depends(get_client_ip),
    service: LookupService = Depends(get_lookup_service),
):
    """Same record the index page renders, for scripts and curl users."""

    return await build_page(service, client_ip=client_ip, submitted_asn=asn)


@router.get("/healthz", tags=["Health"], summary="Liveness probe")
async def healthz():
    return {"status": "ok"}
