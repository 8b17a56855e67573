from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse

from ipv6request.deps import get_client_ip, get_lookup_service
from ipv6request.services.lookups import LookupService
from ipv6request.services.orchestrator import build_page
from ipv6request.templates import render_index

router = APIRouter()


@router.get(
    "/",
    response_class=HTMLResponse,
    tags=["Lookup"],
    summary="Show the lookup form, pre-filled with the caller's ASN",
)
async def index(
    client_ip: str = Depends(get_client_ip),
    service: LookupService = Depends(get_lookup_service),
):
    page = await build_page(service, client_ip=client_ip)
    return HTMLResponse(render_index(page))


@router.post(
    "/",
    response_class=HTMLResponse,
    tags=["Lookup"],
    summary="Look up the IPv6 prefixes announced by an ASN",
)
async def submit(
    asn: str = Form(""),
    client_ip: str = Depends(get_client_ip),
    service: LookupService = Depends(get_lookup_service),
):
    """Render prefixes, organisation details and the request message.

    Lookup failures are shown on the page; the response is always 200.
    """

    page = await build_page(service, client_ip=client_ip, submitted_asn=asn)
    return HTMLResponse(render_index(page))
