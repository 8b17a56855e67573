"""Turn one inbound request into the record the index page renders."""

import asyncio
import ipaddress
import logging
from typing import Optional

from ipv6request.errors import InvalidASN, UpstreamError
from ipv6request.models import PageData
from ipv6request.services.lookups import LookupService, normalize_asn
from ipv6request.services.message import generate_request_message

logger = logging.getLogger(__name__)


def _is_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


async def build_page(
    service: LookupService,
    *,
    client_ip: str,
    submitted_asn: Optional[str] = None,
) -> PageData:
    """Run the lookups for one request.

    ``submitted_asn`` is ``None`` for a plain page view and the raw form
    value when the user asked about an ASN. Auto-detection and organisation
    details are best effort; only a failed prefix lookup ends up in
    ``PageData.error``.
    """

    page = PageData(source_ip=client_ip)

    if _is_ip(client_ip):
        try:
            resolution = await service.lookup_asn_by_ip(client_ip)
        except UpstreamError as exc:
            logger.debug("ASN auto-detection failed for %s: %s", client_ip, exc)
        else:
            page.detected_asn = resolution.asn
            page.asn_name = resolution.name
            page.auto_detected = True

    if submitted_asn is None:
        if page.auto_detected:
            page.asn = page.detected_asn
        return page

    page.asn = submitted_asn.strip()
    try:
        asn = normalize_asn(submitted_asn)
    except InvalidASN as exc:
        page.error = str(exc)
        return page
    page.asn = asn

    details, prefixes = await asyncio.gather(
        service.lookup_asn_details(asn),
        service.lookup_ipv6_prefixes(asn),
        return_exceptions=True,
    )

    for result in (details, prefixes):
        if isinstance(result, BaseException) and not isinstance(result, UpstreamError):
            raise result

    if isinstance(details, UpstreamError):
        logger.debug("ASN details unavailable for %s: %s", asn, details)
    else:
        page.asn_details = details

    if isinstance(prefixes, UpstreamError):
        page.error = str(prefixes)
    else:
        page.prefixes = prefixes
        page.message = generate_request_message(prefixes)

    return page
