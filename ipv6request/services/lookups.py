"""Cached lookups against BGPView: IP to ASN, ASN to IPv6 prefixes and
ASN to organisation details.

Each lookup is the same cache-aside step with its own key prefix and TTL.
Two concurrent misses for one key both reach the API; the later ``set``
wins.
"""

import logging
import re
from typing import List, Optional, Tuple

from ipv6request import config
from ipv6request.cache import TTLCache, fetch_from_cache
from ipv6request.config import (
    DETAILS_KEY_PREFIX,
    IP_KEY_PREFIX,
    PREFIXES_KEY_PREFIX,
)
from ipv6request.errors import InvalidASN, NotFound
from ipv6request.models import (
    ASNDetails,
    ASNEnvelope,
    IPEnvelope,
    IPResolution,
    PrefixesEnvelope,
)
from ipv6request.services.bgpview import BGPViewClient

logger = logging.getLogger(__name__)

_ASN_RE = re.compile(r"^(?:AS)?\s*(\d+)$", re.IGNORECASE)


def normalize_asn(value: str) -> str:
    """Return ``value`` as a bare decimal ASN ("AS 64500" -> "64500")."""

    match = _ASN_RE.match((value or "").strip())
    if not match or int(match.group(1)) == 0:
        raise InvalidASN(f"invalid ASN {value!r}: expected a number such as 19625")
    return str(int(match.group(1)))


class LookupService:
    """Owns one typed cache per lookup kind and the shared API client."""

    def __init__(
        self,
        client: BGPViewClient,
        *,
        ip_cache: Optional[TTLCache[IPResolution]] = None,
        prefix_cache: Optional[TTLCache[Tuple[str, ...]]] = None,
        details_cache: Optional[TTLCache[ASNDetails]] = None,
        ip_ttl: Optional[float] = None,
        prefix_ttl: Optional[float] = None,
        details_ttl: Optional[float] = None,
    ) -> None:
        self.client = client
        self.ip_cache = ip_cache if ip_cache is not None else TTLCache(name="ip_cache")
        self.prefix_cache = (
            prefix_cache if prefix_cache is not None else TTLCache(name="prefix_cache")
        )
        self.details_cache = (
            details_cache if details_cache is not None else TTLCache(name="details_cache")
        )
        self.ip_ttl = ip_ttl if ip_ttl is not None else config.IP_CACHE_TTL
        self.prefix_ttl = prefix_ttl if prefix_ttl is not None else config.PREFIX_CACHE_TTL
        self.details_ttl = (
            details_ttl if details_ttl is not None else config.DETAILS_CACHE_TTL
        )

    async def lookup_asn_by_ip(self, ip: str) -> IPResolution:
        subject = f"IP {ip}"

        async def _fetch() -> IPResolution:
            envelope = await self.client.get(
                f"/ip/{ip}", IPEnvelope, subject=subject, what="IP"
            )
            prefixes = envelope.data.prefixes or []
            if not prefixes:
                raise NotFound(f"no ASN found for IP {ip}", subject=subject)
            # the first prefix is the most specific one
            asn = prefixes[0].asn
            return IPResolution(
                asn=str(asn.asn),
                name=asn.name or asn.description or "",
            )

        return await fetch_from_cache(
            self.ip_cache, IP_KEY_PREFIX + ip, _fetch, ttl=self.ip_ttl
        )

    async def lookup_ipv6_prefixes(self, asn: str) -> List[str]:
        asn = normalize_asn(asn)
        subject = f"ASN {asn}"

        async def _fetch() -> Tuple[str, ...]:
            envelope = await self.client.get(
                f"/asn/{asn}/prefixes",
                PrefixesEnvelope,
                subject=subject,
                what="prefixes",
                params={"type": "ipv6"},
            )
            return tuple(p.prefix for p in envelope.data.ipv6_prefixes or [])

        prefixes = await fetch_from_cache(
            self.prefix_cache, PREFIXES_KEY_PREFIX + asn, _fetch, ttl=self.prefix_ttl
        )
        return list(prefixes)

    async def lookup_asn_details(self, asn: str) -> ASNDetails:
        asn = normalize_asn(asn)
        subject = f"ASN {asn}"

        async def _fetch() -> ASNDetails:
            envelope = await self.client.get(
                f"/asn/{asn}", ASNEnvelope, subject=subject, what="ASN details"
            )
            return ASNDetails.from_upstream(envelope.data)

        return await fetch_from_cache(
            self.details_cache, DETAILS_KEY_PREFIX + asn, _fetch, ttl=self.details_ttl
        )
