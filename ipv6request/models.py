"""Upstream BGPView payloads and the records built from them."""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class _Upstream(BaseModel):
    model_config = ConfigDict(extra="ignore")


# --- GET /asn/{asn}/prefixes?type=ipv6 -------------------------------------

class PrefixItem(_Upstream):
    prefix: str


class PrefixesData(_Upstream):
    ipv6_prefixes: Optional[List[PrefixItem]] = None


class PrefixesEnvelope(_Upstream):
    data: PrefixesData


# --- GET /ip/{ip} ----------------------------------------------------------

class PrefixASN(_Upstream):
    asn: int
    name: Optional[str] = None
    description: Optional[str] = None
    country_code: Optional[str] = None


class IPPrefix(_Upstream):
    asn: PrefixASN


class IPData(_Upstream):
    ip: Optional[str] = None
    prefixes: Optional[List[IPPrefix]] = None


class IPEnvelope(_Upstream):
    data: IPData


# --- GET /asn/{asn} --------------------------------------------------------

class RIRAllocation(_Upstream):
    rir_name: Optional[str] = None
    country_code: Optional[str] = None
    date_allocated: Optional[str] = None
    allocation_status: Optional[str] = None


class IANAAssignment(_Upstream):
    assignment_status: Optional[str] = None
    description: Optional[str] = None
    whois_server: Optional[str] = None
    date_assigned: Optional[str] = None


class ASNData(_Upstream):
    asn: int
    name: Optional[str] = None
    description_short: Optional[str] = None
    description_full: Optional[List[str]] = None
    country_code: Optional[str] = None
    website: Optional[str] = None
    email_contacts: Optional[List[str]] = None
    abuse_contacts: Optional[List[str]] = None
    traffic_ratio: Optional[str] = None
    owner_address: Optional[List[str]] = None
    rir_allocation: Optional[RIRAllocation] = None
    iana_assignment: Optional[IANAAssignment] = None
    date_updated: Optional[str] = None


class ASNEnvelope(_Upstream):
    data: ASNData


# --- records handed to callers ---------------------------------------------

class IPResolution(BaseModel):
    """ASN announcing the most specific prefix that covers an IP."""

    model_config = ConfigDict(frozen=True)

    asn: str
    name: str


class ASNDetails(BaseModel):
    """Organisation record for an ASN.

    Optional upstream fields that were missing or null are empty strings or
    empty tuples; the page only shows the ones that are set.
    """

    model_config = ConfigDict(frozen=True)

    asn: str
    name: str = ""
    description_short: str = ""
    description_full: Tuple[str, ...] = ()
    country_code: str = ""
    website: str = ""
    email_contacts: Tuple[str, ...] = ()
    abuse_contacts: Tuple[str, ...] = ()
    traffic_ratio: str = ""
    owner_address: Tuple[str, ...] = ()
    rir_allocation: str = ""
    iana_assignment: str = ""
    whois_server: str = ""
    date_updated: str = ""

    @classmethod
    def from_upstream(cls, data: ASNData) -> "ASNDetails":
        rir = data.rir_allocation or RIRAllocation()
        iana = data.iana_assignment or IANAAssignment()
        return cls(
            asn=str(data.asn),
            name=data.name or "",
            description_short=data.description_short or "",
            description_full=tuple(data.description_full or ()),
            country_code=data.country_code or "",
            website=data.website or "",
            email_contacts=tuple(data.email_contacts or ()),
            abuse_contacts=tuple(data.abuse_contacts or ()),
            traffic_ratio=data.traffic_ratio or "",
            owner_address=tuple(data.owner_address or ()),
            rir_allocation=rir.rir_name or "",
            iana_assignment=iana.description or "",
            whois_server=iana.whois_server or "",
            date_updated=data.date_updated or "",
        )


class PageData(BaseModel):
    """Everything the index page (or the JSON endpoint) renders."""

    asn: str = ""
    prefixes: List[str] = Field(default_factory=list)
    error: str = ""
    source_ip: str = ""
    detected_asn: str = ""
    asn_name: str = ""
    auto_detected: bool = False
    asn_details: Optional[ASNDetails] = None
    message: str = ""
