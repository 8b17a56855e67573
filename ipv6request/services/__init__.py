# ipv6request/services/__init__.py

from .bgpview import BGPViewClient, build_http_client
from .lookups import LookupService, normalize_asn
from .message import generate_request_message
from .orchestrator import build_page
from .retry import RetryPolicy

__all__ = [
    "BGPViewClient",
    "build_http_client",
    "LookupService",
    "normalize_asn",
    "generate_request_message",
    "build_page",
    "RetryPolicy",
]
