from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from fastapi.responses import JSONResponse

from ipv6request import __version__
from ipv6request.middleware import log_stats
from ipv6request.routes import api, index
from ipv6request.services.bgpview import BGPViewClient, build_http_client
from ipv6request.services.lookups import LookupService
from ipv6request.services.retry import RetryPolicy
from ipv6request.settings import Settings, get_settings
logger = logging.getLogger("ipv6request")


API_DESCRIPTION = (
    "Find out whether your internet provider announces IPv6. The service "
    "detects the ASN behind your address, lists the IPv6 prefixes that ASN "
    "announces according to BGPView, and drafts a message you can send to "
    "your provider asking for IPv6 support."
)

OPENAPI_TAGS = [
    {
        "name": "Lookup",
        "description": (
            "ASN auto-detection, IPv6 prefix listing and organisation details "
            "backed by the BGPView API."
        ),
    },
    {
        "name": "Health",
        "description": "Process liveness for load balancers and supervisors.",
    },
]


def create_lookup_service(settings: Settings, http_client) -> LookupService:
    client = BGPViewClient(
        http_client,
        base_url=settings.bgpview_base_url,
        retry_policy=RetryPolicy(settings.bgpview_max_attempts),
    )
    return LookupService(
        client,
        ip_ttl=settings.ip_cache_ttl,
        prefix_ttl=settings.prefix_cache_ttl,
        details_ttl=settings.details_cache_ttl,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    warnings = settings.recommended_warnings()
    if warnings:
        for w in warnings:
            logger.warning("CONFIG: %s", w)

    http_client = build_http_client(
        timeout=settings.http_timeout,
        user_agent=settings.user_agent,
    )
    app.state.lookup_service = create_lookup_service(settings, http_client)
    logger.info("Lookup service initialised against %s", settings.bgpview_base_url)
    try:
        yield
    finally:
        await http_client.aclose()
        logger.info("HTTP client closed")


app = FastAPI(
    title="IPv6 Request",
    description=API_DESCRIPTION,
    version=__version__,
    default_response_class=JSONResponse,
    lifespan=lifespan,
    license_info={"name": "MIT License",
                  "url": "https://opensource.org/licenses/MIT"},
    openapi_tags=OPENAPI_TAGS,
)

# Middleware
app.middleware("http")(log_stats)

# Routers
app.include_router(index.router)
app.include_router(api.router)
