"""Upper-case config constants.

Values are sourced from the Pydantic settings model on every access, so
imports like ``from ipv6request.config import PREFIX_CACHE_TTL`` follow
environment overrides made before the import. New code should prefer
``get_settings`` from :mod:`ipv6request.settings` when it needs several
values at once.
"""

# Cache key prefixes, one per lookup kind
IP_KEY_PREFIX = "ip_"
PREFIXES_KEY_PREFIX = "asn_"
DETAILS_KEY_PREFIX = "asn_details_"


def _get_settings():
    """Get fresh settings (no caching here to allow test overrides)."""
    from ipv6request.settings import get_settings
    return get_settings()


def __getattr__(name: str):
    """Dynamically resolve settings attributes when accessed."""
    attr_map = {
        'BGPVIEW_BASE_URL': 'bgpview_base_url',
        'HTTP_TIMEOUT': 'http_timeout',
        'BGPVIEW_MAX_ATTEMPTS': 'bgpview_max_attempts',
        'USER_AGENT': 'user_agent',
        'IP_CACHE_TTL': 'ip_cache_ttl',
        'PREFIX_CACHE_TTL': 'prefix_cache_ttl',
        'DETAILS_CACHE_TTL': 'details_cache_ttl',
        'HOST': 'host',
        'PORT': 'port',
        'SHUTDOWN_GRACE_SECONDS': 'shutdown_grace_seconds',
        'LOG_LEVEL': 'log_level',
    }

    if name in attr_map:
        settings = _get_settings()
        return getattr(settings, attr_map[name])

    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
