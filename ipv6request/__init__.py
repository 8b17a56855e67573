"""Look up whether an ISP announces IPv6 and draft a request for it."""

__version__ = "0.1.0"
