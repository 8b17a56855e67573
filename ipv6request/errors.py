"""Failure classes raised by the BGPView lookups.

Every lookup failure derives from :class:`UpstreamError` so route code can
decide per call whether to surface or drop it. ``str(exc)`` is the message
shown to the end user.
"""

from typing import Optional


class UpstreamError(Exception):
    """Base class for a failed lookup against the routing-data API."""

    def __init__(self, message: str, *, subject: Optional[str] = None) -> None:
        super().__init__(message)
        self.subject = subject


class TransportError(UpstreamError):
    """Network, DNS or timeout failure that survived every retry."""


class RateLimited(UpstreamError):
    """The API kept answering 429 until the attempt budget ran out."""


class UpstreamStatusError(UpstreamError):
    """The API answered with a non-200 status other than 429."""

    def __init__(
        self,
        message: str,
        status_code: int,
        *,
        subject: Optional[str] = None,
    ) -> None:
        super().__init__(message, subject=subject)
        self.status_code = status_code


class DecodeError(UpstreamError):
    """The response body was not JSON or did not have the expected shape."""


class NotFound(UpstreamError):
    """The IP address is not covered by any announced prefix."""


class InvalidASN(ValueError):
    """A submitted ASN is not a positive integer."""
