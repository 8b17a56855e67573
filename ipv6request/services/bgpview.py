"""Thin client for the BGPView routing-data API."""

import logging
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ipv6request.errors import (
    DecodeError,
    RateLimited,
    TransportError,
    UpstreamStatusError,
)
from ipv6request.services.retry import RetryPolicy

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def build_http_client(*, timeout: float, user_agent: str) -> httpx.AsyncClient:
    """Create the long-lived client shared by every lookup."""

    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
        headers={"User-Agent": user_agent, "Accept": "application/json"},
    )


class BGPViewClient:
    """Issue GETs through a :class:`RetryPolicy` and decode the JSON envelope.

    Every failure is turned into one of the :mod:`ipv6request.errors`
    classes; callers never see raw ``httpx`` exceptions.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        base_url: str,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        self._client = http_client
        self.base_url = base_url.rstrip("/")
        self.retry_policy = retry_policy or RetryPolicy()

    async def get(
        self,
        path: str,
        model: Type[M],
        *,
        subject: str,
        what: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> M:
        """Fetch ``path`` and validate the body against ``model``.

        ``subject`` names the queried thing ("ASN 64500", "IP 192.0.2.1")
        and ``what`` the endpoint ("prefixes", "ASN details") in error
        messages.
        """

        url = f"{self.base_url}{path}"

        async def _request() -> httpx.Response:
            return await self._client.get(url, params=params)

        try:
            response = await self.retry_policy.run(_request)
        except httpx.HTTPError as exc:
            # retried transport failures plus redirect loops and bad encodings
            raise TransportError(
                f"BGPView {what} request failed for {subject}: {exc}",
                subject=subject,
            ) from exc

        if response.status_code == 429:
            raise RateLimited(
                f"BGPView API rate limit exceeded for {subject}. "
                "Please try again in a few minutes",
                subject=subject,
            )
        if response.status_code != 200:
            raise UpstreamStatusError(
                f"BGPView {what} API returned status {response.status_code} "
                f"for {subject}",
                response.status_code,
                subject=subject,
            )

        try:
            return model.model_validate_json(response.content)
        except ValidationError as exc:
            logger.info("Unexpected BGPView %s payload for %s: %s", what, subject, exc)
            raise DecodeError(
                f"failed to parse BGPView {what} response for {subject}",
                subject=subject,
            ) from exc
