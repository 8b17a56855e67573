import logging
import time

from fastapi import Request, Response

logger = logging.getLogger("ipv6request.access")


async def log_stats(request: Request, call_next):
    started = time.perf_counter()
    response: Response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000

    headers = request.headers
    remote_address = headers.get("x-forwarded-for") or (
        request.client.host if request.client else None
    )
    logger.info(
        "%s %s status=%d duration_ms=%.1f remote=%s user_agent=%s",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
        remote_address,
        headers.get("user-agent"),
    )
    return response
