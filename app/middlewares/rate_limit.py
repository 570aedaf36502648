# app/middlewares/rate_limit.py
import time
from typing import Dict, Optional, Tuple

from fastapi import Request, status
from redis.asyncio import Redis
from starlette.middleware.base import BaseHTTPMiddleware

from app.platform.config import settings
from app.platform.logger import get_logger
from app.platform.response import api_response

logger = get_logger(__name__)

WINDOW_SECONDS = 60


def _too_many_requests(retry_after: int):
    return api_response(
        message="Too Many Requests - Rate limit exceeded.",
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        headers={"Retry-After": str(max(retry_after, 1))},
    )


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Fixed-window request limiting per client IP and path.

    Limits come from RATE_LIMITS (path -> requests per minute); unlisted paths are
    never limited. Counters live in Redis when REDIS_URL is configured, otherwise
    (or when FORCE_IN_MEMORY_RATE_LIMITER is set) in process memory.
    """

    def __init__(self, app, limits: Optional[Dict[str, int]] = None):
        super().__init__(app)
        self.limits = limits if limits is not None else settings.RATE_LIMITS
        self.redis = None
        self.memory_store: Dict[str, Tuple[int, float]] = {}

    @property
    def use_memory_store(self) -> bool:
        return settings.FORCE_IN_MEMORY_RATE_LIMITER or not settings.REDIS_URL

    async def dispatch(self, request: Request, call_next):
        client_ip = request.client.host if request.client else "testclient"

        # Skip limit if whitelisted
        if client_ip in settings.WHITELIST_IPS:
            return await call_next(request)

        path = request.url.path
        limit = self.limits.get(path)

        # If endpoint is not rate-limited, continue
        if limit is None:
            return await call_next(request)

        # ---------------------------
        # In-memory store
        # ---------------------------
        if self.use_memory_store:
            key = f"{client_ip}:{path}"
            now = time.time()
            count, expiry = self.memory_store.get(key, (0, now + WINDOW_SECONDS))

            if now > expiry:
                count = 0
                expiry = now + WINDOW_SECONDS

            if count >= limit:
                logger.warning(f"Rate limit exceeded for {client_ip} on {path}")
                return _too_many_requests(int(expiry - now))

            self.memory_store[key] = (count + 1, expiry)
            return await call_next(request)

        # ---------------------------
        # Redis store
        # ---------------------------
        if self.redis is None:
            self.redis = Redis.from_url(settings.REDIS_URL, decode_responses=True)

        key = f"rl:{client_ip}:{path}"
        current_count = await self.redis.get(key)

        if current_count is None:
            await self.redis.set(key, 1, ex=WINDOW_SECONDS)
        else:
            if int(current_count) >= limit:
                ttl = await self.redis.ttl(key)
                logger.warning(f"Rate limit exceeded for {client_ip} on {path}")
                return _too_many_requests(ttl)
            await self.redis.incr(key)

        return await call_next(request)
