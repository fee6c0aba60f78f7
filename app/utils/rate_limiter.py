"""
Rate limiting for API endpoints
"""
import time
from collections import defaultdict, deque
from typing import Deque, Dict
import logging

from fastapi import Request, HTTPException

from app.config import settings

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    In-memory sliding-window rate limiter

    Keyed by client IP. X-Forwarded-For is only honoured when the app runs
    behind a trusted proxy (TRUST_FORWARDED_FOR). Per-process only; multiple
    workers each keep their own windows.
    """

    MINUTE = 60
    HOUR = 3600

    def __init__(
        self,
        requests_per_minute: int = 60,
        requests_per_hour: int = 1000,
        trust_forwarded_for: bool = False
    ):
        self.requests_per_minute = requests_per_minute
        self.requests_per_hour = requests_per_hour
        self.trust_forwarded_for = trust_forwarded_for

        # {client_id: timestamps within the last hour, oldest first}
        self.history: Dict[str, Deque[float]] = defaultdict(deque)

    def _get_client_id(self, request: Request) -> str:
        """Extract client identifier from request"""
        if self.trust_forwarded_for:
            forwarded = request.headers.get("X-Forwarded-For")
            if forwarded:
                return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    def _cleanup_old_entries(self, now: float) -> None:
        """Drop timestamps older than an hour and forget idle clients"""
        cutoff = now - self.HOUR

        for client_id in list(self.history.keys()):
            timestamps = self.history[client_id]
            while timestamps and timestamps[0] <= cutoff:
                timestamps.popleft()

            # Remove empty entries
            if not timestamps:
                del self.history[client_id]

    def _reject(self, client_id: str, limit: int, window: str, retry_after: int) -> None:
        logger.warning(f"Rate limit exceeded ({window}): {client_id}")
        raise HTTPException(
            status_code=429,
            detail={
                "error": "rate_limit_exceeded",
                "message": f"Too many requests. Limit: {limit} requests per {window}",
                "retry_after": retry_after
            }
        )

    async def check_rate_limit(self, request: Request) -> None:
        """
        Check if request exceeds rate limits

        Raises:
            HTTPException: 429 if rate limit exceeded
        """
        client_id = self._get_client_id(request)
        now = time.time()
        self._cleanup_old_entries(now)

        timestamps = self.history.get(client_id, ())
        minute_requests = sum(1 for ts in timestamps if ts > now - self.MINUTE)
        hour_requests = len(timestamps)

        if minute_requests >= self.requests_per_minute:
            self._reject(client_id, self.requests_per_minute, "minute", self.MINUTE)

        if hour_requests >= self.requests_per_hour:
            self._reject(client_id, self.requests_per_hour, "hour", self.HOUR)

        self.history[client_id].append(now)

        logger.debug(f"Rate limit check passed: {client_id} (minute: {minute_requests + 1}, hour: {hour_requests + 1})")

    def reset(self) -> None:
        self.history.clear()


# Global instance
rate_limiter = RateLimiter(
    requests_per_minute=settings.RATE_LIMIT_PER_MINUTE,
    requests_per_hour=settings.RATE_LIMIT_PER_HOUR,
    trust_forwarded_for=settings.TRUST_FORWARDED_FOR
)
