"""Cache for the Lark app access token."""

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field


TOKEN_TTL_SECONDS = 3000


def is_fresh(now: int, issued_at: int, ttl: int = TOKEN_TTL_SECONDS) -> bool:
    """Check whether a token issued at issued_at may still be used at now."""
    return now - issued_at <= ttl


@dataclass
class TokenCache:
    """Holds a single bearer token and the time it was obtained.

    The cache is refreshed lazily. Concurrent callers that find it stale may
    each run the exchange; the last one to finish wins.
    """

    token: str | None = None
    issued_at: int = 0
    clock: Callable[[], float] = field(default=time.time, repr=False)

    async def get_access_token(self, exchange: Callable[[], Awaitable[str]]) -> str:
        """Return the cached token, running exchange first if it is stale.

        Args:
            exchange: Coroutine function that obtains a fresh token from the
                      upstream auth endpoint.

        Raises:
            UpstreamAuthError: If the exchange fails. The cache is left as is.
        """
        now = int(self.clock())
        if self.token and is_fresh(now, self.issued_at):
            return self.token

        token = await exchange()
        self.token = token
        self.issued_at = now
        return token
