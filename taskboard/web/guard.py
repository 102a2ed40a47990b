"""
Duplicate-submission guard for page forms
Every rendered form carries a one-time token; a POST whose token was
already claimed is a repeat (double click, resent request) and is dropped.
"""
import logging
import secrets
import time
from typing import Callable

logger = logging.getLogger(__name__)

# Claimed tokens are remembered this long (seconds)
SUBMISSION_TOKEN_TTL = 600


class SubmissionGuard:
    """
    In-process registry of claimed form tokens

    claim() does not await, so of two concurrent requests carrying the
    same token exactly one wins.
    """

    def __init__(
        self,
        ttl: float = SUBMISSION_TOKEN_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl
        self._clock = clock
        self._claimed: dict[str, float] = {}

    def issue(self) -> str:
        """New token for one rendered form"""
        return secrets.token_urlsafe(16)

    def claim(self, token: str) -> bool:
        """
        Mark token as used

        Returns:
            True the first time a token is claimed; False for an empty
            token or one claimed before
        """
        now = self._clock()
        self._prune(now)
        if not token or token in self._claimed:
            logger.debug("Dropping repeated or untokened form submission")
            return False
        self._claimed[token] = now + self._ttl
        return True

    def _prune(self, now: float) -> None:
        expired = [token for token, expiry in self._claimed.items() if expiry <= now]
        for token in expired:
            del self._claimed[token]
