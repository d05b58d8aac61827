"""
Expiring one-time codes that gate account creation.

A code is bound to an email together with the pending sign-up payload and can
be exchanged for that payload once. Entries live in a `CodeCache`; the default
in-memory cache is local to the process, so a code issued by one server
instance cannot be redeemed on another. Share a cache across instances when
running more than one.
"""

import asyncio
import logging
import random
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Protocol, Tuple

from social_api.database.schemas import normalize_email
from social_api.errors import (
    VerificationCodeExpired,
    VerificationCodeMismatch,
    VerificationCodeNotFound,
)

logger = logging.getLogger(__name__)

DEFAULT_CODE_TTL = timedelta(minutes=10)
DEFAULT_SWEEP_INTERVAL_SECONDS = 300


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PendingSignup:
    """A sign-up waiting for its verification code"""
    code: str
    email: str
    name: str
    password: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


class CodeCache(Protocol):
    """Time-bounded key-value store for pending sign-ups, keyed by email."""

    def get(self, email: str) -> Optional[PendingSignup]:
        ...

    def set(self, email: str, entry: PendingSignup) -> None:
        ...

    def delete(self, email: str) -> None:
        ...

    def items(self) -> List[Tuple[str, PendingSignup]]:
        ...


class InMemoryCodeCache:
    """Process-local cache; lost on restart."""

    def __init__(self):
        self._entries: Dict[str, PendingSignup] = {}
        self._lock = threading.Lock()

    def get(self, email: str) -> Optional[PendingSignup]:
        with self._lock:
            return self._entries.get(email)

    def set(self, email: str, entry: PendingSignup) -> None:
        with self._lock:
            self._entries[email] = entry

    def delete(self, email: str) -> None:
        with self._lock:
            self._entries.pop(email, None)

    def items(self) -> List[Tuple[str, PendingSignup]]:
        with self._lock:
            return list(self._entries.items())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def generate_code() -> str:
    """Six digits, uniform over 100000-999999"""
    return str(random.randint(100000, 999999))


class VerificationCodeStore:
    """Issues and redeems sign-up verification codes"""

    def __init__(
        self,
        cache: Optional[CodeCache] = None,
        ttl: timedelta = DEFAULT_CODE_TTL,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.cache = cache if cache is not None else InMemoryCodeCache()
        self.ttl = ttl
        self.clock = clock

    def issue(self, email: str, name: str, password: str) -> str:
        """
        Issue a code for an email, replacing any code still pending for it.

        Returns the code; delivering it to the user is up to the caller.
        """
        email = normalize_email(email)
        code = generate_code()
        self.cache.set(
            email,
            PendingSignup(
                code=code,
                email=email,
                name=name,
                password=password,
                expires_at=self.clock() + self.ttl,
            ),
        )
        self.sweep()
        logger.info(f"Issued verification code for {email}")
        return code

    def redeem(self, email: str, code: str) -> PendingSignup:
        """
        Exchange a code for its pending sign-up. Each code works once.

        :raises VerificationCodeNotFound: nothing pending for the email.
        :raises VerificationCodeExpired: the code outlived its TTL; it is discarded.
        :raises VerificationCodeMismatch: the code differs from the one issued.
        """
        email = normalize_email(email)
        entry = self.cache.get(email)
        if entry is None:
            raise VerificationCodeNotFound(email)

        if entry.is_expired(self.clock()):
            self.cache.delete(email)
            raise VerificationCodeExpired(email)

        if entry.code != code.strip():
            raise VerificationCodeMismatch(email)

        self.cache.delete(email)
        logger.info(f"Redeemed verification code for {email}")
        return entry

    def sweep(self) -> int:
        """Drop every expired entry; returns how many were removed."""
        now = self.clock()
        removed = 0
        for email, entry in self.cache.items():
            # Skip entries replaced since the snapshot
            if entry.is_expired(now) and self.cache.get(email) is entry:
                self.cache.delete(email)
                removed += 1
        if removed:
            logger.debug(f"Swept {removed} expired verification codes")
        return removed

    async def run_periodic_sweep(self, interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS) -> None:
        """Sweep forever at a fixed interval; cancel the task to stop."""
        while True:
            await asyncio.sleep(interval_seconds)
            self.sweep()
