"""
app/services/verification_store.py

Purpose: One-time code state machine

- Issues a numeric code per phone number and sends it by SMS
- Tracks the expiry of each pending code
- Checks submitted SMS payloads against the expected code
- Resets (forgets) a phone number's pending code

State per phone number: NONE -> PENDING (request) -> NONE (reset).
PENDING survives verify calls whatever their outcome and becomes
logically expired in place once its TTL passes.

Verification is intentionally non-consuming: a correct code keeps
verifying until it expires or the phone number is reset.
"""

import asyncio
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Set

from app.core.logging import get_logger, LogContext
from app.services.sms_service import MessageSender, format_verification_sms
from utils.time_utils import calculate_expiry, is_expired, format_timestamp
from utils.validation_utils import normalize_phone, generate_numeric_code, message_matches_code

logger = get_logger(__name__)


@dataclass(frozen=True)
class VerificationRecord:
    phone: str
    code: str
    expires_at: float
    created_at: float


class VerificationStore:
    """
    In-memory map of phone number -> pending VerificationRecord.

    All map access goes through a lock, so the store can be shared by
    the event loop and worker threads.
    """

    def __init__(
        self,
        sender: MessageSender,
        app_hash: str,
        code_length: int = 6,
        ttl_seconds: float = 300,
        dispatch_timeout: Optional[float] = None,
        clock: Callable[[], float] = time.time
    ):
        self._sender = sender
        self._app_hash = app_hash
        self._code_length = code_length
        self._ttl_seconds = ttl_seconds
        self._dispatch_timeout = dispatch_timeout
        self._clock = clock

        self._records: Dict[str, VerificationRecord] = {}
        self._last_expiration: Optional[float] = None
        self._lock = threading.Lock()
        self._dispatch_tasks: Set[asyncio.Task] = set()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    async def request(self, phone: str) -> float:
        """
        Issues a new code for a phone number, replacing any pending one.

        The SMS is sent in a background task; delivery problems are logged
        and never reach the caller.

        Args:
            phone: Phone number to verify

        Returns:
            Expiry of the new code (epoch seconds)
        """
        key = normalize_phone(phone)
        now = self._clock()
        record = VerificationRecord(
            phone=key,
            code=generate_numeric_code(self._code_length),
            expires_at=calculate_expiry(now, self._ttl_seconds),
            created_at=now
        )

        with self._lock:
            self._purge_expired_locked(now)
            replaced = key in self._records
            self._records[key] = record
            self._last_expiration = record.expires_at

        with LogContext(phone=key):
            logger.info(
                f"Verification code issued, expires {format_timestamp(record.expires_at)} UTC"
                + (" (replaced pending code)" if replaced else "")
            )

        self._schedule_dispatch(key, format_verification_sms(record.code, self._app_hash))
        return record.expires_at

    def verify(self, phone: str, message: str) -> bool:
        """
        Checks a submitted value against the pending code.

        Matches when the value equals the code or contains it (full SMS body).
        Unknown and expired phone numbers never match. The record is left in
        place either way.
        """
        key = normalize_phone(phone)
        now = self._clock()

        with self._lock:
            record = self._records.get(key)

        with LogContext(phone=key):
            if record is None:
                logger.info("Verification failed: no pending code")
                return False

            if is_expired(record.expires_at, now):
                logger.info("Verification failed: code expired")
                return False

            if not message_matches_code(record.code, message):
                logger.info("Verification failed: code mismatch")
                return False

            logger.info("Verification succeeded")
            return True

    def reset(self, phone: str) -> bool:
        """
        Forgets the pending code for a phone number.

        Returns:
            True if there was a record to remove
        """
        key = normalize_phone(phone)
        with self._lock:
            removed = self._records.pop(key, None) is not None

        with LogContext(phone=key):
            logger.info("Verification reset" if removed else "Nothing to reset")
        return removed

    def get_expiration(self) -> Optional[float]:
        """Expiry computed by the most recent request() call, for any phone."""
        with self._lock:
            return self._last_expiration

    def get_record(self, phone: str) -> Optional[VerificationRecord]:
        with self._lock:
            return self._records.get(normalize_phone(phone))

    def purge_expired(self) -> int:
        """Drops expired records. Returns how many were removed."""
        with self._lock:
            return self._purge_expired_locked(self._clock())

    def _purge_expired_locked(self, now: float) -> int:
        expired = [key for key, record in self._records.items() if is_expired(record.expires_at, now)]
        for key in expired:
            del self._records[key]
        if expired:
            logger.debug(f"Purged {len(expired)} expired verification record(s)")
        return len(expired)

    # ------------------------------------------------------------------
    # SMS dispatch
    # ------------------------------------------------------------------

    def _schedule_dispatch(self, phone: str, body: str):
        task = asyncio.get_running_loop().create_task(self._dispatch(phone, body))
        self._dispatch_tasks.add(task)
        task.add_done_callback(self._dispatch_tasks.discard)

    async def _dispatch(self, phone: str, body: str):
        """Sends one SMS. Every failure ends here as a log line."""
        try:
            if self._dispatch_timeout:
                outcome = await asyncio.wait_for(self._sender.send(phone, body), self._dispatch_timeout)
            else:
                outcome = await self._sender.send(phone, body)
        except asyncio.TimeoutError:
            logger.error(f"SMS dispatch timed out after {self._dispatch_timeout}s", extra={"phone": phone})
            return
        except asyncio.CancelledError:
            logger.warning("SMS dispatch cancelled", extra={"phone": phone})
            raise
        except Exception as e:
            logger.error(f"SMS dispatch failed: {e}", extra={"phone": phone}, exc_info=True)
            return

        if outcome and not outcome.get("success", False):
            logger.error(f"SMS dispatch rejected: {outcome.get('error')}", extra={"phone": phone})

    async def drain(self):
        """Waits for every in-flight SMS dispatch to finish."""
        pending = list(self._dispatch_tasks)
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
