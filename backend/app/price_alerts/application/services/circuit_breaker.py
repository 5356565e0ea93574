"""Consecutive-failure circuit breaker for a single data source.

States:
  CLOSED -> normal operation, calls pass through
  OPEN   -> failure threshold reached, calls are skipped until the
            cooldown elapses; the next call after that closes it again
"""

import logging
import threading
import time
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_THRESHOLD = 5
DEFAULT_COOLDOWN_SECONDS = 60.0


class CircuitState(str, Enum):
    """Circuit breaker states."""

    CLOSED = "closed"
    OPEN = "open"


class CircuitBreaker:
    """Thread-safe breaker guarding one dependency.

    The instance holds all of its state, so tests and processes can build
    independent breakers. The lock is only taken around counter and
    timestamp updates, never across a call to the dependency.
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = DEFAULT_FAILURE_THRESHOLD,
        cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if failure_threshold < 1:
            raise ValueError("failure_threshold must be at least 1")
        self._name = name
        self._failure_threshold = failure_threshold
        self._cooldown_seconds = cooldown_seconds
        self._clock = clock
        self._failure_count = 0
        self._opened_at: Optional[float] = None
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def failure_count(self) -> int:
        return self._failure_count

    @property
    def state(self) -> CircuitState:
        with self._lock:
            self._maybe_close()
            return CircuitState.OPEN if self._opened_at is not None else CircuitState.CLOSED

    @property
    def is_open(self) -> bool:
        return self.state == CircuitState.OPEN

    def remaining_cooldown(self) -> float:
        """Seconds until an open breaker closes again (0 when closed)."""
        with self._lock:
            if self._opened_at is None:
                return 0.0
            return max(0.0, self._cooldown_seconds - (self._clock() - self._opened_at))

    def allow_request(self) -> bool:
        """Whether the dependency may be called right now."""
        return self.state == CircuitState.CLOSED

    def record_success(self) -> None:
        """Reset the consecutive-failure counter."""
        with self._lock:
            self._failure_count = 0
            self._opened_at = None

    def record_failure(self) -> None:
        """Count a failure and open the breaker at the threshold."""
        with self._lock:
            self._failure_count += 1
            if self._opened_at is None and self._failure_count >= self._failure_threshold:
                self._opened_at = self._clock()
                logger.warning(
                    "Circuit breaker '%s' opened after %d consecutive failures; "
                    "cooling down for %.0fs",
                    self._name,
                    self._failure_count,
                    self._cooldown_seconds,
                )

    def _maybe_close(self) -> None:
        """OPEN -> CLOSED once the cooldown has elapsed. Caller holds the lock."""
        if self._opened_at is None:
            return
        if self._clock() - self._opened_at >= self._cooldown_seconds:
            self._opened_at = None
            self._failure_count = 0
            logger.info("Circuit breaker '%s': open -> closed", self._name)
