import threading
import time
from collections import Counter, deque

from src.models.verification import VerificationFailure


class VerificationMetrics:
    """Collects webhook verification outcomes over a rolling window."""

    def __init__(self, window_seconds: float = 300):
        self._window_seconds = window_seconds
        self._accepted: deque[float] = deque()  # timestamps
        self._rejected: deque[tuple[float, VerificationFailure]] = deque()
        self._lock = threading.Lock()

    def record_accepted(self) -> None:
        with self._lock:
            now = time.monotonic()
            self._prune(now)
            self._accepted.append(now)

    def record_rejected(self, reason: VerificationFailure) -> None:
        with self._lock:
            now = time.monotonic()
            self._prune(now)
            self._rejected.append((now, reason))

    def _prune(self, now: float) -> None:
        """Drop entries older than the window. Caller holds the lock."""
        cutoff = now - self._window_seconds
        while self._accepted and self._accepted[0] < cutoff:
            self._accepted.popleft()
        while self._rejected and self._rejected[0][0] < cutoff:
            self._rejected.popleft()

    def accepted_count_in_window(self) -> int:
        with self._lock:
            self._prune(time.monotonic())
            return len(self._accepted)

    def rejected_count_in_window(self, reason: VerificationFailure | None = None) -> int:
        with self._lock:
            self._prune(time.monotonic())
            if reason is None:
                return len(self._rejected)
            return len([r for _, r in self._rejected if r == reason])

    def rejections_by_reason(self) -> dict[VerificationFailure, int]:
        with self._lock:
            self._prune(time.monotonic())
            return dict(Counter(r for _, r in self._rejected))

    def total_in_window(self) -> int:
        with self._lock:
            self._prune(time.monotonic())
            return len(self._accepted) + len(self._rejected)

    def rejection_rate(self) -> float:
        """Rejection rate in the current rolling window (0.0 to 1.0)."""
        with self._lock:
            self._prune(time.monotonic())
            total = len(self._accepted) + len(self._rejected)
            if total == 0:
                return 0.0
            return len(self._rejected) / total

    def reset(self) -> None:
        with self._lock:
            self._accepted.clear()
            self._rejected.clear()
