"""
Replay protection for verifiers.

A verifier must never issue two challenges for the same commitment: two responses to the same
commitment reveal the prover's secret (see :py:func:`zkschnorr.session.extract_secret`). A
:py:class:`ReplayWindow` remembers recently seen commitments and is shared by all verifiers
that should reject each other's replays.
"""

import collections
import logging
import threading
import time

from zkschnorr.consts import DEFAULT_REPLAY_WINDOW
from zkschnorr.exceptions import ReplayDetectedError, ReplayWindowFullError

logger = logging.getLogger(__name__)


class ReplayWindow:
    """
    Thread-safe, time-windowed set of seen commitments.

    Args:
        window: Number of seconds an entry is remembered.
        max_entries: Optional bound on the number of live entries. A full window refuses new
            commitments until old ones expire.
        clock: Callable returning a monotonic time in seconds.
    """

    def __init__(
        self, window=DEFAULT_REPLAY_WINDOW, max_entries=None, clock=time.monotonic
    ):
        if window <= 0:
            raise ValueError("Replay window must be positive")
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.window = window
        self.max_entries = max_entries
        self._clock = clock
        self._seen = collections.OrderedDict()
        self._lock = threading.Lock()

    def _evict(self, now):
        while self._seen:
            key, seen_at = next(iter(self._seen.items()))
            if now - seen_at < self.window:
                break
            del self._seen[key]

    def check_and_add(self, key):
        """
        Record ``key``, failing if it was already recorded within the window.

        The membership check and the insertion happen under the same lock, so two concurrent
        sessions can never both accept the same commitment.

        Raises:
            ReplayDetectedError: If ``key`` was seen within the window.
            ReplayWindowFullError: If ``max_entries`` live entries are already recorded.
        """
        with self._lock:
            now = self._clock()
            seen_at = self._seen.get(key)
            if seen_at is not None and now - seen_at < self.window:
                logger.warning("Replayed commitment detected")
                raise ReplayDetectedError(
                    "Commitment already seen within the replay window"
                )
            self._evict(now)
            self._seen.pop(key, None)
            if self.max_entries is not None and len(self._seen) >= self.max_entries:
                logger.warning("Replay window full, refusing commitment")
                raise ReplayWindowFullError(
                    "Replay window holds {} live entries".format(len(self._seen))
                )
            self._seen[key] = now

    def __contains__(self, key):
        with self._lock:
            seen_at = self._seen.get(key)
            return seen_at is not None and self._clock() - seen_at < self.window

    def __len__(self):
        with self._lock:
            self._evict(self._clock())
            return len(self._seen)
