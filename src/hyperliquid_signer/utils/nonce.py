"""Millisecond nonce source for callers that do not track their own nonces"""

import threading
import time
from typing import Callable, Optional


class NonceSource:
    """Thread-safe generator of strictly increasing millisecond timestamps.

    Two calls landing in the same millisecond get consecutive values, so the
    returned nonces never repeat within one process.
    """
    
    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.time
        self._lock = threading.Lock()
        self._last = 0
    
    def next_nonce(self) -> int:
        """Return the next nonce"""
        now = int(self._clock() * 1000)
        with self._lock:
            self._last = max(now, self._last + 1)
            return self._last
    
    def __call__(self) -> int:
        return self.next_nonce()
