# context.py
from __future__ import annotations

import threading
import time
from typing import Optional

from .errors import StepCancelledError


class StepContext:
    """
    Cancellation scope shared by the steps of one run.

    Steps call check() before every blocking catalog call; once the context
    is cancelled or its deadline has passed, check() raises
    StepCancelledError and the step stops where it is.
    """

    def __init__(self, timeout: Optional[float] = None):
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def check(self) -> None:
        if self._event.is_set():
            raise StepCancelledError("cancelled")
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            raise StepCancelledError("deadline exceeded")
