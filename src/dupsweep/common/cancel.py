"""Cooperative cancellation shared by discovery and the scan driver."""

import threading


class CancelToken:
    """Thread-safe flag asking a running scan to stop at the next checkpoint."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        """Whether cancellation was requested."""
        return self._event.is_set()
