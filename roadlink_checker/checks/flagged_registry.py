"""FlaggedRegistry - Way identities that a check has already handled.

A way can be entered from any of its edges, possibly by two worker threads at
the same time. mark() is an atomic check-and-mark, so exactly one caller wins
and a way is flagged at most once.
"""

import threading


class FlaggedRegistry:
    """Thread-safe set of way identifiers.

    Example:
        registry = FlaggedRegistry()
        registry.mark(42)  # True, first time
        registry.mark(42)  # False, already marked
    """

    def __init__(self) -> None:
        self._identifiers: set[int] = set()
        self._lock = threading.Lock()

    def mark(self, identifier: int) -> bool:
        """Mark an identifier.

        Returns:
            True if the identifier was newly marked, False if it already was.
        """
        with self._lock:
            if identifier in self._identifiers:
                return False
            self._identifiers.add(identifier)
            return True

    def is_flagged(self, identifier: int) -> bool:
        with self._lock:
            return identifier in self._identifiers

    def clear(self) -> None:
        with self._lock:
            self._identifiers.clear()

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._identifiers

    def __len__(self) -> int:
        with self._lock:
            return len(self._identifiers)
