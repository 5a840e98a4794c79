"""Registration markers: at-most-once bookkeeping for registrar types."""

import threading
from typing import Hashable, Set


class RegistrationMarkers:
    """Set of markers (registrar classes) that have already been processed.

    Owned by a ``ServiceCollection`` rather than held globally, so each
    builder tracks its own registrations and tests stay isolated.
    """

    def __init__(self) -> None:
        """Start empty."""
        self._marked: Set[Hashable] = set()
        self._lock = threading.Lock()

    def try_mark(self, marker: Hashable) -> bool:
        """Mark *marker* as processed.

        Returns:
            True if this call marked it, False if it was already marked.
        """
        with self._lock:
            if marker in self._marked:
                return False
            self._marked.add(marker)
            return True

    def is_marked(self, marker: Hashable) -> bool:
        """Whether *marker* has been processed."""
        with self._lock:
            return marker in self._marked

    def __contains__(self, marker: Hashable) -> bool:
        return self.is_marked(marker)

    def __len__(self) -> int:
        with self._lock:
            return len(self._marked)
