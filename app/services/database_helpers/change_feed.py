# /app/services/database_helpers/change_feed.py

"""
Live change notification for the document collections.

A `ChangeFeed` keeps one listener list per collection. The repository
publishes a fresh snapshot of a collection after every committed write to it.
Collections are independent streams: nothing orders a `classes` event
relative to a `students` event.

Writers hold `ChangeFeed.lock` from their commit until their snapshot has
been published, so snapshots reach listeners in commit order.
"""

import logging
import threading
from collections import defaultdict
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)

CLASSES = "classes"
STUDENTS = "students"
COLLECTIONS = (CLASSES, STUDENTS)

Listener = Callable[[list], None]


class ChangeFeed:
    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)
        self.lock = threading.RLock()

    def add_listener(self, collection: str, listener: Listener) -> Callable[[], None]:
        """Registers a listener and returns the callable that removes it again."""
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection '{collection}'.")
        self._listeners[collection].append(listener)

        def unsubscribe():
            if listener in self._listeners[collection]:
                self._listeners[collection].remove(listener)

        return unsubscribe

    def has_listeners(self, collection: str) -> bool:
        return bool(self._listeners.get(collection))

    def publish(self, collection: str, snapshot: list):
        # Copy so a listener may unsubscribe while being notified.
        for listener in list(self._listeners.get(collection, ())):
            listener(snapshot)
        logger.debug("Published %d %s to %d listener(s)", len(snapshot), collection,
                     len(self._listeners.get(collection, ())))


# Process-wide feed used by the application; tests build their own.
change_feed = ChangeFeed()
