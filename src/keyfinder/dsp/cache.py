"""
Thread-safe cache of expensive-to-build DSP objects keyed by their parameters.
"""

import logging
import threading
from typing import Any, Callable, Dict, Hashable, Tuple

logger = logging.getLogger(__name__)


class InstanceCache:
    """
    Maps a parameter tuple to the instance built from it.

    Lookups and construction on a miss run under one lock, so sessions in
    different threads sharing a cache never build the same entry twice.
    Entries are never evicted.
    """

    def __init__(self, factory: Callable[..., Any]):
        self._factory = factory
        self._instances: Dict[Tuple[Hashable, ...], Any] = {}
        self._lock = threading.Lock()

    def get(self, *key: Hashable) -> Any:
        with self._lock:
            instance = self._instances.get(key)
            if instance is None:
                logger.debug("Building %s for %s", getattr(self._factory, "__name__", self._factory), key)
                instance = self._factory(*key)
                self._instances[key] = instance
            return instance

    def __len__(self) -> int:
        with self._lock:
            return len(self._instances)

    def __contains__(self, key: Tuple[Hashable, ...]) -> bool:
        with self._lock:
            return key in self._instances

    def clear(self):
        with self._lock:
            self._instances.clear()
