"""Bounded memory of recently shortlisted destinations."""
from __future__ import annotations

import logging
import os
from collections import OrderedDict
from typing import Iterable, List, Tuple

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("INSPIRE_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

Key = Tuple[str, str]


class RecencyCache:
    """FIFO of ``(city, country)`` keys, oldest evicted first.

    One instance lives for the lifetime of the process and is shared by all
    requests without locking. Concurrent appends may interleave; the cache is
    only a soft re-ranking hint and is never consulted for hard constraints.
    """

    def __init__(self, capacity: int = 30):
        self.capacity = max(1, int(capacity))
        self._keys: "OrderedDict[Key, None]" = OrderedDict()

    @staticmethod
    def make_key(city: str, country: str) -> Key:
        return ((city or "").strip().lower(), (country or "").strip().lower())

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def add(self, key: Key) -> None:
        if key in self._keys:
            self._keys.move_to_end(key)
            return
        self._keys[key] = None
        while len(self._keys) > self.capacity:
            evicted, _ = self._keys.popitem(last=False)
            logger.debug("Recency cache evicted %s|%s", *evicted)

    def extend(self, keys: Iterable[Key]) -> None:
        for key in keys:
            self.add(key)

    def keys(self) -> List[Key]:
        return list(self._keys)
