# textruns/cache.py

from __future__ import annotations

import dataclasses
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Iterable, List, Optional

from textruns.compose import compose_styles
from textruns.models import (
    DEFAULT_HIGHLIGHT_COLOR,
    Emphasis,
    Highlight,
    MergedHighlight,
    StyledSegment,
)
from textruns.resolve import merge_highlights

logger = logging.getLogger(__name__)

_MISSING = object()


def value_key(obj: Any) -> Hashable:
    """
    Hashable key describing the value of obj.

    Scalars are tagged with their concrete type so values that compare equal
    across types (1, 1.0, True) never share a key, also inside sets and
    mappings. Sequences keep their order.
    """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return (
            type(obj).__name__,
            tuple(value_key(getattr(obj, f.name)) for f in dataclasses.fields(obj)),
        )
    if isinstance(obj, (list, tuple)):
        return ("seq", tuple(value_key(item) for item in obj))
    if isinstance(obj, (set, frozenset)):
        return ("set", frozenset(value_key(item) for item in obj))
    if isinstance(obj, dict):
        return ("map", frozenset((value_key(k), value_key(v)) for k, v in obj.items()))
    return (type(obj).__name__, obj)


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    size: int


class ResultCache:
    """
    Thread-safe LRU memo for merge and composite results, keyed by input value.

    maxsize=None keeps everything; maxsize=0 disables storage.
    """

    def __init__(self, maxsize: Optional[int] = 256) -> None:
        if maxsize is not None and maxsize < 0:
            raise ValueError(f"maxsize must be >= 0 or None, got {maxsize}")
        self._store: "OrderedDict[Hashable, tuple]" = OrderedDict()
        self._maxsize = maxsize
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        return len(self._store)

    def get(self, key: Hashable) -> Any:
        with self._lock:
            value = self._store.get(key, _MISSING)
            if value is _MISSING:
                self._misses += 1
                return _MISSING
            self._hits += 1
            self._store.move_to_end(key)
            return value

    def set(self, key: Hashable, value: tuple) -> None:
        if self._maxsize == 0:
            return
        with self._lock:
            self._store[key] = value
            self._store.move_to_end(key)
            if self._maxsize is not None and len(self._store) > self._maxsize:
                self._store.popitem(last=False)
                logger.debug("Evicted oldest cache entry (maxsize=%s)", self._maxsize)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(hits=self._hits, misses=self._misses, size=len(self._store))

    def _memo(self, key: Hashable, compute: Callable[[], list]) -> list:
        cached = self.get(key)
        if cached is not _MISSING:
            logger.debug("Cache hit for %s", key[0])
            return list(cached)

        result = compute()
        # Entries are immutable once stored; a concurrent duplicate insert is harmless
        self.set(key, tuple(result))
        return list(result)

    def merge(
        self,
        highlights: Iterable[Highlight],
        default_color: str = DEFAULT_HIGHLIGHT_COLOR,
    ) -> List[MergedHighlight]:
        spans = list(highlights)
        key = ("merge", value_key(default_color), value_key(spans))
        return self._memo(key, lambda: merge_highlights(spans, default_color))

    def compose(
        self,
        highlights: Iterable[Highlight],
        emphases: Iterable[Emphasis],
        default_color: str = DEFAULT_HIGHLIGHT_COLOR,
    ) -> List[StyledSegment]:
        spans = list(highlights)
        layers = list(emphases)
        key = ("compose", value_key(default_color), value_key(spans), value_key(layers))
        return self._memo(key, lambda: compose_styles(spans, layers, default_color))
