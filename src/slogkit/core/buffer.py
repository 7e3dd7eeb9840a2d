"""Reusable scratch objects for the encoder.

Every emit builds its output in a bytearray and, when a replace_attr hook is
configured, tracks open group names in a list. Both are borrowed from small
free lists and returned after the write so steady-state logging allocates
little.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

# Buffers that grew beyond this are dropped instead of being kept around.
MAX_BUFFER_SIZE = 64 * 1024

# Upper bound on idle items per pool.
MAX_POOLED_ITEMS = 256

# UTF-8 encoding of U+FFFD.
_REPLACEMENT = b"\xef\xbf\xbd"


class FreeList(Generic[T]):
    """A bounded, thread-safe pool of reusable objects.

    Args:
        factory: Creates a new item when the pool is empty.
        reset: Clears an item before it goes back into the pool.
        size_of: Reports an item's size, compared against max_size.
        max_items: Maximum number of idle items retained.
        max_size: Items larger than this are discarded on release.
    """

    def __init__(
        self,
        factory: Callable[[], T],
        reset: Callable[[T], None],
        *,
        size_of: Callable[[T], int] = len,
        max_items: int = MAX_POOLED_ITEMS,
        max_size: int | None = None,
    ) -> None:
        self._factory = factory
        self._reset = reset
        self._size_of = size_of
        self._max_items = max_items
        self._max_size = max_size
        self._items: list[T] = []
        self._lock = threading.Lock()

    def acquire(self) -> T:
        with self._lock:
            if self._items:
                return self._items.pop()
        return self._factory()

    def release(self, item: T) -> None:
        if self._max_size is not None and self._size_of(item) > self._max_size:
            return
        self._reset(item)
        with self._lock:
            if len(self._items) < self._max_items:
                self._items.append(item)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def _clear(item: bytearray | list) -> None:
    del item[:]


BUFFER_POOL: FreeList[bytearray] = FreeList(
    bytearray, _clear, max_size=MAX_BUFFER_SIZE
)

GROUP_LIST_POOL: FreeList[list[str]] = FreeList(list, _clear)


def encode_text(s: str) -> bytes:
    """Encode s as UTF-8 for output.

    Surrogate-escaped bytes are written back as the original bytes; any other
    lone surrogate becomes U+FFFD.
    """
    try:
        return s.encode("utf-8")
    except UnicodeEncodeError:
        pass
    out = bytearray()
    for ch in s:
        code = ord(ch)
        if 0xDC80 <= code <= 0xDCFF:
            out.append(code - 0xDC00)
        elif 0xD800 <= code <= 0xDFFF:
            out += _REPLACEMENT
        else:
            out += ch.encode("utf-8")
    return bytes(out)
