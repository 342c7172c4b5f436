"""
Separate-chaining hash map used as the node index for graphs.

Each bucket is a list of _Entry pairs. When the load factor reaches 0.8 the
bucket array doubles and every entry is rehashed before put() returns.
"""

from dataclasses import dataclass
from typing import Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar
import logging

from errors import DuplicateKeyError, KeyNotFoundError, NullKeyError

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

DEFAULT_CAPACITY = 64
LOAD_FACTOR_THRESHOLD = 0.8

logger = logging.getLogger(__name__)


@dataclass
class _Entry(Generic[K, V]):
    key: K
    value: V


class HashtableMap(Generic[K, V]):
    """
    Key -> value map with chaining and synchronous doubling on growth.

    Keys must be hashable and not None. Iteration order follows bucket
    layout and is not meaningful to callers.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("Capacity must be greater than 0.")
        self._table: List[List[_Entry[K, V]]] = [[] for _ in range(capacity)]
        self._size = 0
        # Instrumentation: number of rehash events since construction.
        self.resize_count = 0

    # --- Map API -------------------------------------------------------------

    def put(self, key: K, value: V) -> None:
        """
        Insert a new key/value pair.

        Raises:
            NullKeyError: if key is None.
            DuplicateKeyError: if key is already present.
        """
        bucket = self._bucket_for(key)
        if self._find(bucket, key) is not None:
            raise DuplicateKeyError(f"Duplicate key {key!r}: key already exists.")

        bucket.append(_Entry(key, value))
        self._size += 1

        if self._size / len(self._table) >= LOAD_FACTOR_THRESHOLD:
            self._rehash()

    def get(self, key: K) -> V:
        """Return the value stored for key, or raise KeyNotFoundError."""
        entry = self._find(self._bucket_for(key), key)
        if entry is None:
            raise KeyNotFoundError(f"Key {key!r} not found in the map.")
        return entry.value

    def contains_key(self, key: K) -> bool:
        if key is None:
            return False
        return self._find(self._bucket_for(key), key) is not None

    def remove(self, key: K) -> V:
        """Remove key and return the value it mapped to."""
        bucket = self._bucket_for(key)
        for i, entry in enumerate(bucket):
            if entry.key == key:
                del bucket[i]
                self._size -= 1
                return entry.value
        raise KeyNotFoundError(f"Key {key!r} not found in the map.")

    def clear(self) -> None:
        """Drop every entry; capacity is left unchanged."""
        for bucket in self._table:
            bucket.clear()
        self._size = 0

    def size(self) -> int:
        return self._size

    def capacity(self) -> int:
        return len(self._table)

    def keys(self) -> List[K]:
        return [entry.key for bucket in self._table for entry in bucket]

    def values(self) -> List[V]:
        return [entry.value for bucket in self._table for entry in bucket]

    def items(self) -> List[Tuple[K, V]]:
        return [(entry.key, entry.value) for bucket in self._table for entry in bucket]

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return self.contains_key(key)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[K]:
        return iter(self.keys())

    # --- Internal helpers ---------------------------------------------------

    def _bucket_for(self, key: K) -> List[_Entry[K, V]]:
        if key is None:
            raise NullKeyError("Key cannot be None.")
        return self._table[hash(key) % len(self._table)]

    @staticmethod
    def _find(bucket: List[_Entry[K, V]], key: K) -> Optional[_Entry[K, V]]:
        for entry in bucket:
            if entry.key == key:
                return entry
        return None

    def _rehash(self) -> None:
        old_table = self._table
        new_capacity = len(old_table) * 2
        new_table: List[List[_Entry[K, V]]] = [[] for _ in range(new_capacity)]

        # Entries move as-is: keys were unique in the old table so no
        # duplicate check is needed here.
        for bucket in old_table:
            for entry in bucket:
                new_table[hash(entry.key) % new_capacity].append(entry)

        self._table = new_table
        self.resize_count += 1
        logger.debug(
            "Resized hashtable from %d to %d buckets (%d entries)",
            len(old_table),
            new_capacity,
            self._size,
        )
