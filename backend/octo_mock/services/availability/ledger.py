# backend/octo_mock/services/availability/ledger.py
"""
Capacity ledger: units booked per slot.

Slots are recomputed on every read, so the running total of booked units
per (product, option, slot id) is the only mutable availability state.
`reserve` is a single atomic read-compare-write per key; different keys
never wait on each other.

Backends:
  InMemoryCapacityLedger  one lock per key
  RedisCapacityLedger     Lua script: compare and INCRBY in one step

Redis key format: capacity:{product_id}:{option_id}:{availability_id}
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass

from redis import Redis

from ...errors import CapacityExceededError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlotKey:
    product_id: str
    option_id: str
    availability_id: str


class CapacityLedger(ABC):

    @abstractmethod
    def booked(self, key: SlotKey) -> int:
        """Units currently held against the slot."""
        ...

    @abstractmethod
    def reserve(self, key: SlotKey, quantity: int, capacity: int) -> int:
        """
        Hold `quantity` units if the slot still has room for them.

        Returns the remaining capacity after the reservation.
        Raises CapacityExceededError and leaves the counter untouched otherwise.
        """
        ...

    @abstractmethod
    def release(self, key: SlotKey, quantity: int) -> None:
        """Give back units previously reserved."""
        ...

    def remaining(self, key: SlotKey, capacity: int) -> int:
        return max(capacity - self.booked(key), 0)


class InMemoryCapacityLedger(CapacityLedger):

    def __init__(self):
        self._booked: dict[SlotKey, int] = defaultdict(int)
        self._locks: dict[SlotKey, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock(self, key: SlotKey) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def booked(self, key: SlotKey) -> int:
        return self._booked.get(key, 0)

    def reserve(self, key: SlotKey, quantity: int, capacity: int) -> int:
        if quantity <= 0:
            raise ValueError(f"quantity must be positive, got {quantity}")

        with self._lock(key):
            booked = self._booked[key]
            remaining = capacity - booked
            if quantity > remaining:
                raise CapacityExceededError(key.availability_id, quantity, max(remaining, 0))
            self._booked[key] = booked + quantity
            return remaining - quantity

    def release(self, key: SlotKey, quantity: int) -> None:
        with self._lock(key):
            self._booked[key] = max(self._booked[key] - quantity, 0)


# Check and increment in one step: an overflowing request never touches the counter.
# Returns {1, booked after} on success, {0, booked} on overflow.
RESERVE_SCRIPT = """
local booked = tonumber(redis.call('GET', KEYS[1]) or '0')
local quantity = tonumber(ARGV[1])
if booked + quantity > tonumber(ARGV[2]) then
    return {0, booked}
end
return {1, redis.call('INCRBY', KEYS[1], quantity)}
"""

# Decrement clamped at zero, e.g. after a manual flush.
RELEASE_SCRIPT = """
local booked = redis.call('DECRBY', KEYS[1], ARGV[1])
if booked < 0 then
    redis.call('SET', KEYS[1], 0)
    return 0
end
return booked
"""


class RedisCapacityLedger(CapacityLedger):
    """Counters in Redis, shared by every worker process."""

    KEY_PREFIX = "capacity"

    def __init__(self, redis: Redis):
        self.redis = redis
        self._reserve = redis.register_script(RESERVE_SCRIPT)
        self._release = redis.register_script(RELEASE_SCRIPT)

    def _key(self, key: SlotKey) -> str:
        return f"{self.KEY_PREFIX}:{key.product_id}:{key.option_id}:{key.availability_id}"

    def booked(self, key: SlotKey) -> int:
        value = self.redis.get(self._key(key))
        if value is None:
            return 0
        return int(value.decode() if isinstance(value, bytes) else value)

    def reserve(self, key: SlotKey, quantity: int, capacity: int) -> int:
        if quantity <= 0:
            raise ValueError(f"quantity must be positive, got {quantity}")

        redis_key = self._key(key)
        accepted, booked = self._reserve(keys=[redis_key], args=[quantity, capacity])
        if not accepted:
            logger.warning(
                f"Capacity exceeded for {redis_key}: requested {quantity}, capacity {capacity}"
            )
            raise CapacityExceededError(key.availability_id, quantity, max(capacity - int(booked), 0))
        return capacity - int(booked)

    def release(self, key: SlotKey, quantity: int) -> None:
        self._release(keys=[self._key(key)], args=[quantity])
