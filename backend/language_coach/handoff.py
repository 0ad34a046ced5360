"""Audio hand-off cache.

A client uploads a recording once, gets back an opaque id and references that
id in a later call. Each id can be consumed exactly once. Entries also expire
after a TTL and the cache is capped, so abandoned uploads do not pile up for
the lifetime of the process.
"""
from __future__ import annotations

import threading
import time
import uuid
from collections import OrderedDict
from typing import Callable, Optional, Protocol, Tuple

from .log import get_logger

logger = get_logger("handoff")


class HandoffStore(Protocol):
	def store(self, payload: str) -> str: ...

	def consume(self, handoff_id: str) -> Optional[str]: ...


class InMemoryHandoffStore:
	"""Process-local consume-once cache from uuid to base64 payload.

	Args:
		ttl_seconds: Age after which an entry is treated as absent. ``None`` or
			a non-positive value disables expiry.
		max_entries: Capacity; the oldest entry is evicted when full.
			``None`` or a non-positive value disables the cap.
		clock: Monotonic time source, injectable for tests.
	"""

	def __init__(
		self,
		ttl_seconds: Optional[float] = 600.0,
		max_entries: Optional[int] = 256,
		clock: Callable[[], float] = time.monotonic,
	) -> None:
		self._ttl = ttl_seconds if ttl_seconds and ttl_seconds > 0 else None
		self._max_entries = max_entries if max_entries and max_entries > 0 else None
		self._clock = clock
		self._entries: "OrderedDict[str, Tuple[float, str]]" = OrderedDict()
		self._lock = threading.Lock()

	def __len__(self) -> int:
		with self._lock:
			self._purge_expired()
			return len(self._entries)

	def store(self, payload: str) -> str:
		handoff_id = str(uuid.uuid4())
		with self._lock:
			self._purge_expired()
			self._entries[handoff_id] = (self._clock(), payload.strip())
			if self._max_entries is not None:
				while len(self._entries) > self._max_entries:
					evicted, _ = self._entries.popitem(last=False)
					logger.info("Evicted unconsumed audio payload", extra={"component": "handoff", "detail": evicted})
		return handoff_id

	def consume(self, handoff_id: str) -> Optional[str]:
		if not handoff_id:
			return None
		with self._lock:
			entry = self._entries.pop(handoff_id, None)
		if entry is None:
			return None
		created_at, payload = entry
		if self._expired(created_at):
			return None
		return payload

	def _expired(self, created_at: float) -> bool:
		return self._ttl is not None and self._clock() - created_at > self._ttl

	def _purge_expired(self) -> None:
		# Insertion order is creation order, so stale entries sit at the front.
		while self._entries:
			oldest = next(iter(self._entries))
			if not self._expired(self._entries[oldest][0]):
				break
			self._entries.popitem(last=False)
