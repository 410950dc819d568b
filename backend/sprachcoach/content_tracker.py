"""Recently generated exercise content, kept to avoid serving duplicates."""
from __future__ import annotations

import hashlib
import threading
import time
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from .settings import settings


def context_key(exercise_type: str, difficulty: str, topic: Optional[str] = None) -> str:
	"""Context label to pass to ``track`` so ``similar_count`` can find it."""
	return f"{exercise_type}-{difficulty}-{topic or 'general'}"


class ContentTracker:
	"""Time-bounded, size-bounded set of content fingerprints.

	The clock is injectable so expiry can be driven deterministically; it must
	return seconds as a float (``time.monotonic`` by default). Variation seeds
	take their time part from ``wall_clock`` (``time.time`` by default).
	"""

	def __init__(
		self,
		*,
		max_size: Optional[int] = None,
		ttl_seconds: Optional[float] = None,
		clock: Callable[[], float] = time.monotonic,
		wall_clock: Callable[[], float] = time.time,
	) -> None:
		self.max_size = max_size if max_size is not None else settings.content_cache_size
		self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.content_cache_ttl_seconds
		self._clock = clock
		self._wall_clock = wall_clock
		# hash -> (tracked_at, context key)
		self._entries: "OrderedDict[str, Tuple[float, Optional[str]]]" = OrderedDict()
		self._lock = threading.Lock()

	@staticmethod
	def hash_content(content: str) -> str:
		return hashlib.sha256(content.encode("utf-8")).hexdigest()[:16]

	def __len__(self) -> int:
		with self._lock:
			return len(self._entries)

	def _evict_expired_locked(self, now: float) -> int:
		expired = [h for h, (ts, _) in self._entries.items() if now - ts > self.ttl_seconds]
		for h in expired:
			del self._entries[h]
		return len(expired)

	def evict_expired(self) -> int:
		with self._lock:
			return self._evict_expired_locked(self._clock())

	def is_duplicate(self, content: str) -> bool:
		key = self.hash_content(content)
		with self._lock:
			self._evict_expired_locked(self._clock())
			return key in self._entries

	def track(self, content: str, context: Optional[str] = None) -> None:
		key = self.hash_content(content)
		with self._lock:
			self._entries.pop(key, None)
			self._entries[key] = (self._clock(), context)
			while len(self._entries) > self.max_size:
				self._entries.popitem(last=False)

	def variation_seed(self, user_id: str, exercise_type: str, difficulty: str, topic: Optional[str] = None) -> str:
		context_hash = self.hash_content(f"{user_id}-{context_key(exercise_type, difficulty, topic)}")
		return f"{context_hash}-{int(self._wall_clock() * 1000)}"

	def similar_count(self, exercise_type: str, difficulty: str, topic: Optional[str] = None) -> int:
		wanted = context_key(exercise_type, difficulty, topic)
		with self._lock:
			now = self._clock()
			return sum(1 for ts, ctx in self._entries.values() if ctx == wanted and now - ts <= self.ttl_seconds)

	def clear(self, context_prefix: Optional[str] = None) -> int:
		"""Forget tracked content, or only entries whose context starts with ``context_prefix``."""
		with self._lock:
			if context_prefix is None:
				removed = len(self._entries)
				self._entries.clear()
				return removed
			doomed = [h for h, (_, ctx) in self._entries.items() if ctx is not None and ctx.startswith(context_prefix)]
			for h in doomed:
				del self._entries[h]
			return len(doomed)

