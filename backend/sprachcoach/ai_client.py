from __future__ import annotations
import json
import logging
import httpx
from typing import Any, Dict, List, Optional, Sequence
from .content_tracker import ContentTracker
from .responses import ParsedExercise, ParsedFailure, parse_exercise, parse_exercise_batch
from .settings import settings

logger = logging.getLogger(__name__)


def _fingerprint(exercise: Dict[str, Any]) -> str:
	return json.dumps(exercise, sort_keys=True, ensure_ascii=False)


class ExerciseClient:
	"""Generates exercises through an OpenAI-compatible chat completions API.

	Malformed replies and content already served recently are retried up to
	``max_attempts`` times. Prompts are built by the caller.
	"""

	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		base_url: Optional[str] = None,
		model: Optional[str] = None,
		tracker: Optional[ContentTracker] = None,
		max_attempts: Optional[int] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		self.api_key = api_key or settings.openrouter_api_key
		if not self.api_key:
			raise ValueError("OPENROUTER_API_KEY is not configured")
		self.model = model or settings.openrouter_model
		self.base_url = base_url or settings.openrouter_base_url
		self.tracker = tracker if tracker is not None else ContentTracker()
		self.max_attempts = max(1, max_attempts if max_attempts is not None else settings.generation_max_attempts)
		self._headers = {
			"Authorization": f"Bearer {self.api_key}",
			"Content-Type": "application/json",
			"HTTP-Referer": settings.openrouter_referer,
			"X-Title": settings.openrouter_title,
		}
		self._client = httpx.AsyncClient(timeout=30, transport=transport)

	async def complete(self, prompt: str, *, temperature: float = 0.7) -> str:
		payload: Dict[str, Any] = {
			"model": self.model,
			"messages": [{"role": "user", "content": prompt}],
			"temperature": temperature,
		}
		r = await self._client.post(self.base_url, headers=self._headers, json=payload)
		r.raise_for_status()
		try:
			data = r.json()
			content = data["choices"][0]["message"]["content"]
		except Exception as err:
			raise RuntimeError(f"Unexpected completion response: {r.text}") from err
		if not isinstance(content, str):
			raise RuntimeError(f"Unexpected completion response: {r.text}")
		return content

	async def _complete_with_retry(self, prompt: str, attempt: int) -> Optional[str]:
		try:
			return await self.complete(prompt)
		except (httpx.HTTPError, RuntimeError) as err:
			if attempt >= self.max_attempts:
				raise
			logger.warning("Completion attempt %d/%d failed: %s", attempt, self.max_attempts, err)
			return None

	async def generate_exercise(
		self,
		prompt: str,
		*,
		required_fields: Sequence[str] = (),
		context: Optional[str] = None,
	) -> ParsedExercise:
		last: ParsedExercise = ParsedFailure(reason="No attempts made")
		for attempt in range(1, self.max_attempts + 1):
			content = await self._complete_with_retry(prompt, attempt)
			if content is None:
				continue
			parsed = parse_exercise(content, required_fields)
			if not parsed.ok:
				logger.warning("Attempt %d/%d returned unusable exercise: %s", attempt, self.max_attempts, parsed.reason)
				last = parsed
				continue
			fingerprint = _fingerprint(parsed.data)
			if self.tracker.is_duplicate(fingerprint):
				logger.info("Attempt %d/%d returned recently served content", attempt, self.max_attempts)
				last = ParsedFailure(reason="Duplicate content", raw=content)
				continue
			self.tracker.track(fingerprint, context)
			return parsed
		return last

	async def generate_batch(
		self,
		prompt: str,
		*,
		count: int,
		required_fields: Sequence[str] = (),
		context: Optional[str] = None,
	) -> List[Dict[str, Any]]:
		collected: List[Dict[str, Any]] = []
		seen: set[str] = set()
		for attempt in range(1, self.max_attempts + 1):
			if len(collected) >= count:
				break
			content = await self._complete_with_retry(prompt, attempt)
			if content is None:
				continue
			rejected = 0
			for parsed in parse_exercise_batch(content, required_fields):
				if not parsed.ok:
					rejected += 1
					continue
				fingerprint = _fingerprint(parsed.data)
				if fingerprint in seen or self.tracker.is_duplicate(fingerprint):
					rejected += 1
					continue
				seen.add(fingerprint)
				collected.append(parsed.data)
				if len(collected) >= count:
					break
			if rejected:
				logger.info("Batch attempt %d/%d rejected %d exercises", attempt, self.max_attempts, rejected)
		for exercise in collected[:count]:
			self.tracker.track(_fingerprint(exercise), context)
		return collected[:count]

	async def aclose(self) -> None:
		await self._client.aclose()
