"""
Parsing of LLM exercise responses.

Models wrap JSON in markdown fences, prepend commentary or append trailing
text. ``clean_ai_response`` cuts the JSON payload out of such a reply and
``parse_exercise`` turns it into a ``ParsedExercise``: either ``ParsedOk``
with the decoded object or ``ParsedFailure`` describing why the reply was
unusable. Callers branch on ``.ok`` instead of catching exceptions.
"""

from __future__ import annotations
import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Sequence, Union

_FENCE_START_RE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_END_RE = re.compile(r"\s*```\s*$")


@dataclass(frozen=True)
class ParsedOk:
	data: Dict[str, Any]
	ok: Literal[True] = field(default=True, init=False)


@dataclass(frozen=True)
class ParsedFailure:
	reason: str
	raw: str = ""
	ok: Literal[False] = field(default=False, init=False)


ParsedExercise = Union[ParsedOk, ParsedFailure]


def _json_end(text: str) -> int:
	"""Index of the last character closing a top-level object/array, or -1."""
	end = -1
	depth = 0
	in_string = False
	escape_next = False
	for idx, ch in enumerate(text):
		if escape_next:
			escape_next = False
			continue
		if ch == "\\":
			escape_next = True
			continue
		if ch == '"':
			in_string = not in_string
			continue
		if in_string:
			continue
		if ch in "{[":
			depth += 1
		elif ch in "}]":
			depth -= 1
			if depth == 0:
				end = idx
	return end


def clean_ai_response(content: str) -> str:
	"""
	Extract the JSON payload from a raw model reply.

	Raises:
		ValueError: If the reply is empty or holds no JSON object/array
	"""
	if not content or not content.strip():
		raise ValueError("Empty response content")

	cleaned = _FENCE_START_RE.sub("", content.strip())
	cleaned = _FENCE_END_RE.sub("", cleaned).strip()

	starts = [i for i in (cleaned.find("{"), cleaned.find("[")) if i != -1]
	if not starts:
		raise ValueError("No valid JSON structure found in response")
	cleaned = cleaned[min(starts):]

	end = _json_end(cleaned)
	if end > -1:
		cleaned = cleaned[: end + 1]
	return cleaned


def _missing_field(obj: Dict[str, Any], required_fields: Sequence[str]) -> str | None:
	for name in required_fields:
		if obj.get(name) is None:
			return name
	return None


def _decode(content: str) -> Any:
	cleaned = clean_ai_response(content)
	try:
		return json.loads(cleaned)
	except json.JSONDecodeError as exc:
		raise ValueError(f"Failed to parse JSON response: {exc.msg}") from exc


def _check_object(obj: Any, required_fields: Sequence[str], raw: str) -> ParsedExercise:
	if not isinstance(obj, dict):
		return ParsedFailure(reason="Expected a JSON object", raw=raw)
	missing = _missing_field(obj, required_fields)
	if missing is not None:
		return ParsedFailure(reason=f"Missing required field: {missing}", raw=raw)
	return ParsedOk(data=obj)


def parse_exercise(content: str, required_fields: Sequence[str] = ()) -> ParsedExercise:
	try:
		obj = _decode(content)
	except ValueError as exc:
		return ParsedFailure(reason=str(exc), raw=content or "")
	return _check_object(obj, required_fields, content)


def parse_exercise_batch(content: str, required_fields: Sequence[str] = ()) -> List[ParsedExercise]:
	"""
	Parse a reply holding several exercises.

	Accepts a bare JSON array or an object with an ``exercises`` array. A reply
	that cannot be decoded at all yields a single ``ParsedFailure``.
	"""
	try:
		obj = _decode(content)
	except ValueError as exc:
		return [ParsedFailure(reason=str(exc), raw=content or "")]
	if isinstance(obj, dict) and isinstance(obj.get("exercises"), list):
		obj = obj["exercises"]
	if not isinstance(obj, list):
		return [ParsedFailure(reason="Expected a JSON array of exercises", raw=content)]
	return [_check_object(item, required_fields, json.dumps(item, ensure_ascii=False)) for item in obj]
