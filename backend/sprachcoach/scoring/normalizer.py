"""Text normalization applied before transcripts are compared."""
from __future__ import annotations

import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s+")


def _is_punctuation_or_symbol(ch: str) -> bool:
	return unicodedata.category(ch)[0] in ("P", "S")


def normalize(text: str) -> str:
	"""Return the comparison form of ``text``.

	Rules:
	- lowercase
	- NFC composition
	- every punctuation or symbol character becomes a space
	- collapse repeated whitespace and trim
	"""
	composed = unicodedata.normalize("NFC", text.lower())
	spaced = "".join(" " if _is_punctuation_or_symbol(ch) else ch for ch in composed)
	return _WHITESPACE_RE.sub(" ", spaced).strip()
