"""Transcript tokenization for alignment."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .normalizer import normalize


def _split(normalized: str) -> List[str]:
	if not normalized:
		return []
	return normalized.split(" ")


def tokenize(text: str) -> List[str]:
	"""Split normalized text into words.

	Example: "Guten Morgen, Anna!" -> ["guten", "morgen", "anna"]
	"""
	return _split(normalize(text))


@dataclass(frozen=True)
class PreparedTranscript:
	"""A transcript with its comparison form and words computed once."""
	raw: str
	normalized: str
	tokens: Tuple[str, ...]


def prepare_transcript(text: str) -> PreparedTranscript:
	normalized = normalize(text)
	return PreparedTranscript(raw=text, normalized=normalized, tokens=tuple(_split(normalized)))
