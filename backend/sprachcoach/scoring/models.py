"""Value objects produced by the transcript alignment and scoring engine."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


OpKind = Literal["match", "substitution", "omission", "insertion"]


class Difficulty(str, Enum):
	A2_BASIC = "A2_BASIC"
	A2_INTERMEDIATE = "A2_INTERMEDIATE"
	B1_BASIC = "B1_BASIC"
	B1_INTERMEDIATE = "B1_INTERMEDIATE"
	B1_ADVANCED = "B1_ADVANCED"


@dataclass(frozen=True)
class AlignmentOperation:
	"""One step of a reference/hypothesis alignment.

	Attributes:
		op: "match", "substitution", "omission" or "insertion"
		expected: Reference token (None for insertions)
		actual: Hypothesis token (None for omissions)
	"""
	op: OpKind
	expected: Optional[str] = None
	actual: Optional[str] = None

	@classmethod
	def match(cls, expected: str, actual: str) -> "AlignmentOperation":
		return cls("match", expected, actual)

	@classmethod
	def substitution(cls, expected: str, actual: str) -> "AlignmentOperation":
		return cls("substitution", expected, actual)

	@classmethod
	def omission(cls, expected: str) -> "AlignmentOperation":
		return cls("omission", expected, None)

	@classmethod
	def insertion(cls, actual: str) -> "AlignmentOperation":
		return cls("insertion", None, actual)

	@property
	def is_error(self) -> bool:
		return self.op != "match"


@dataclass(frozen=True)
class OperationCounts:
	substitutions: int = 0
	omissions: int = 0
	insertions: int = 0

	@property
	def total(self) -> int:
		return self.substitutions + self.omissions + self.insertions


class _CamelModel(BaseModel):
	model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class ErrorDescriptor(_CamelModel):
	type: Literal["substitution", "omission", "insertion"]
	expected: str
	actual: str
	explanation: str


class EvaluationResult(_CamelModel):
	"""Outcome of comparing a learner's transcript against the reference."""
	score: int
	similarity: int
	word_error_rate: float
	exact_match: bool
	corrected_text: str
	feedback: str
	errors: Tuple[ErrorDescriptor, ...]
	difficulty: str

	def to_json_dict(self) -> Dict[str, Any]:
		return self.model_dump(by_alias=True, mode="json")
