"""Listening transcript scoring built on the word alignment."""
from __future__ import annotations

import math
from typing import Iterable, Sequence, Tuple

from .aligner import align
from .models import AlignmentOperation, ErrorDescriptor, EvaluationResult, OperationCounts
from .tokenizer import PreparedTranscript, prepare_transcript

# Only the first errors (left to right) are reported back to the learner
MAX_REPORTED_ERRORS = 20

PERFECT_FEEDBACK = "Perfect match!"


def count_operations(ops: Iterable[AlignmentOperation]) -> OperationCounts:
	substitutions = omissions = insertions = 0
	for op in ops:
		if op.op == "substitution":
			substitutions += 1
		elif op.op == "omission":
			omissions += 1
		elif op.op == "insertion":
			insertions += 1
	return OperationCounts(substitutions=substitutions, omissions=omissions, insertions=insertions)


def word_error_rate(ref_tokens: Sequence[str], hyp_tokens: Sequence[str], counts: OperationCounts) -> float:
	if not ref_tokens:
		return 0.0 if not hyp_tokens else 1.0
	return min(1.0, max(0.0, counts.total / len(ref_tokens)))


def _round_half_up(value: float) -> int:
	return int(math.floor(value + 0.5))


def describe_error(op: AlignmentOperation) -> ErrorDescriptor:
	expected = op.expected or ""
	actual = op.actual or ""
	if op.op == "substitution":
		explanation = f'Expected "{expected}", but heard "{actual}"'
	elif op.op == "omission":
		explanation = f'Missing word "{expected}"'
	elif op.op == "insertion":
		explanation = f'Extra word "{actual}"'
	else:
		raise ValueError(f"Not an error operation: {op.op}")
	return ErrorDescriptor(type=op.op, expected=expected, actual=actual, explanation=explanation)


def build_feedback(exact_match: bool, counts: OperationCounts) -> str:
	if exact_match:
		return PERFECT_FEEDBACK
	# The plural follows the extra-word count only
	word = "word" if counts.insertions == 1 else "words"
	return (
		f"Found {counts.substitutions} incorrect, {counts.omissions} missing, "
		f"and {counts.insertions} extra {word}."
	)


def evaluate_prepared(reference: PreparedTranscript, hypothesis: PreparedTranscript, difficulty: str) -> EvaluationResult:
	"""Score transcripts that were already normalized and tokenized."""
	# An empty reference never counts as an exact match
	exact_match = hypothesis.normalized == reference.normalized and len(reference.normalized) > 0

	ops = align(reference.tokens, hypothesis.tokens)
	counts = count_operations(ops)
	wer = word_error_rate(reference.tokens, hypothesis.tokens, counts)
	similarity = _round_half_up((1 - wer) * 100)

	errors: Tuple[ErrorDescriptor, ...] = tuple(describe_error(op) for op in ops if op.is_error)[:MAX_REPORTED_ERRORS]

	return EvaluationResult(
		score=similarity,
		similarity=similarity,
		word_error_rate=wer,
		exact_match=exact_match,
		corrected_text=reference.raw.strip(),
		feedback=build_feedback(exact_match, counts),
		errors=errors,
		difficulty=difficulty,
	)


def evaluate(reference_text: str, hypothesis_text: str, difficulty: str) -> EvaluationResult:
	"""Score a learner's transcript of a listening clip.

	Args:
		reference_text: The text that was read aloud
		hypothesis_text: What the learner wrote down
		difficulty: Exercise level, returned unchanged

	Returns:
		EvaluationResult with score, word error rate, feedback and the first errors
	"""
	return evaluate_prepared(prepare_transcript(reference_text), prepare_transcript(hypothesis_text), difficulty)
