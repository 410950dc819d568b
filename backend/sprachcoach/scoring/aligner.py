"""Edit distance alignment between reference and hypothesis tokens."""
from __future__ import annotations

from typing import List, Sequence

from .models import AlignmentOperation


def edit_distance_matrix(reference: Sequence[str], hypothesis: Sequence[str]) -> List[List[int]]:
	"""Word-level Levenshtein cost matrix of shape (m+1) x (n+1)."""
	m, n = len(reference), len(hypothesis)
	dp = [[0] * (n + 1) for _ in range(m + 1)]
	for i in range(1, m + 1):
		dp[i][0] = i
	for j in range(1, n + 1):
		dp[0][j] = j

	for i in range(1, m + 1):
		ref_token = reference[i - 1]
		for j in range(1, n + 1):
			cost = 0 if ref_token == hypothesis[j - 1] else 1
			dp[i][j] = min(
				dp[i - 1][j] + 1,
				dp[i][j - 1] + 1,
				dp[i - 1][j - 1] + cost,
			)
	return dp


def edit_distance(reference: Sequence[str], hypothesis: Sequence[str]) -> int:
	return edit_distance_matrix(reference, hypothesis)[len(reference)][len(hypothesis)]


def align(reference: Sequence[str], hypothesis: Sequence[str]) -> List[AlignmentOperation]:
	"""Minimum edit distance alignment of two token sequences.

	When several alignments share the minimal cost, the backtrace prefers
	match, then substitution, then omission, then insertion at every step.

	Args:
		reference: Expected tokens
		hypothesis: Tokens the learner wrote down

	Returns:
		Operations in left-to-right reference order
	"""
	dp = edit_distance_matrix(reference, hypothesis)

	ops: List[AlignmentOperation] = []
	i, j = len(reference), len(hypothesis)
	while i > 0 or j > 0:
		current = dp[i][j]
		if i > 0 and j > 0 and reference[i - 1] == hypothesis[j - 1] and dp[i - 1][j - 1] == current:
			ops.append(AlignmentOperation.match(reference[i - 1], hypothesis[j - 1]))
			i -= 1
			j -= 1
		elif i > 0 and j > 0 and dp[i - 1][j - 1] + 1 == current:
			ops.append(AlignmentOperation.substitution(reference[i - 1], hypothesis[j - 1]))
			i -= 1
			j -= 1
		elif i > 0 and dp[i - 1][j] + 1 == current:
			ops.append(AlignmentOperation.omission(reference[i - 1]))
			i -= 1
		elif j > 0 and dp[i][j - 1] + 1 == current:
			ops.append(AlignmentOperation.insertion(hypothesis[j - 1]))
			j -= 1
		elif i > 0:
			ops.append(AlignmentOperation.omission(reference[i - 1]))
			i -= 1
		else:
			ops.append(AlignmentOperation.insertion(hypothesis[j - 1]))
			j -= 1

	ops.reverse()
	return ops
