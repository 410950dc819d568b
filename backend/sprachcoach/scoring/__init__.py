"""Transcript alignment and scoring for listening exercises."""
from .aligner import align, edit_distance, edit_distance_matrix
from .models import AlignmentOperation, Difficulty, ErrorDescriptor, EvaluationResult, OperationCounts
from .normalizer import normalize
from .scorer import MAX_REPORTED_ERRORS, count_operations, evaluate, evaluate_prepared
from .tokenizer import PreparedTranscript, prepare_transcript, tokenize

__all__ = [
	"AlignmentOperation",
	"Difficulty",
	"ErrorDescriptor",
	"EvaluationResult",
	"MAX_REPORTED_ERRORS",
	"OperationCounts",
	"PreparedTranscript",
	"align",
	"count_operations",
	"edit_distance",
	"edit_distance_matrix",
	"evaluate",
	"evaluate_prepared",
	"normalize",
	"prepare_transcript",
	"tokenize",
]
