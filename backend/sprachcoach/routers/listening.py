"""
Listening Evaluation Router

This module exposes the HTTP endpoint that scores a learner's transcript of a
listening clip against the reference text. It handles:
- Request validation (non-empty transcripts, known difficulty level)
- Rejecting transcripts that are too long to align
- Wrapping the scoring engine result in the response envelope

The scoring itself lives in ``sprachcoach.scoring`` and knows nothing about HTTP.
"""

from __future__ import annotations
import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..scoring import Difficulty, PreparedTranscript, evaluate_prepared, prepare_transcript
from ..settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["listening"])


# ============================================================================
# REQUEST MODELS
# ============================================================================

class EvaluateListeningRequest(BaseModel):
    """
    Request body for listening evaluation.

    Attributes:
        userTranscript: What the learner typed after listening
        referenceTranscript: The text that was played
        difficulty: Exercise level, echoed back in the evaluation
    """
    userTranscript: str = Field(min_length=1)
    referenceTranscript: str = Field(min_length=1)
    difficulty: Difficulty


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

def _prepare_within_limit(label: str, text: str, limit: int) -> PreparedTranscript:
    """
    Reject transcripts longer than ``limit`` words.

    Alignment cost grows with the product of both lengths, so oversize input
    is refused before it reaches the scoring engine.

    Returns:
        PreparedTranscript reused for scoring

    Raises:
        HTTPException: 413 if the transcript is too long
    """
    prepared = prepare_transcript(text)
    words = len(prepared.tokens)
    if words > limit:
        logger.warning("Rejected %s with %d words (limit %d)", label, words, limit)
        raise HTTPException(status_code=413, detail=f"Transcript exceeds {limit} words")
    return prepared


# ============================================================================
# API ENDPOINTS
# ============================================================================

@router.post("/evaluate-listening")
def evaluate_listening(req: EvaluateListeningRequest):
    """
    Score a listening transcript.

    Returns:
        Dict with ``success`` and the camelCase ``evaluation`` record

    Raises:
        HTTPException: 413 for oversize transcripts, 500 on unexpected failure
    """
    limit = settings.max_transcript_tokens
    reference = _prepare_within_limit("referenceTranscript", req.referenceTranscript, limit)
    hypothesis = _prepare_within_limit("userTranscript", req.userTranscript, limit)

    try:
        result = evaluate_prepared(reference, hypothesis, req.difficulty.value)
    except Exception:
        logger.exception("Evaluate listening error")
        raise HTTPException(status_code=500, detail="Failed to evaluate listening exercise")

    return {"success": True, "evaluation": result.to_json_dict()}
