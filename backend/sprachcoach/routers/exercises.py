"""
Exercise Batch Router

This module exposes batch exercise generation backed by ``ExerciseClient``.
It handles:
- Generating a batch of distinct exercises from a caller-supplied prompt
- Reporting how many exercises of a kind were served recently
- Resetting the duplicate tracker for one exercise type

The duplicate tracker is created once per application (``app.state``) and
shared by every client built for a request.
"""

from __future__ import annotations
import logging
from typing import List, Literal, Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from ..ai_client import ExerciseClient
from ..content_tracker import ContentTracker, context_key
from ..scoring import Difficulty

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["exercises"])

ExerciseType = Literal["vocabulary", "grammar"]


# ============================================================================
# REQUEST MODELS
# ============================================================================

class GenerateBatchRequest(BaseModel):
    """
    Request body for batch generation.

    Attributes:
        type: Exercise family, used to group tracked content
        difficulty: Exercise level
        prompt: Complete prompt text sent to the model
        topic: Optional topic, part of the tracking context
        count: Number of exercises wanted
        requiredFields: Fields every exercise must carry (non-null)
    """
    type: ExerciseType
    difficulty: Difficulty
    prompt: str = Field(min_length=1)
    topic: Optional[str] = None
    count: int = Field(default=5, ge=1, le=20)
    requiredFields: List[str] = Field(default_factory=list)


class ResetBatchRequest(BaseModel):
    type: ExerciseType


# ============================================================================
# DEPENDENCIES
# ============================================================================

def get_content_tracker(request: Request) -> ContentTracker:
    return request.app.state.content_tracker


async def get_exercise_client(tracker: ContentTracker = Depends(get_content_tracker)):
    try:
        client = ExerciseClient(tracker=tracker)
    except ValueError as err:
        raise HTTPException(status_code=503, detail=str(err))
    try:
        yield client
    finally:
        await client.aclose()


# ============================================================================
# API ENDPOINTS
# ============================================================================

@router.post("/generate-batch")
async def generate_batch(req: GenerateBatchRequest, client: ExerciseClient = Depends(get_exercise_client)):
    """
    Generate up to ``count`` exercises not served recently.

    Returns:
        Dict with ``success`` and the ``batch`` list (may be shorter than ``count``)

    Raises:
        HTTPException: 500 if the model provider keeps failing
    """
    ctx = context_key(req.type, req.difficulty.value, req.topic)
    try:
        batch = await client.generate_batch(
            req.prompt,
            count=req.count,
            required_fields=req.requiredFields,
            context=ctx,
        )
    except (httpx.HTTPError, RuntimeError):
        logger.exception("Generate batch error")
        raise HTTPException(status_code=500, detail="Failed to generate batch. Please try again.")
    return {"success": True, "batch": batch}


@router.get("/generate-batch")
def batch_info(
    type: ExerciseType,
    difficulty: Difficulty,
    topic: Optional[str] = None,
    tracker: ContentTracker = Depends(get_content_tracker),
):
    return {
        "success": True,
        "batchInfo": {
            "similarCount": tracker.similar_count(type, difficulty.value, topic),
            "tracked": len(tracker),
        },
    }


@router.post("/reset-batch")
def reset_batch(req: ResetBatchRequest, tracker: ContentTracker = Depends(get_content_tracker)):
    removed = tracker.clear(context_prefix=f"{req.type}-")
    logger.info("Reset %s batch, forgot %d exercises", req.type, removed)
    return {"success": True, "message": f"{req.type} batch reset successfully"}
