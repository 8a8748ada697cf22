from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from resume_scoring.core.rate_limit import rate_limit
from resume_scoring.schemas import InvalidScoringRequest
from resume_scoring.services import ScoringOrchestrator, get_orchestrator

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/score", status_code=status.HTTP_202_ACCEPTED)
@rate_limit()
async def score_application(
    request: Request,
    background_tasks: BackgroundTasks,
    orchestrator: ScoringOrchestrator = Depends(get_orchestrator),
):
    """Accept a scoring request and deliver the result to the callback target later."""
    raw = await request.body()
    try:
        _, application_id, _ = orchestrator.validate_event(raw)
    except InvalidScoringRequest as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    background_tasks.add_task(orchestrator.handle, raw)
    logger.info("scoring_accepted application_id=%s", application_id)
    return {"accepted": True, "applicationId": application_id}


@router.post("/score/sync")
@rate_limit()
async def score_application_sync(
    request: Request,
    orchestrator: ScoringOrchestrator = Depends(get_orchestrator),
):
    raw = await request.body()
    result = await run_in_threadpool(orchestrator.handle, raw)
    return JSONResponse(status_code=result.status_code, content=result.response_body())
