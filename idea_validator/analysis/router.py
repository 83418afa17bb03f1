import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from idea_validator.analysis.providers import AnalysisError
from idea_validator.analysis.schemas import (
    MAX_IDEA_LENGTH,
    AnalysisResult,
    AnalyzeRequest,
    ErrorResponse,
)
from idea_validator.analysis.service import AnalysisPipeline, get_pipeline

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Analysis"])


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post(
    "/analyze",
    response_model=AnalysisResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze(
    req: AnalyzeRequest,
    pipeline: AnalysisPipeline = Depends(get_pipeline),
):
    idea = req.idea
    if not isinstance(idea, str) or not idea.strip():
        return _error(400, "Please provide a valid startup idea")
    if len(idea) > MAX_IDEA_LENGTH:
        return _error(
            400, f"Startup idea is too long. Please keep it under {MAX_IDEA_LENGTH} characters."
        )

    try:
        return await pipeline.analyze(idea)
    except AnalysisError as e:
        logger.exception("Analysis error")
        return _error(500, "Failed to analyze startup idea. Please try again later.", str(e))
