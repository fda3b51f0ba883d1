from fastapi import APIRouter, HTTPException, Request, status

from app.core.rate_limit import rate_limit
from app.schemas.jd import JDAnalysis, JDAnalyzeRequest
from app.services.jd_service import JobDescriptionError, parse_job_description

router = APIRouter()


@router.post("/jd/analyze", response_model=JDAnalysis)
@rate_limit("20/minute")
def jd_analyze(request: Request, payload: JDAnalyzeRequest):
    _ = request
    try:
        return parse_job_description(
            payload.job_description,
            document=payload.document,
            resume_text=payload.resume_text,
        )
    except JobDescriptionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
