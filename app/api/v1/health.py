from fastapi import APIRouter

from app.scoring.policy import default_policy

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    default_policy()
    return {"status": "healthy"}
