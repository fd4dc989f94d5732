import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from services.health_score_service import HealthScoreService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Health"])


@router.get("/health-score")
async def health_score(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    """Weighted score over the last week of entries."""
    try:
        result = HealthScoreService.calculate(db, user_id)
        return {
            "overallScore": result["overall_score"],
            "categories": result["categories"],
            "trends": result["trends"],
            "entriesCount": result["entries_count"],
            "daysTracked": result["days_tracked"],
        }
    except Exception:
        logger.exception("Health score calculation failed")
        raise HTTPException(status_code=500, detail="Server error")
