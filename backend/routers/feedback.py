from fastapi import APIRouter, Depends, HTTPException

from database import Database, get_database
from dependencies import get_user_id
from models import FeedbackRequest, WeeklyFeedback
from services import plans

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("", response_model=WeeklyFeedback)
def submit_feedback(
    feedback: FeedbackRequest,
    user_id: str = Depends(get_user_id),
    db: Database = Depends(get_database),
):
    """每周打卡反馈"""
    return plans.add_feedback(db, user_id, feedback)


@router.get("/latest", response_model=WeeklyFeedback)
def get_latest_feedback(
    user_id: str = Depends(get_user_id),
    db: Database = Depends(get_database),
):
    feedback = plans.get_latest_feedback(db, user_id)
    if feedback is None:
        raise HTTPException(status_code=404, detail="No feedback yet")
    return feedback
