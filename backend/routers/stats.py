from fastapi import APIRouter, Depends

from database import Database, get_database
from dependencies import get_user_id
from models import StreakState
from services.streaks import get_streak

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/streak", response_model=StreakState)
def get_streak_stats(
    user_id: str = Depends(get_user_id),
    db: Database = Depends(get_database),
):
    """获取连续完成天数"""
    return get_streak(db, user_id)
