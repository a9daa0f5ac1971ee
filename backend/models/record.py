from pydantic import BaseModel, Field
from typing import List, Optional
import datetime

from .plan import RoutineTask


class StreakState(BaseModel):
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    last_completed_date: Optional[datetime.date] = None


class DailyCompletion(BaseModel):
    date: datetime.date
    completed_actions: List[str] = Field(default_factory=list)  # 无序集合
    auto_completed: bool = False  # 当天没有任务时自动完成


class ActionUpdateRequest(BaseModel):
    action: str = Field(min_length=1)
    completed: bool = True


class TodayResponse(BaseModel):
    date: datetime.date
    has_plan: bool
    tasks: List[RoutineTask]
    completed_actions: List[str]
    all_done: bool
    auto_completed: bool = False
    streak: StreakState
