from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from database import Database, get_database
from dependencies import get_today, get_user_id
from models import ActionUpdateRequest, TodayResponse
from services import plans
from services.completions import scheduled_tasks, set_action_completed, summarize_day

router = APIRouter(prefix="/today", tags=["today"])


@router.get("", response_model=TodayResponse)
def get_today_tasks(
    user_id: str = Depends(get_user_id),
    db: Database = Depends(get_database),
    today: date = Depends(get_today),
):
    """今天的任务与完成状态；没有任务的日子自动完成"""
    plan = plans.get_current_plan(db, user_id)
    return summarize_day(db, user_id, plan, today)


@router.post("/actions", response_model=TodayResponse)
def update_action(
    request: ActionUpdateRequest,
    user_id: str = Depends(get_user_id),
    db: Database = Depends(get_database),
    today: date = Depends(get_today),
):
    """标记/取消标记今天的某个任务"""
    plan = plans.get_current_plan(db, user_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="No plan yet")

    actions = {task.action for task in scheduled_tasks(plan, today)}
    if request.action not in actions:
        raise HTTPException(status_code=400, detail=f"'{request.action}' is not scheduled today")

    set_action_completed(db, user_id, today, request.action, request.completed)
    return summarize_day(db, user_id, plan, today)
