import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool

from config import DATE_FORMAT
from database import Database, get_database
from dependencies import get_plan_client, get_user_id
from models import RoutinePlan
from services import plans
from services.plan_client import PlanGeneratorClient
from services.schedule import build_task_map

log = logging.getLogger(__name__)

router = APIRouter(prefix="/plan", tags=["plan"])


def require_plan(db: Database, user_id: str) -> RoutinePlan:
    plan = plans.get_current_plan(db, user_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="No plan yet")
    return plan


@router.get("", response_model=RoutinePlan)
def get_plan(
    user_id: str = Depends(get_user_id),
    db: Database = Depends(get_database),
):
    """获取当前计划"""
    return require_plan(db, user_id)


@router.get("/history")
def get_plan_history(
    user_id: str = Depends(get_user_id),
    db: Database = Depends(get_database),
):
    """获取归档的历史计划，最新的在前"""
    return [p.model_dump() for p in plans.get_plan_history(db, user_id)]


@router.get("/calendar")
def get_calendar(
    user_id: str = Depends(get_user_id),
    db: Database = Depends(get_database),
):
    """按日期分组的任务，用于日历展示"""
    plan = require_plan(db, user_id)

    rejected = []
    task_map = build_task_map(plan.tasks, plan.created_at.date(), rejected=rejected)

    return {
        "start_date": plan.created_at.strftime(DATE_FORMAT),
        "dates": {
            day.strftime(DATE_FORMAT): [task.model_dump() for task in tasks]
            for day, tasks in sorted(task_map.items())
        },
        "rejected": [task.model_dump() for task in rejected],
    }


@router.post("/generate", response_model=RoutinePlan)
async def generate_plan(
    user_id: str = Depends(get_user_id),
    db: Database = Depends(get_database),
    client: PlanGeneratorClient = Depends(get_plan_client),
):
    """根据头发资料生成新计划"""
    profile = await run_in_threadpool(plans.get_profile, db, user_id)
    if profile is None:
        raise HTTPException(status_code=400, detail="Set up your hair profile before generating a plan")

    generated = await client.generate(profile, user_id)

    plan = generated.to_plan(created_at=datetime.utcnow())
    await run_in_threadpool(plans.store_plan, db, user_id, plan)
    return plan


@router.post("/regenerate", response_model=RoutinePlan)
async def regenerate_plan(
    user_id: str = Depends(get_user_id),
    db: Database = Depends(get_database),
    client: PlanGeneratorClient = Depends(get_plan_client),
):
    """根据最近一次反馈重新生成计划"""
    await run_in_threadpool(plans.check_regeneration_ready, db, user_id)

    generated = await client.regenerate(user_id)

    plan = generated.to_plan(created_at=datetime.utcnow(), regenerated_from_feedback=True)
    await run_in_threadpool(plans.store_plan, db, user_id, plan)
    return plan
