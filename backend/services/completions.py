"""
每日完成记录

记录按 (user_id, date) 唯一，懒创建，通过 $addToSet / $pull 合并更新。
当天所有任务完成，或者当天没有任务（自动完成）时推进 streak；
update_streak_for_day 对同一天是幂等的，所以重复触发不会多计。
"""
import logging
from datetime import date, datetime
from typing import List, Optional

from pymongo.errors import DuplicateKeyError

from config import DATE_FORMAT
from models import DailyCompletion, RoutinePlan, RoutineTask, TodayResponse
from services.retry import retry_on_exception
from services.schedule import tasks_for_day
from services.streaks import get_streak, update_streak_for_day

log = logging.getLogger(__name__)


def _key(user_id: str, day: date) -> dict:
    return {"user_id": user_id, "date": day.strftime(DATE_FORMAT)}


def get_completion(db, user_id: str, day: date) -> Optional[DailyCompletion]:
    doc = db.daily_completions.find_one(_key(user_id, day))
    if not doc:
        return None
    return DailyCompletion(
        date=day,
        completed_actions=doc.get("completed_actions") or [],
        auto_completed=doc.get("auto_completed", False),
    )


@retry_on_exception()
def mark_auto_completed(db, user_id: str, day: date) -> bool:
    """为没有任务的一天创建自动完成记录；已存在时返回 False"""
    try:
        db.daily_completions.insert_one({
            **_key(user_id, day),
            "completed_actions": [],
            "auto_completed": True,
            "updated_at": datetime.utcnow(),
        })
    except DuplicateKeyError:
        return False
    log.info("Auto-completed %s for %s (no scheduled tasks)", day, user_id)
    return True


@retry_on_exception()
def set_action_completed(db, user_id: str, day: date, action: str, completed: bool) -> DailyCompletion:
    if completed:
        db.daily_completions.update_one(
            _key(user_id, day),
            {
                "$addToSet": {"completed_actions": action},
                "$set": {"updated_at": datetime.utcnow()},
                "$setOnInsert": {"auto_completed": False},
            },
            upsert=True,
        )
    else:
        db.daily_completions.update_one(
            _key(user_id, day),
            {"$pull": {"completed_actions": action}, "$set": {"updated_at": datetime.utcnow()}},
        )
    return get_completion(db, user_id, day) or DailyCompletion(date=day)


def all_tasks_done(tasks: List[RoutineTask], completed_actions: List[str]) -> bool:
    done = set(completed_actions)
    return bool(tasks) and all(task.action in done for task in tasks)


def scheduled_tasks(plan: RoutinePlan, today: date) -> List[RoutineTask]:
    return tasks_for_day(plan.tasks, plan.created_at.date(), today)


def summarize_day(db, user_id: str, plan: Optional[RoutinePlan], today: date) -> TodayResponse:
    """当天的任务、完成情况和 streak；满足条件时推进 streak

    没有计划的用户当天也没有任务，同样按自动完成处理。
    """
    tasks = scheduled_tasks(plan, today) if plan is not None else []
    completion = get_completion(db, user_id, today)

    if not tasks and completion is None:
        mark_auto_completed(db, user_id, today)
        completion = get_completion(db, user_id, today)

    completed_actions = completion.completed_actions if completion else []
    all_done = all_tasks_done(tasks, completed_actions)

    if not tasks or all_done:
        streak = update_streak_for_day(db, user_id, today)
    else:
        streak = get_streak(db, user_id)

    return TodayResponse(
        date=today,
        has_plan=plan is not None,
        tasks=tasks,
        completed_actions=completed_actions,
        all_done=all_done,
        auto_completed=not tasks,
        streak=streak,
    )
