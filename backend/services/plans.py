"""
计划、资料与每周反馈的存取

plans 集合每个用户只保存一份当前计划；生成新计划时旧计划整份归档到
plan_history，而不是合并。
"""
import logging
from datetime import datetime
from typing import List, Optional

from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError

from errors import RegenerationPreconditionError
from models import ArchivedPlan, FeedbackRequest, HairProfile, RoutinePlan, WeeklyFeedback
from services.retry import retry_on_exception

log = logging.getLogger(__name__)

HISTORY_LIMIT = 50


def _strip(doc: dict) -> dict:
    doc = dict(doc)
    doc.pop("_id", None)
    doc.pop("user_id", None)
    return doc


# ---- 资料 ----

def get_profile(db, user_id: str) -> Optional[HairProfile]:
    doc = db.users.find_one({"user_id": user_id})
    if not doc or "profile" not in doc:
        return None
    return HairProfile.model_validate(doc["profile"])


@retry_on_exception()
def save_profile(db, user_id: str, profile: HairProfile):
    db.users.update_one(
        {"user_id": user_id},
        {
            "$set": {"profile": profile.model_dump(), "updated_at": datetime.utcnow()},
            "$setOnInsert": {"created_at": datetime.utcnow()},
        },
        upsert=True,
    )


# ---- 计划 ----

def get_current_plan(db, user_id: str) -> Optional[RoutinePlan]:
    doc = db.plans.find_one({"user_id": user_id})
    if not doc:
        return None
    return RoutinePlan.model_validate(_strip(doc))


def get_plan_history(db, user_id: str, limit: int = HISTORY_LIMIT) -> List[ArchivedPlan]:
    cursor = db.plan_history.find({"user_id": user_id}).sort("archived_at", DESCENDING).limit(limit)
    return [ArchivedPlan.model_validate(_strip(doc)) for doc in cursor]


def archive_id(user_id: str, previous: dict) -> str:
    """归档记录的 _id 由用户和被归档计划的创建时间决定，重复归档会撞上主键"""
    created_at = previous.get("created_at")
    stamp = created_at.isoformat() if isinstance(created_at, datetime) else str(previous["_id"])
    return f"{user_id}:{stamp}"


@retry_on_exception()
def _find_current(db, user_id: str) -> Optional[dict]:
    return db.plans.find_one({"user_id": user_id})


@retry_on_exception()
def archive_plan(db, user_id: str, previous: dict) -> bool:
    archived = _strip(previous)
    archived.update({"_id": archive_id(user_id, previous), "user_id": user_id, "archived_at": datetime.utcnow()})
    try:
        db.plan_history.insert_one(archived)
    except DuplicateKeyError:
        return False  # 上一次尝试已经归档
    return True


@retry_on_exception()
def _replace_current(db, user_id: str, plan: RoutinePlan):
    db.plans.replace_one(
        {"user_id": user_id},
        {"user_id": user_id, **plan.model_dump()},
        upsert=True,
    )


@retry_on_exception()
def _touch_user(db, user_id: str, plan: RoutinePlan):
    db.users.update_one(
        {"user_id": user_id},
        {"$set": {"latest_plan_generated_at": plan.created_at}},
        upsert=True,
    )


def store_plan(db, user_id: str, plan: RoutinePlan):
    """归档当前计划（如有），再写入新计划；每一步单独重试"""
    previous = _find_current(db, user_id)
    if previous:
        archive_plan(db, user_id, previous)
    _replace_current(db, user_id, plan)
    _touch_user(db, user_id, plan)
    log.info("Stored plan for %s with %d tasks (archived previous: %s)", user_id, len(plan.tasks), bool(previous))


# ---- 每周反馈 ----

@retry_on_exception()
def add_feedback(db, user_id: str, feedback: FeedbackRequest) -> WeeklyFeedback:
    record = WeeklyFeedback(created_at=datetime.utcnow(), **feedback.model_dump())
    db.weekly_feedback.insert_one({"user_id": user_id, **record.model_dump()})
    return record


def get_latest_feedback(db, user_id: str) -> Optional[WeeklyFeedback]:
    doc = db.weekly_feedback.find_one({"user_id": user_id}, sort=[("created_at", DESCENDING)])
    if not doc:
        return None
    return WeeklyFeedback.model_validate(_strip(doc))


def check_regeneration_ready(db, user_id: str):
    """重新生成需要已有计划和至少一条反馈"""
    if get_current_plan(db, user_id) is None:
        raise RegenerationPreconditionError("No existing plan found; generate a plan first")
    if get_latest_feedback(db, user_id) is None:
        raise RegenerationPreconditionError("No feedback found; submit a weekly check-in first")
