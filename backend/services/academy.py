"""
课程与学习进度

进度保存在 users 文档的 academy 字段：xp、completed_lessons、badges。
完成课程的加分以 "completed_lessons 中还没有该课程" 为条件更新，
重复提交或写入重试都只加一次。
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from pymongo import ASCENDING

from models import AcademyProgress, Lesson
from services.retry import retry_on_exception

log = logging.getLogger(__name__)

# 徽章 -> 需要的 XP
BADGES = {
    "Hair Scholar": 50,
}


def lesson_from_document(doc: dict) -> Lesson:
    data = dict(doc)
    data["id"] = str(data.pop("_id"))
    return Lesson.model_validate(data)


def list_lessons(db) -> List[Lesson]:
    return [lesson_from_document(doc) for doc in db.lessons.find().sort("order", ASCENDING)]


def get_lesson(db, lesson_id: str) -> Optional[Lesson]:
    doc = db.lessons.find_one({"_id": lesson_id})
    return lesson_from_document(doc) if doc else None


def get_progress(db, user_id: str) -> AcademyProgress:
    doc = db.users.find_one({"user_id": user_id}) or {}
    academy = doc.get("academy") or {}
    return AcademyProgress(
        xp=academy.get("xp", 0),
        completed_lessons=academy.get("completed_lessons", []),
        badges=academy.get("badges", []),
    )


def score_quiz(lesson: Lesson, answers: List[int]) -> int:
    return sum(
        1 for i, question in enumerate(lesson.questions)
        if i < len(answers) and answers[i] == question.answer
    )


@retry_on_exception()
def _ensure_user(db, user_id: str):
    db.users.update_one(
        {"user_id": user_id},
        {"$setOnInsert": {"created_at": datetime.utcnow()}},
        upsert=True,
    )


@retry_on_exception()
def _credit_lesson(db, user_id: str, lesson: Lesson) -> bool:
    result = db.users.update_one(
        {"user_id": user_id, "academy.completed_lessons": {"$ne": lesson.id}},
        {
            "$inc": {"academy.xp": lesson.xp_reward},
            "$addToSet": {"academy.completed_lessons": lesson.id},
        },
    )
    return result.modified_count == 1


@retry_on_exception()
def _award_badges(db, user_id: str, xp: int):
    earned = [badge for badge, threshold in BADGES.items() if xp >= threshold]
    if earned:
        db.users.update_one(
            {"user_id": user_id},
            {"$addToSet": {"academy.badges": {"$each": earned}}},
        )


def complete_lesson(db, user_id: str, lesson: Lesson) -> Tuple[AcademyProgress, bool]:
    """记录课程完成；返回 (进度, 本次是否加分)"""
    _ensure_user(db, user_id)
    credited = _credit_lesson(db, user_id, lesson)

    progress = get_progress(db, user_id)
    _award_badges(db, user_id, progress.xp)
    progress = get_progress(db, user_id)

    if credited:
        log.info("User %s completed lesson %s (+%d XP, total %d)", user_id, lesson.id, lesson.xp_reward, progress.xp)
    return progress, credited
