"""
连续完成天数（streak）

next_streak 是纯函数；update_streak_for_day 负责对 streaks 集合做
读-计算-写，写入以 version 字段做比较交换，避免两个同日触发互相覆盖。
"""
import logging
from datetime import date, datetime
from typing import Optional

from pymongo.errors import DuplicateKeyError

from config import DATE_FORMAT, STREAK_CAS_ATTEMPTS
from errors import StreakConflictError
from models import StreakState
from services.retry import retry_on_exception

log = logging.getLogger(__name__)


def next_streak(last_completed_date: Optional[date], today: date, current_streak: int) -> int:
    if last_completed_date is None:
        return 1  # 第一次完成

    gap = (today - last_completed_date).days

    if gap == 0:
        return current_streak  # 同一天重复触发
    if gap == 1:
        return current_streak + 1
    if gap < 0:
        return current_streak  # 早于上次完成日期，不改变
    return 1  # 中断，重新计数


def parse_date(value) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, DATE_FORMAT).date()


def streak_from_document(doc: Optional[dict]) -> StreakState:
    if not doc:
        return StreakState()
    return StreakState(
        current_streak=doc.get("current_streak") or 0,
        longest_streak=doc.get("longest_streak") or 0,
        last_completed_date=parse_date(doc.get("last_completed_date")),
    )


def get_streak(db, user_id: str) -> StreakState:
    return streak_from_document(db.streaks.find_one({"user_id": user_id}))


@retry_on_exception()
def update_streak_for_day(db, user_id: str, day: date, attempts: int = STREAK_CAS_ATTEMPTS) -> StreakState:
    """记录 day 已完成并返回写入后的 streak"""
    for _ in range(attempts):
        doc = db.streaks.find_one({"user_id": user_id})
        state = streak_from_document(doc)

        if state.last_completed_date == day:
            return state
        if state.last_completed_date is not None and day < state.last_completed_date:
            log.info("Ignoring completion for %s on %s, last completion is %s",
                     user_id, day, state.last_completed_date)
            return state

        nxt = next_streak(state.last_completed_date, day, state.current_streak)
        new_state = StreakState(
            current_streak=nxt,
            longest_streak=max(state.longest_streak, nxt),
            last_completed_date=day,
        )
        fields = {
            "current_streak": new_state.current_streak,
            "longest_streak": new_state.longest_streak,
            "last_completed_date": day.strftime(DATE_FORMAT),
            "updated_at": datetime.utcnow(),
        }

        if doc is None:
            try:
                db.streaks.insert_one({"user_id": user_id, "version": 1, **fields})
            except DuplicateKeyError:
                continue  # 另一个请求先创建了文档
        else:
            version = doc.get("version")
            result = db.streaks.update_one(
                {"_id": doc["_id"], "version": version},
                {"$set": {**fields, "version": (version or 0) + 1}},
            )
            if result.matched_count == 0:
                continue  # 读取之后文档已被修改

        if nxt != state.current_streak:
            log.info("Streak for %s is now %d (longest %d)", user_id, new_state.current_streak, new_state.longest_streak)
        return new_state

    raise StreakConflictError(f"Streak for {user_id} kept changing during update")
