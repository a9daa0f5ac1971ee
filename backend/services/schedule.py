"""
把按星期标注的计划任务映射到具体日期

锚点日期取计划的创建日期。任务落在锚点之后（不含锚点当天）的下一个对应星期，
多周计划中第 n 周的任务再顺延 7 * (n - 1) 天。
"""
import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List

from errors import InvalidWeekday
from models import RoutineTask

log = logging.getLogger(__name__)

WEEKDAYS = {
    "Monday": 0,
    "Tuesday": 1,
    "Wednesday": 2,
    "Thursday": 3,
    "Friday": 4,
    "Saturday": 5,
    "Sunday": 6,
}


def weekday_index(weekday: str) -> int:
    try:
        return WEEKDAYS[weekday]
    except (KeyError, TypeError):
        raise InvalidWeekday(weekday) from None


def project_date(weekday: str, start_date: date) -> date:
    """锚点之后下一个 weekday；锚点本身是该星期时返回一周之后"""
    target = weekday_index(weekday)
    diff = (target - start_date.weekday()) % 7 or 7
    return start_date + timedelta(days=diff)


def task_date(task: RoutineTask, start_date: date) -> date:
    projected = project_date(task.weekday, start_date)
    if task.week and task.week > 1:
        projected += timedelta(weeks=task.week - 1)
    return projected


def build_task_map(tasks: Iterable[RoutineTask], start_date: date, rejected: List[RoutineTask] = None) -> Dict[date, List[RoutineTask]]:
    """按日期分组；星期名无法识别的任务被跳过（并追加到 rejected）"""
    task_map: Dict[date, List[RoutineTask]] = {}
    for task in tasks:
        try:
            day = task_date(task, start_date)
        except InvalidWeekday as e:
            log.warning("Skipping task %r: %s", task.action, e)
            if rejected is not None:
                rejected.append(task)
            continue
        task_map.setdefault(day, []).append(task)
    return task_map


def tasks_for_day(tasks: Iterable[RoutineTask], start_date: date, today: date) -> List[RoutineTask]:
    return build_task_map(tasks, start_date).get(today, [])
