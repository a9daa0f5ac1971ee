"""Tests for storing, superseding and archiving routine plans."""

from __future__ import annotations

from datetime import datetime

from pymongo.errors import AutoReconnect

from models import RoutinePlan, RoutineTask
from services import plans

USER = "user-1"


def make_plan(action, created_at):
    return RoutinePlan(
        tasks=[RoutineTask(weekday="Monday", action=action)],
        created_at=created_at,
    )


class ReplaceFailsOnce:
    """Raises AutoReconnect from the first replace_one, then behaves normally."""

    def __init__(self, collection):
        self._collection = collection
        self.failed = False

    def replace_one(self, *args, **kwargs):
        if not self.failed:
            self.failed = True
            raise AutoReconnect("connection reset")
        return self._collection.replace_one(*args, **kwargs)

    def __getattr__(self, name):
        return getattr(self._collection, name)


def test_first_plan_has_no_history(db):
    plans.store_plan(db, USER, make_plan("Wash", datetime(2024, 1, 1)))

    assert plans.get_current_plan(db, USER).tasks[0].action == "Wash"
    assert plans.get_plan_history(db, USER) == []


def test_new_plan_supersedes_and_archives_previous(db):
    plans.store_plan(db, USER, make_plan("Wash", datetime(2024, 1, 1)))
    plans.store_plan(db, USER, make_plan("Oil", datetime(2024, 1, 8)))

    assert [t.action for t in plans.get_current_plan(db, USER).tasks] == ["Oil"]
    history = plans.get_plan_history(db, USER)
    assert [p.tasks[0].action for p in history] == ["Wash"]


def test_retried_replace_archives_previous_plan_once(db, monkeypatch):
    monkeypatch.setattr("services.retry.time.sleep", lambda seconds: None)
    plans.store_plan(db, USER, make_plan("Wash", datetime(2024, 1, 1)))
    db.plans = ReplaceFailsOnce(db.plans)

    plans.store_plan(db, USER, make_plan("Oil", datetime(2024, 1, 8)))

    assert db.plans.failed
    assert db.plan_history.count_documents({"user_id": USER}) == 1
    assert [t.action for t in plans.get_current_plan(db, USER).tasks] == ["Oil"]


def test_archiving_same_plan_twice_keeps_one_entry(db):
    plans.store_plan(db, USER, make_plan("Wash", datetime(2024, 1, 1)))
    previous = db.plans.find_one({"user_id": USER})

    assert plans.archive_plan(db, USER, previous) is True
    assert plans.archive_plan(db, USER, previous) is False
    assert db.plan_history.count_documents({"user_id": USER}) == 1
