from fastapi import Request
from pymongo import ASCENDING, DESCENDING, MongoClient

from config import MONGODB_URL, DATABASE_NAME


class Database:
    """按用户划分的文档集合；由 create_app 显式创建并挂在 app.state 上"""

    def __init__(self, client=None, name: str = DATABASE_NAME):
        self.client = client if client is not None else MongoClient(MONGODB_URL)
        self.db = self.client[name]

        # 集合
        self.users = self.db["users"]
        self.plans = self.db["plans"]
        self.plan_history = self.db["plan_history"]
        self.streaks = self.db["streaks"]
        self.daily_completions = self.db["daily_completions"]
        self.weekly_feedback = self.db["weekly_feedback"]
        self.lessons = self.db["lessons"]

    def ensure_indexes(self):
        """创建索引"""
        self.users.create_index("user_id", unique=True)
        self.plans.create_index("user_id", unique=True)
        self.plan_history.create_index([("user_id", ASCENDING), ("archived_at", DESCENDING)])
        self.streaks.create_index("user_id", unique=True)
        self.daily_completions.create_index([("user_id", ASCENDING), ("date", ASCENDING)], unique=True)
        self.weekly_feedback.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])
        self.lessons.create_index("order")

    def close(self):
        self.client.close()


def get_database(request: Request) -> Database:
    return request.app.state.database
