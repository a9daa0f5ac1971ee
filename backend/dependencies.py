from datetime import date, datetime, timezone

from fastapi import Header, HTTPException, Request

from auth import verify_token
from services.plan_client import PlanGeneratorClient


def get_user_id(authorization: str = Header(...)) -> str:
    """从Header获取用户ID"""
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid Authorization header")
    token = authorization[7:]
    return verify_token(token)


def get_today() -> date:
    """今天的日期（UTC），与存储中的 YYYY-MM-DD 键一致"""
    return datetime.now(timezone.utc).date()


def get_plan_client(request: Request) -> PlanGeneratorClient:
    return request.app.state.plan_client
