from fastapi import HTTPException
from datetime import datetime, timedelta
from jose import JWTError, jwt

from config import JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRE_HOURS


def create_token(user_id: str, expire_hours: int = JWT_EXPIRE_HOURS) -> str:
    """签发 token；服务本身不提供登录，供测试和本地开发使用"""
    expire = datetime.utcnow() + timedelta(hours=expire_hours)
    payload = {
        "user_id": user_id,
        "exp": expire
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> str:
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    user_id = payload.get("user_id")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token has no user")
    return user_id
