from fastapi import APIRouter, Depends, HTTPException

from database import Database, get_database
from dependencies import get_user_id
from models import HairProfile
from services import plans

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=HairProfile)
def get_profile(
    user_id: str = Depends(get_user_id),
    db: Database = Depends(get_database),
):
    """获取头发资料"""
    profile = plans.get_profile(db, user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not set up yet")
    return profile


@router.put("")
def update_profile(
    profile: HairProfile,
    user_id: str = Depends(get_user_id),
    db: Database = Depends(get_database),
):
    """保存头发资料"""
    plans.save_profile(db, user_id, profile)
    return {"success": True, "message": "Profile saved"}
