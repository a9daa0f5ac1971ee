from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from database import Database, get_database
from dependencies import get_user_id
from models import AcademyProgress, Lesson, LessonCompletion, LessonCompletionRequest
from services import academy

router = APIRouter(prefix="/lessons", tags=["lessons"])


@router.get("", response_model=List[Lesson])
def list_lessons(
    user_id: str = Depends(get_user_id),
    db: Database = Depends(get_database),
):
    """按 order 排序的课程列表"""
    return academy.list_lessons(db)


@router.get("/progress", response_model=AcademyProgress)
def get_progress(
    user_id: str = Depends(get_user_id),
    db: Database = Depends(get_database),
):
    return academy.get_progress(db, user_id)


@router.get("/{lesson_id}", response_model=Lesson)
def get_lesson(
    lesson_id: str,
    user_id: str = Depends(get_user_id),
    db: Database = Depends(get_database),
):
    lesson = academy.get_lesson(db, lesson_id)
    if lesson is None:
        raise HTTPException(status_code=404, detail="Lesson not found")
    return lesson


@router.post("/{lesson_id}/complete", response_model=LessonCompletion)
def complete_lesson(
    lesson_id: str,
    request: Optional[LessonCompletionRequest] = None,
    user_id: str = Depends(get_user_id),
    db: Database = Depends(get_database),
):
    """完成课程或测验，首次完成时获得 XP"""
    lesson = academy.get_lesson(db, lesson_id)
    if lesson is None:
        raise HTTPException(status_code=404, detail="Lesson not found")

    score = total = None
    if lesson.type == "quiz":
        answers = request.answers if request else []
        score, total = academy.score_quiz(lesson, answers), len(lesson.questions)

    progress, credited = academy.complete_lesson(db, user_id, lesson)
    return LessonCompletion(
        lesson_id=lesson.id,
        awarded_xp=lesson.xp_reward if credited else 0,
        already_completed=not credited,
        score=score,
        total=total,
        progress=progress,
    )
