from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional


class LessonQuestion(BaseModel):
    q: str
    choices: List[str] = Field(min_length=1)
    answer: int = Field(ge=0, description="正确选项的下标")


class Lesson(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    type: Literal["lesson", "quiz"] = "lesson"
    content: str = ""
    order: int = 0
    estimated_minutes: int = 5
    xp_reward: int = Field(default=5, ge=0)
    questions: List[LessonQuestion] = Field(default_factory=list)


class LessonCompletionRequest(BaseModel):
    answers: List[int] = Field(default_factory=list)  # 按题目顺序的选项下标


class AcademyProgress(BaseModel):
    xp: int = 0
    completed_lessons: List[str] = Field(default_factory=list)
    badges: List[str] = Field(default_factory=list)


class LessonCompletion(BaseModel):
    lesson_id: str
    awarded_xp: int
    already_completed: bool
    score: Optional[int] = None  # 仅测验
    total: Optional[int] = None
    progress: AcademyProgress
