from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime


class RoutineTask(BaseModel):
    weekday: str  # Monday ... Sunday
    action: str  # 当天内唯一
    details: str = ""
    time: Optional[str] = None  # HH:MM
    week: Optional[int] = Field(default=None, ge=1, description="多周计划中的第几周")


class RoutinePlan(BaseModel):
    tasks: List[RoutineTask] = Field(default_factory=list)
    created_at: datetime  # 日期推算的锚点
    tips: List[str] = Field(default_factory=list)
    recommended_products: List[str] = Field(default_factory=list)
    regenerated_from_feedback: bool = False


class ArchivedPlan(RoutinePlan):
    archived_at: datetime


# ---- 远程计划生成服务的报文 ----

class RoutineEntry(BaseModel):
    day: str
    action: str = Field(min_length=1)
    details: str = ""
    time: Optional[str] = None
    week: Optional[int] = Field(default=None, ge=1)

    @field_validator("day")
    @classmethod
    def normalize_day(cls, value: str) -> str:
        return value.strip().title()

    def to_task(self) -> RoutineTask:
        return RoutineTask(
            weekday=self.day,
            action=self.action,
            details=self.details,
            time=self.time,
            week=self.week,
        )


class GeneratedPlan(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    routine: List[RoutineEntry]
    tips: List[str] = Field(default_factory=list)
    recommended_products: List[str] = Field(default_factory=list)

    def to_plan(self, created_at: datetime, regenerated_from_feedback: bool = False) -> RoutinePlan:
        return RoutinePlan(
            tasks=[entry.to_task() for entry in self.routine],
            created_at=created_at,
            tips=self.tips,
            recommended_products=self.recommended_products,
            regenerated_from_feedback=regenerated_from_feedback,
        )


class PlanGenerationResponse(BaseModel):
    success: bool
    plan: Optional[GeneratedPlan] = None
    error: Optional[str] = None
