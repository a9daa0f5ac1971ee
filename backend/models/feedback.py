from pydantic import BaseModel, Field
from typing import Literal
from datetime import datetime


class FeedbackRequest(BaseModel):
    hair_feel: Literal["Better", "Same", "Worse"]
    notes: str = ""


class WeeklyFeedback(FeedbackRequest):
    created_at: datetime
