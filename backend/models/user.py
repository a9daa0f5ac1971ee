from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional


class CurrentRoutine(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    wash_frequency: str = Field(description="洗发频率")
    products: List[str] = Field(default_factory=list)


class HairProfile(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    hair_type: str
    hair_goals: List[str] = Field(default_factory=list)
    current_routine: CurrentRoutine
    products: List[str] = Field(default_factory=list)
    date_of_birth: Optional[str] = Field(default=None, description="YYYY-MM-DD")

    def generator_payload(self, user_id: str) -> dict:
        """远程计划生成接口要求的 profile 结构"""
        payload = self.model_dump(by_alias=True, exclude={"date_of_birth"})
        payload["uid"] = user_id
        return payload
