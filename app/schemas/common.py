from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class EntityOut(APIModel):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None


class Deleted(APIModel):
    deleted: bool = True
    cleared_references: dict = {}
