from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from delivery_api.schemas.types import UtcDatetime


class DriverBase(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class DriverCreate(DriverBase):
    name: str = Field(min_length=1, max_length=255)
    is_available: bool = True


class DriverUpdate(DriverBase):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    is_available: Optional[bool] = None


class DriverResponse(DriverBase):
    id: str
    name: str
    is_available: bool
    created_at: UtcDatetime

    model_config = {
        **DriverBase.model_config,
        "from_attributes": True,
    }
