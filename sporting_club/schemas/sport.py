from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SportCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    category: str = Field(min_length=1)
    max_members: Optional[int] = Field(default=None, gt=0)


class SportUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, min_length=1)
    max_members: Optional[int] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "SportUpdate":
        """Only max_members may be cleared by passing None explicitly."""
        for name in ("name", "description", "category"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class SportSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    category: str
    max_members: Optional[int] = None
    created_at: datetime
    updated_at: datetime
