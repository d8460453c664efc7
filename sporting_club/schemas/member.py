from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

MemberStatus = Literal["active", "inactive"]


class MemberCreate(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    phone: str = ""
    date_of_birth: date
    address: str = ""
    membership_date: date = Field(default_factory=date.today)
    status: MemberStatus = "active"


class MemberUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    membership_date: Optional[date] = None
    status: Optional[MemberStatus] = None

    @model_validator(mode="after")
    def reject_null_fields(self) -> "MemberUpdate":
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class MemberSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    date_of_birth: date
    address: str
    membership_date: date
    status: MemberStatus
    created_at: datetime
    updated_at: datetime
