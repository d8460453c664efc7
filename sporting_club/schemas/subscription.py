from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

SubscriptionStatus = Literal["active", "cancelled"]


class SubscriptionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    member_id: str
    sport_id: str
    subscription_date: datetime
    status: SubscriptionStatus
    created_at: datetime
    updated_at: datetime
