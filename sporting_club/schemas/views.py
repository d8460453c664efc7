"""Joined read models: a member with its sports, a sport with its members."""
from __future__ import annotations

from pydantic import Field

from sporting_club.schemas.member import MemberSchema
from sporting_club.schemas.sport import SportSchema
from sporting_club.schemas.subscription import SubscriptionSchema


class MemberWithSports(MemberSchema):
    sports: list[SportSchema] = Field(default_factory=list)
    subscriptions: list[SubscriptionSchema] = Field(default_factory=list)


class SportWithMembers(SportSchema):
    members: list[MemberSchema] = Field(default_factory=list)
    subscriptions: list[SubscriptionSchema] = Field(default_factory=list)
    member_count: int = 0
