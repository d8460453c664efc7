from sporting_club.schemas.member import MemberCreate, MemberSchema, MemberStatus, MemberUpdate
from sporting_club.schemas.sport import SportCreate, SportSchema, SportUpdate
from sporting_club.schemas.subscription import SubscriptionSchema, SubscriptionStatus
from sporting_club.schemas.views import MemberWithSports, SportWithMembers

__all__ = [
    "MemberCreate",
    "MemberSchema",
    "MemberStatus",
    "MemberUpdate",
    "MemberWithSports",
    "SportCreate",
    "SportSchema",
    "SportUpdate",
    "SportWithMembers",
    "SubscriptionSchema",
    "SubscriptionStatus",
]
