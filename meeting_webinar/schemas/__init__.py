from .roles import ROLE_RANKS, UNRANKED, WebinarRole
from .webcast import (
    MeetingInfo,
    RoleChangedPayload,
    RoleTransitionResult,
    WebcastLayout,
)

__all__ = [
    "ROLE_RANKS",
    "UNRANKED",
    "MeetingInfo",
    "RoleChangedPayload",
    "RoleTransitionResult",
    "WebcastLayout",
    "WebinarRole",
]
