"""Client-side webinar state and webcast control for real-time meetings."""

from meeting_webinar.domain.role_tracker import RoleTracker
from meeting_webinar.domain.webinar_session import WebinarSession
from meeting_webinar.errors import WebinarError, WebinarErrorCode
from meeting_webinar.services.credentials import CallableTokenProvider, StaticTokenProvider
from meeting_webinar.services.transport import HttpxTransport, RequestDescriptor
from meeting_webinar.services.webinar_gateway import WebinarControlGateway

__all__ = [
    "CallableTokenProvider",
    "HttpxTransport",
    "RequestDescriptor",
    "RoleTracker",
    "StaticTokenProvider",
    "WebinarControlGateway",
    "WebinarError",
    "WebinarErrorCode",
    "WebinarSession",
]
