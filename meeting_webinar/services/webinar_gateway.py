"""Webinar control gateway.

Every control operation follows the same pipeline:
1. resolve credentials (token + tracking id) when the endpoint needs them
2. build a RequestDescriptor
3. send it through the transport and return its result unchanged

Any failure along the way is logged once as ``Meeting:webinar#<op> failed``
and re-raised as is.

Usage:
    gateway = WebinarControlGateway(session, transport, StaticTokenProvider(token))
    session.update_webcast_url(resource_update)
    await gateway.start_webcast(meeting, layout)
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any
from urllib.parse import quote

from meeting_webinar.config import get_webinar_environ_config
from meeting_webinar.domain.webinar_session import WebinarSession
from meeting_webinar.errors import WebinarError, WebinarErrorCode
from meeting_webinar.log import ErrorLogger, LoggerProxy
from meeting_webinar.schemas.webcast import (
    MeetingInfo,
    PracticeSessionControl,
    PracticeSessionControlBody,
    StartWebcastBody,
    StopWebcastBody,
    UpdateWebcastLayoutBody,
    dump_layout,
)
from meeting_webinar.services.credentials import CredentialProvider
from meeting_webinar.services.transport import RequestDescriptor, Transport
from meeting_webinar.utils.idgen import new_tracking_id

JSON_CONTENT_TYPE = "application/json"


class WebinarControlGateway:
    def __init__(
        self,
        session: WebinarSession,
        transport: Transport,
        credentials: CredentialProvider,
        *,
        logger: ErrorLogger | None = None,
        client_namespace: str | None = None,
    ) -> None:
        self.session = session
        self._transport = transport
        self._credentials = credentials
        self._logger = logger if logger is not None else LoggerProxy()
        self._client_namespace = (
            client_namespace or get_webinar_environ_config().WEBINAR_CLIENT_NAMESPACE
        )

    async def _authorized_headers(self, with_content_type: bool = False) -> dict[str, str]:
        """Resolve the bearer token and stamp a fresh tracking id."""
        token = await self._credentials.get_token()
        headers = {
            "authorization": token,
            "trackingId": new_tracking_id(self._client_namespace),
        }
        if with_content_type:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        return headers

    async def _dispatch(
        self, operation: str, build: Callable[[], Awaitable[RequestDescriptor]]
    ) -> Any:
        try:
            descriptor = await build()
            return await self._transport.send(descriptor)
        except Exception as e:
            self._logger.error(f"Meeting:webinar#{operation} failed", e)
            raise

    def _control_url(self) -> str:
        if not self.session.control_url:
            raise WebinarError(
                errcode=WebinarErrorCode.E_ENDPOINT_NOT_CONFIGURED,
                errmesg="Control url is not set",
            )
        return self.session.control_url

    def _webcast_url(self) -> str:
        if not self.session.webcast_url:
            raise WebinarError(
                errcode=WebinarErrorCode.E_ENDPOINT_NOT_CONFIGURED,
                errmesg="Webcast instance url is not set",
            )
        return self.session.webcast_url

    async def set_practice_session_state(self, enabled: bool) -> Any:
        """Enable or disable the practice session. Uses transport default headers only."""

        async def build() -> RequestDescriptor:
            body = PracticeSessionControlBody(
                practice_session=PracticeSessionControl(enabled=enabled)
            )
            return RequestDescriptor(
                method="PATCH",
                uri=f"{self._control_url()}/controls",
                body=body.model_dump(by_alias=True),
            )

        return await self._dispatch("setPracticeSessionState", build)

    async def start_webcast(self, meeting: Any, layout: Any) -> Any:
        """Start streaming the meeting to the webcast.

        Args:
            meeting: Object with locus_id/correlation_id, or a mapping with locusId/correlationId
            layout: WebcastLayout or plain mapping, sent as is
        """

        async def build() -> RequestDescriptor:
            uri = f"{self._webcast_url()}/streaming"
            headers = await self._authorized_headers(with_content_type=True)
            body = StartWebcastBody(
                meeting_info=MeetingInfo.from_meeting(meeting),
                layout=dump_layout(layout),
            )
            return RequestDescriptor(
                method="PUT",
                uri=uri,
                headers=headers,
                body=body.model_dump(by_alias=True),
            )

        return await self._dispatch("startWebcast", build)

    async def stop_webcast(self) -> Any:
        async def build() -> RequestDescriptor:
            uri = f"{self._webcast_url()}/streaming"
            headers = await self._authorized_headers(with_content_type=True)
            return RequestDescriptor(
                method="PUT",
                uri=uri,
                headers=headers,
                body=StopWebcastBody().model_dump(),
            )

        return await self._dispatch("stopWebcast", build)

    async def query_webcast_layout(self) -> Any:
        async def build() -> RequestDescriptor:
            uri = f"{self._webcast_url()}/layout"
            headers = await self._authorized_headers()
            return RequestDescriptor(method="GET", uri=uri, headers=headers)

        return await self._dispatch("queryWebcastLayout", build)

    async def update_webcast_layout(self, layout: Any) -> Any:
        async def build() -> RequestDescriptor:
            uri = f"{self._webcast_url()}/layout"
            headers = await self._authorized_headers(with_content_type=True)
            body = UpdateWebcastLayoutBody(layout=dump_layout(layout))
            return RequestDescriptor(
                method="PUT",
                uri=uri,
                headers=headers,
                body=body.model_dump(),
            )

        return await self._dispatch("updateWebcastLayout", build)

    async def search_webcast_attendee(self, query: str | None = None) -> Any:
        """Search webcast attendees by keyword; a missing query searches with an empty keyword."""

        async def build() -> RequestDescriptor:
            keyword = quote(query if query is not None else "", safe="")
            uri = f"{self._webcast_url()}/attendees?keyword={keyword}"
            headers = await self._authorized_headers()
            return RequestDescriptor(method="GET", uri=uri, headers=headers)

        return await self._dispatch("searchWebcastAttendee", build)

    async def expel_webcast_attendee(self, participant_id: str) -> Any:
        async def build() -> RequestDescriptor:
            uri = f"{self._webcast_url()}/attendees/{participant_id}"
            headers = await self._authorized_headers()
            return RequestDescriptor(method="DELETE", uri=uri, headers=headers)

        return await self._dispatch("expelWebcastAttendee", build)
