"""Tests for WebinarControlGateway request building and failure handling."""

from unittest.mock import patch

import httpx
import pytest

from meeting_webinar.domain.webinar_session import WebinarSession
from meeting_webinar.errors import WebinarError, WebinarErrorCode
from meeting_webinar.log import LoggerProxy
from meeting_webinar.schemas.webcast import WebcastLayout
from meeting_webinar.services.transport import HttpxTransport, RequestDescriptor
from meeting_webinar.services.webinar_gateway import WebinarControlGateway

LAYOUT = {
    "videoLayout": "Prominent",
    "contentLayout": "Prominent",
    "syncStageLayout": False,
    "syncStageInMeeting": False,
}

AUTH_HEADERS = {
    "authorization": "test-token",
    "trackingId": "webinar-client_test-uuid",
}

JSON_AUTH_HEADERS = {**AUTH_HEADERS, "Content-Type": "application/json"}


class _Meeting:
    def __init__(self) -> None:
        self.locus_id = "locusId"
        self.correlation_id = "correlationId"


@pytest.fixture(autouse=True)
def fixed_uuid():
    with patch("meeting_webinar.utils.idgen.uuid4", return_value="test-uuid"):
        yield


@pytest.fixture
def gateway(webinar_session, transport, credentials, error_logger) -> WebinarControlGateway:
    return WebinarControlGateway(
        webinar_session,
        transport,
        credentials,
        logger=error_logger,
        client_namespace="webinar-client",
    )


# (operation name in logs, coroutine factory)
OPERATIONS = [
    ("setPracticeSessionState", lambda gw: gw.set_practice_session_state(True)),
    ("startWebcast", lambda gw: gw.start_webcast(_Meeting(), LAYOUT)),
    ("stopWebcast", lambda gw: gw.stop_webcast()),
    ("queryWebcastLayout", lambda gw: gw.query_webcast_layout()),
    ("updateWebcastLayout", lambda gw: gw.update_webcast_layout(LAYOUT)),
    ("searchWebcastAttendee", lambda gw: gw.search_webcast_attendee("queryString")),
    ("expelWebcastAttendee", lambda gw: gw.expel_webcast_attendee("participantId")),
]

TOKEN_OPERATIONS = [op for op in OPERATIONS if op[0] != "setPracticeSessionState"]


class TestSetPracticeSessionState:
    @pytest.mark.parametrize("enabled", [True, False])
    async def test_sends_patch(self, gateway, transport, credentials, enabled):
        result = await gateway.set_practice_session_state(enabled)

        transport.send.assert_awaited_once_with(
            RequestDescriptor(
                method="PATCH",
                uri="locusUrl/controls",
                body={"practiceSession": {"enabled": enabled}},
            )
        )
        sent = transport.send.await_args.args[0]
        assert sent.headers is None
        credentials.get_token.assert_not_awaited()
        assert result == "REQUEST_RETURN_VALUE"


class TestStartWebcast:
    async def test_sends_put(self, gateway, transport):
        result = await gateway.start_webcast(_Meeting(), LAYOUT)

        transport.send.assert_awaited_once_with(
            RequestDescriptor(
                method="PUT",
                uri="webcastInstanceUrl/streaming",
                headers=JSON_AUTH_HEADERS,
                body={
                    "action": "start",
                    "meetingInfo": {"locusId": "locusId", "correlationId": "correlationId"},
                    "layout": LAYOUT,
                },
            )
        )
        assert result == "REQUEST_RETURN_VALUE"

    async def test_accepts_mapping_meeting_and_layout_model(self, gateway, transport):
        meeting = {"locusId": "locusId", "correlationId": "correlationId"}

        await gateway.start_webcast(meeting, WebcastLayout.model_validate(LAYOUT))

        sent = transport.send.await_args.args[0]
        assert sent.body["meetingInfo"] == meeting
        assert sent.body["layout"] == LAYOUT


class TestStopWebcast:
    async def test_sends_put(self, gateway, transport):
        result = await gateway.stop_webcast()

        transport.send.assert_awaited_once_with(
            RequestDescriptor(
                method="PUT",
                uri="webcastInstanceUrl/streaming",
                headers=JSON_AUTH_HEADERS,
                body={"action": "stop"},
            )
        )
        assert result == "REQUEST_RETURN_VALUE"


class TestWebcastLayout:
    async def test_query_sends_get(self, gateway, transport):
        result = await gateway.query_webcast_layout()

        transport.send.assert_awaited_once_with(
            RequestDescriptor(method="GET", uri="webcastInstanceUrl/layout", headers=AUTH_HEADERS)
        )
        assert result == "REQUEST_RETURN_VALUE"

    async def test_update_sends_put(self, gateway, transport):
        result = await gateway.update_webcast_layout(LAYOUT)

        transport.send.assert_awaited_once_with(
            RequestDescriptor(
                method="PUT",
                uri="webcastInstanceUrl/layout",
                headers=JSON_AUTH_HEADERS,
                body={"layout": LAYOUT},
            )
        )
        assert result == "REQUEST_RETURN_VALUE"


class TestWebcastAttendees:
    async def test_search_sends_get(self, gateway, transport):
        result = await gateway.search_webcast_attendee("queryString")

        transport.send.assert_awaited_once_with(
            RequestDescriptor(
                method="GET",
                uri="webcastInstanceUrl/attendees?keyword=queryString",
                headers=AUTH_HEADERS,
            )
        )
        assert result == "REQUEST_RETURN_VALUE"

    async def test_search_without_query_uses_empty_keyword(self, gateway, transport):
        await gateway.search_webcast_attendee(None)

        sent = transport.send.await_args.args[0]
        assert sent.uri == "webcastInstanceUrl/attendees?keyword="

    async def test_search_percent_encodes_keyword(self, gateway, transport):
        """Test reserved characters stay inside the keyword parameter."""
        await gateway.search_webcast_attendee("#1 & co")

        sent = transport.send.await_args.args[0]
        assert sent.uri == "webcastInstanceUrl/attendees?keyword=%231%20%26%20co"

    async def test_search_keyword_reaches_server_intact(self, credentials, error_logger):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"attendees": []})

        session = WebinarSession(webcast_url="https://webcast.example/instance")
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            gateway = WebinarControlGateway(
                session, HttpxTransport(client=client), credentials, logger=error_logger
            )
            result = await gateway.search_webcast_attendee("a+b=c #1 & co")

        assert result == {"attendees": []}
        assert seen[0].url.path == "/instance/attendees"
        assert seen[0].url.params["keyword"] == "a+b=c #1 & co"
        error_logger.error.assert_not_called()

    async def test_expel_sends_delete(self, gateway, transport):
        result = await gateway.expel_webcast_attendee("participantId")

        transport.send.assert_awaited_once_with(
            RequestDescriptor(
                method="DELETE",
                uri="webcastInstanceUrl/attendees/participantId",
                headers=AUTH_HEADERS,
            )
        )
        assert result == "REQUEST_RETURN_VALUE"


class TestFailures:
    @pytest.mark.parametrize("operation, call", OPERATIONS)
    async def test_transport_failure_is_logged_and_reraised(
        self, gateway, transport, error_logger, operation, call
    ):
        error = RuntimeError("API_ERROR")
        transport.send.side_effect = error

        with pytest.raises(RuntimeError) as exc_info:
            await call(gateway)

        assert exc_info.value is error
        error_logger.error.assert_called_once_with(f"Meeting:webinar#{operation} failed", error)

    @pytest.mark.parametrize("operation, call", TOKEN_OPERATIONS)
    async def test_credential_failure_is_logged_and_reraised(
        self, gateway, transport, credentials, error_logger, operation, call
    ):
        error = RuntimeError("TOKEN_ERROR")
        credentials.get_token.side_effect = error

        with pytest.raises(RuntimeError) as exc_info:
            await call(gateway)

        assert exc_info.value is error
        error_logger.error.assert_called_once_with(f"Meeting:webinar#{operation} failed", error)
        transport.send.assert_not_awaited()

    @pytest.mark.parametrize("operation, call", OPERATIONS)
    async def test_missing_endpoint_is_logged_and_raised(
        self, transport, credentials, error_logger, operation, call
    ):
        gateway = WebinarControlGateway(
            WebinarSession(), transport, credentials, logger=error_logger
        )

        with pytest.raises(WebinarError) as exc_info:
            await call(gateway)

        assert exc_info.value.errcode is WebinarErrorCode.E_ENDPOINT_NOT_CONFIGURED
        error_logger.error.assert_called_once_with(
            f"Meeting:webinar#{operation} failed", exc_info.value
        )
        transport.send.assert_not_awaited()


class TestTrackingId:
    async def test_fresh_tracking_id_per_call(self, webinar_session, transport, credentials):
        gateway = WebinarControlGateway(
            webinar_session, transport, credentials, client_namespace="ns"
        )
        with patch("meeting_webinar.utils.idgen.uuid4", side_effect=["uuid-1", "uuid-2"]):
            await gateway.query_webcast_layout()
            await gateway.query_webcast_layout()

        tracking_ids = [c.args[0].headers["trackingId"] for c in transport.send.await_args_list]
        assert tracking_ids == ["ns_uuid-1", "ns_uuid-2"]

    async def test_default_namespace_comes_from_config(self, webinar_session, transport, credentials):
        gateway = WebinarControlGateway(webinar_session, transport, credentials)

        await gateway.stop_webcast()

        sent = transport.send.await_args.args[0]
        assert sent.headers["trackingId"] == "webinar-client_test-uuid"


def test_default_error_logger_is_logger_proxy(webinar_session, transport, credentials):
    gateway = WebinarControlGateway(webinar_session, transport, credentials)

    assert isinstance(gateway._logger, LoggerProxy)
