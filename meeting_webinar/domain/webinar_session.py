"""In-memory webinar state owned by a meeting."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from glom import glom
from glom.core import GlomError
from loguru import logger
from pydantic import ValidationError

from meeting_webinar.domain.role_tracker import RoleTracker
from meeting_webinar.schemas.webcast import RoleChangedPayload, RoleTransitionResult

WEBCAST_URL_PATH = "resources.webcastInstance.url"


def get_path(payload: Any, path: str) -> Any:
    """Read a dotted path from a JSON-like value, returning None on any missing segment."""
    return glom(payload, path, default=None, skip_exc=GlomError)


@dataclass
class WebinarSession:
    """Webinar state of the local participant.

    Created empty with the meeting and mutated in place by event handlers.
    """

    control_url: str | None = None
    webcast_url: str | None = None
    self_is_panelist: bool = False
    self_is_attendee: bool = False
    can_manage_webcast: bool = False
    practice_session_enabled: bool | None = None

    def set_control_url(self, url: str | None) -> None:
        self.control_url = url

    def update_webcast_url(self, payload: Any) -> None:
        """Take the webcast instance url from a resource-update payload, if present."""
        url = get_path(payload, WEBCAST_URL_PATH)
        if url is None:
            logger.debug("Resource update carries no webcast instance url, keeping {}", self.webcast_url)
            return
        self.webcast_url = url

    def update_can_manage_webcast(self, can_manage_webcast: bool) -> None:
        self.can_manage_webcast = can_manage_webcast

    def update_practice_session_status(self, payload: Any) -> None:
        self.practice_session_enabled = get_path(payload, "enabled")

    def update_role_changed(self, payload: Any) -> RoleTransitionResult:
        """Apply a role-change event ``{"oldRoles": [...], "newRoles": [...]}``.

        Malformed payloads are treated as empty role sets.
        """
        event = RoleChangedPayload()
        if isinstance(payload, Mapping):
            try:
                event = RoleChangedPayload.model_validate(dict(payload))
            except ValidationError as e:
                logger.warning("Ignoring malformed role change payload: {}", e)

        result = RoleTracker.apply_role_change(self, event.old_roles, event.new_roles)
        logger.debug(
            "Role changed {} -> {} promoted={} demoted={}",
            result.old_role,
            result.new_role,
            result.is_promoted,
            result.is_demoted,
        )
        return result
