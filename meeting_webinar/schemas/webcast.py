from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from meeting_webinar.schemas.roles import WebinarRole


class WebcastLayout(BaseModel):
    """Stage layout of the webcast stream.

    Unknown keys are kept so layouts pushed by newer servers survive a
    query/update round trip.
    """

    video_layout: str | None = Field(
        default=None,
        alias="videoLayout",
        validation_alias=AliasChoices("videoLayout", "video_layout"),
    )
    content_layout: str | None = Field(
        default=None,
        alias="contentLayout",
        validation_alias=AliasChoices("contentLayout", "content_layout"),
    )
    sync_stage_layout: bool | None = Field(
        default=None,
        alias="syncStageLayout",
        validation_alias=AliasChoices("syncStageLayout", "sync_stage_layout"),
    )
    sync_stage_in_meeting: bool | None = Field(
        default=None,
        alias="syncStageInMeeting",
        validation_alias=AliasChoices("syncStageInMeeting", "sync_stage_in_meeting"),
    )

    model_config = ConfigDict(populate_by_name=True, serialize_by_alias=True, extra="allow")


class MeetingInfo(BaseModel):
    locus_id: str | None = Field(
        default=None,
        alias="locusId",
        validation_alias=AliasChoices("locusId", "locus_id"),
    )
    correlation_id: str | None = Field(
        default=None,
        alias="correlationId",
        validation_alias=AliasChoices("correlationId", "correlation_id"),
    )

    model_config = ConfigDict(populate_by_name=True, serialize_by_alias=True)

    @classmethod
    def from_meeting(cls, meeting: Any) -> MeetingInfo:
        """Build from a meeting object (attributes) or a mapping (wire keys)."""
        if isinstance(meeting, MeetingInfo):
            return meeting
        if isinstance(meeting, dict):
            return cls.model_validate(meeting)
        return cls(
            locus_id=getattr(meeting, "locus_id", None),
            correlation_id=getattr(meeting, "correlation_id", None),
        )


class PracticeSessionControl(BaseModel):
    enabled: bool


class PracticeSessionControlBody(BaseModel):
    practice_session: PracticeSessionControl = Field(
        ...,
        alias="practiceSession",
        validation_alias=AliasChoices("practiceSession", "practice_session"),
    )

    model_config = ConfigDict(populate_by_name=True, serialize_by_alias=True)


class StartWebcastBody(BaseModel):
    action: Literal["start"] = "start"
    meeting_info: MeetingInfo = Field(
        ...,
        alias="meetingInfo",
        validation_alias=AliasChoices("meetingInfo", "meeting_info"),
    )
    layout: Any = None

    model_config = ConfigDict(populate_by_name=True, serialize_by_alias=True)


class StopWebcastBody(BaseModel):
    action: Literal["stop"] = "stop"


class UpdateWebcastLayoutBody(BaseModel):
    layout: Any = None


class RoleChangedPayload(BaseModel):
    """Role-change event as delivered by the event bus.

    Role lists are kept as raw strings; unknown tags are ranked, not rejected.
    """

    old_roles: list[str] = Field(
        default_factory=list,
        alias="oldRoles",
        validation_alias=AliasChoices("oldRoles", "old_roles"),
    )
    new_roles: list[str] = Field(
        default_factory=list,
        alias="newRoles",
        validation_alias=AliasChoices("newRoles", "new_roles"),
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("old_roles", "new_roles", mode="before")
    @classmethod
    def _coerce_roles(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if not isinstance(value, (list, tuple, set, frozenset)):
            return []
        return [str(item) for item in value if isinstance(item, (str, WebinarRole))]


class RoleTransitionResult(BaseModel):
    is_promoted: bool = False
    is_demoted: bool = False
    old_role: WebinarRole | None = None
    new_role: WebinarRole | None = None


def dump_layout(layout: Any) -> Any:
    """Serialize a layout for a request body, passing plain mappings through."""
    if isinstance(layout, BaseModel):
        return layout.model_dump(by_alias=True, exclude_none=True)
    return layout


__all__ = [
    "MeetingInfo",
    "PracticeSessionControl",
    "PracticeSessionControlBody",
    "RoleChangedPayload",
    "RoleTransitionResult",
    "StartWebcastBody",
    "StopWebcastBody",
    "UpdateWebcastLayoutBody",
    "WebcastLayout",
    "dump_layout",
]
