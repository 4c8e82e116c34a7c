"""Webinar participant roles."""

from enum import Enum


class WebinarRole(str, Enum):
    """Roles a participant can hold in a webinar.

    Privilege order:

    ATTENDEE (0) < PANELIST (1) < MODERATOR (2)

    - ATTENDEE: watches the webcast, no stage presence.
    - PANELIST: on stage, can share media.
    - MODERATOR: host or co-host, can manage the webcast.

    Manager roles reported under another name (e.g. COHOST) are folded into
    MODERATOR by ``parse``. Tags are matched exactly, case included.
    """

    ATTENDEE = "ATTENDEE"
    PANELIST = "PANELIST"
    MODERATOR = "MODERATOR"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, raw: object) -> "WebinarRole | None":
        """Map a wire role tag to a role, or None when it is not recognised."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        tag = _ROLE_ALIASES.get(raw, raw)
        try:
            return cls(tag)
        except ValueError:
            return None


_ROLE_ALIASES: dict[str, str] = {
    "COHOST": "MODERATOR",
    "CO_HOST": "MODERATOR",
}

ROLE_RANKS: dict[WebinarRole, int] = {
    WebinarRole.ATTENDEE: 0,
    WebinarRole.PANELIST: 1,
    WebinarRole.MODERATOR: 2,
}

# Rank of a role set with no recognised role, below ATTENDEE
UNRANKED = -1


__all__ = ["ROLE_RANKS", "UNRANKED", "WebinarRole"]
