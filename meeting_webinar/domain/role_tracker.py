"""Role tracker deriving capabilities and promotion/demotion from role changes."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from meeting_webinar.schemas.roles import ROLE_RANKS, UNRANKED, WebinarRole
from meeting_webinar.schemas.webcast import RoleTransitionResult

if TYPE_CHECKING:
    from meeting_webinar.domain.webinar_session import WebinarSession


class RoleTracker:
    """Classifies role-change events for the local participant.

    Capability flags follow role membership of the new role set:
    - PANELIST in new roles -> self_is_panelist
    - ATTENDEE in new roles -> self_is_attendee
    - MODERATOR in new roles -> can_manage_webcast

    The three flags are assigned independently, so a multi-role set unions
    capabilities. Promotion/demotion compares only the highest-ranked
    recognised role on each side (see ROLE_RANKS); unrecognised tags rank
    below ATTENDEE and two role sets with no recognised role are equal.
    """

    @classmethod
    def parse_roles(cls, raw: Iterable[object] | None) -> set[WebinarRole]:
        """Parse raw role tags, dropping anything unrecognised.

        Args:
            raw: Role tags from an event payload (may be None or malformed)

        Returns:
            Set of recognised roles
        """
        if raw is None:
            return set()
        if isinstance(raw, str):
            raw = [raw]
        try:
            items = list(raw)
        except TypeError:
            return set()
        roles = {WebinarRole.parse(item) for item in items}
        roles.discard(None)
        return roles  # type: ignore[return-value]

    @classmethod
    def rank(cls, role: WebinarRole | None) -> int:
        if role is None:
            return UNRANKED
        return ROLE_RANKS.get(role, UNRANKED)

    @classmethod
    def highest(cls, roles: Iterable[WebinarRole]) -> WebinarRole | None:
        """Return the highest-ranked role, or None for an empty set."""
        return max(roles, key=cls.rank, default=None)

    @classmethod
    def classify(
        cls, old_roles: set[WebinarRole], new_roles: set[WebinarRole]
    ) -> RoleTransitionResult:
        old_role = cls.highest(old_roles)
        new_role = cls.highest(new_roles)
        old_rank = cls.rank(old_role)
        new_rank = cls.rank(new_role)
        return RoleTransitionResult(
            is_promoted=new_rank > old_rank,
            is_demoted=new_rank < old_rank,
            old_role=old_role,
            new_role=new_role,
        )

    @classmethod
    def apply_role_change(
        cls,
        session: WebinarSession,
        old_roles: Iterable[object] | None,
        new_roles: Iterable[object] | None,
    ) -> RoleTransitionResult:
        """Update the session's capability flags and classify the transition.

        Args:
            session: Session whose flags are updated in place
            old_roles: Role tags before the change
            new_roles: Role tags after the change

        Returns:
            RoleTransitionResult with promotion/demotion flags
        """
        old = cls.parse_roles(old_roles)
        new = cls.parse_roles(new_roles)

        session.self_is_panelist = WebinarRole.PANELIST in new
        session.self_is_attendee = WebinarRole.ATTENDEE in new
        session.can_manage_webcast = WebinarRole.MODERATOR in new

        return cls.classify(old, new)
