"""Example script driving a webcast through the webinar control gateway.

Set WEBINAR_USER_TOKEN in env.local (or the environment) and adjust the URLs
below for your deployment.
"""

import asyncio
import json

from meeting_webinar import (
    HttpxTransport,
    StaticTokenProvider,
    WebinarControlGateway,
    WebinarSession,
)
from meeting_webinar.log import init_logger
from meeting_webinar.schemas import MeetingInfo, WebcastLayout

# Configuration
LOCUS_URL = "https://locus.example.com/locus/api/v1/loci/1234"
WEBCAST_INSTANCE_URL = "https://webcast.example.com/api/v1/instances/5678"


async def main():
    init_logger()

    session = WebinarSession()
    session.set_control_url(LOCUS_URL)
    # Normally delivered by a locus resource-update event
    session.update_webcast_url({"resources": {"webcastInstance": {"url": WEBCAST_INSTANCE_URL}}})

    result = session.update_role_changed({"oldRoles": ["PANELIST"], "newRoles": ["MODERATOR"]})
    print(f"Promoted: {result.is_promoted}, can manage webcast: {session.can_manage_webcast}")

    layout = WebcastLayout(
        video_layout="Prominent",
        content_layout="Prominent",
        sync_stage_layout=False,
        sync_stage_in_meeting=False,
    )
    meeting = MeetingInfo(locus_id="1234", correlation_id="corr-1")

    async with HttpxTransport() as transport:
        gateway = WebinarControlGateway(session, transport, StaticTokenProvider.from_config())

        print("Starting webcast")
        await gateway.start_webcast(meeting, layout)

        current = await gateway.query_webcast_layout()
        print(f"Current layout: {json.dumps(current, indent=2)}")

        attendees = await gateway.search_webcast_attendee("smith")
        print(f"Attendees: {json.dumps(attendees, indent=2)}")

        print("Stopping webcast")
        await gateway.stop_webcast()


if __name__ == "__main__":
    asyncio.run(main())
