import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from src.events.dependencies import get_event_read_model
from src.events.features.download_ics.ics import generate_ics, ics_filename
from src.events.repository.read_models import EventReadModel
from src.events.urls import DOWNLOAD_EVENT_ICS_URL

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(DOWNLOAD_EVENT_ICS_URL, response_class=Response)
async def download_event_ics(
    event_id: int,
    read_model: EventReadModel = Depends(get_event_read_model),
) -> Response:
    """Download an event as a calendar (.ics) file."""
    event = await read_model.get_event(event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")

    try:
        ics = generate_ics(event)
    except ValueError:
        logger.warning(
            f"Event {event_id} has an unparseable date or time: "
            f"{event.date} {event.start_time}-{event.end_time}"
        )
        raise HTTPException(status_code=422, detail="Event has an invalid date or time")

    return Response(
        content=ics,
        media_type="text/calendar",
        headers={"Content-Disposition": f'attachment; filename="{ics_filename(event)}"'},
    )
