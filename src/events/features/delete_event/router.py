from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response

from src.auth.admin_pin import get_admin_pin, verify_admin_pin
from src.config.rate_limit import limiter
from src.config.settings import settings
from src.events.dependencies import get_event_write_model
from src.events.repository.write_models import EventWriteModel
from src.events.urls import DELETE_EVENT_URL

router = APIRouter()


@router.post(DELETE_EVENT_URL, response_model=None)
@limiter.limit(settings.admin_rate_limit)
async def delete_event(
    request: Request,
    event_id: Annotated[int, Form(alias="eventId")],
    admin_pin: str = Depends(get_admin_pin),
    write_model: EventWriteModel = Depends(get_event_write_model),
) -> Response:
    """Delete an event and its RSVPs. Requires the admin PIN."""
    await verify_admin_pin(request, admin_pin)

    await write_model.delete_event(event_id)

    redirect_url = settings.redirect_url(delete_event_success="true", event_id=event_id)
    if redirect_url:
        return RedirectResponse(redirect_url, status_code=303)
    return JSONResponse(
        status_code=200,
        content={"message": "Event deleted successfully", "eventId": event_id},
    )
