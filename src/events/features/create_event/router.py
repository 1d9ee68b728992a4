from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse, Response
from pydantic import ValidationError

from src.auth.admin_pin import get_admin_pin, verify_admin_pin
from src.config.rate_limit import limiter
from src.config.settings import settings
from src.events.dependencies import get_event_write_model
from src.events.dtos import DATE_PATTERN, TIME_PATTERN, EventCreate
from src.events.repository.write_models import EventWriteModel
from src.events.urls import CREATE_EVENT_URL

router = APIRouter()


@router.post(CREATE_EVENT_URL, response_model=None, status_code=201)
@limiter.limit(settings.admin_rate_limit)
async def create_event(
    request: Request,
    event_title: Annotated[str, Form(alias="eventTitle", min_length=1)],
    event_date: Annotated[str, Form(alias="eventDate", pattern=DATE_PATTERN)],
    event_start_time: Annotated[str, Form(alias="eventStartTime", pattern=TIME_PATTERN)],
    event_end_time: Annotated[str, Form(alias="eventEndTime", pattern=TIME_PATTERN)],
    event_price: Annotated[float, Form(alias="eventPrice", ge=0)],
    event_location: Annotated[str, Form(alias="eventLocation", min_length=1)],
    event_description: Annotated[str, Form(alias="eventDescription")] = "",
    admin_pin: str = Depends(get_admin_pin),
    write_model: EventWriteModel = Depends(get_event_write_model),
) -> Response:
    """Create an event. Requires the admin PIN."""
    await verify_admin_pin(request, admin_pin)

    try:
        event = EventCreate(
            event_title=event_title,
            event_description=event_description,
            event_date=event_date,
            event_start_time=event_start_time,
            event_end_time=event_end_time,
            event_price=event_price,
            event_location=event_location,
        )
    except ValidationError as e:
        # checks beyond the form constraints, reported like any other bad input
        raise RequestValidationError(e.errors(include_url=False, include_context=False))

    created = await write_model.add_event(event)

    redirect_url = settings.redirect_url(create_event_success="true", event_id=created.id)
    if redirect_url:
        return RedirectResponse(redirect_url, status_code=303)
    return JSONResponse(
        status_code=201,
        content={
            "message": "Event created successfully",
            "eventId": created.id,
            "event": event.model_dump(by_alias=True, mode="json"),
        },
    )
