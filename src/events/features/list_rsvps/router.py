from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from src.auth.admin_pin import get_admin_pin, verify_admin_pin
from src.config.rate_limit import limiter
from src.config.settings import settings
from src.events.dependencies import get_event_read_model
from src.events.rendering import templates
from src.events.repository.read_models import EventReadModel
from src.events.urls import LIST_RSVPS_URL

router = APIRouter()


@router.get(LIST_RSVPS_URL, response_class=HTMLResponse)
@limiter.limit(settings.admin_rate_limit)
async def list_rsvps(
    request: Request,
    admin_pin: str = Depends(get_admin_pin),
    read_model: EventReadModel = Depends(get_event_read_model),
) -> HTMLResponse:
    """RSVPs grouped by event, as an HTML page. Requires the admin PIN in the query string."""
    await verify_admin_pin(request, admin_pin)

    events = await read_model.get_rsvps_by_event()
    return templates.TemplateResponse(request, "rsvps.html", {"events": events})
