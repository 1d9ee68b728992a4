from fastapi import APIRouter

from .features.create_event.router import router as create_event_router
from .features.delete_event.router import router as delete_event_router
from .features.download_ics.router import router as download_ics_router
from .features.list_events.router import router as list_events_router
from .features.list_rsvps.router import router as list_rsvps_router
from .features.payment_status.router import router as payment_status_router
from .features.submit_rsvp.router import router as submit_rsvp_router

router = APIRouter()

router.include_router(list_events_router)
router.include_router(submit_rsvp_router)
router.include_router(download_ics_router)
router.include_router(payment_status_router)
router.include_router(create_event_router)
router.include_router(delete_event_router)
router.include_router(list_rsvps_router)
