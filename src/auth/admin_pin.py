import logging
import secrets

from fastapi import HTTPException, Request

from src.config.settings import settings

logger = logging.getLogger(__name__)

ADMIN_PIN_FIELD = "adminPIN"


def get_admin_pin() -> str:
    """Dependency returning the configured admin PIN. Override in tests."""
    return settings.admin_pin


async def verify_admin_pin(request: Request, required_pin: str) -> None:
    """
    Reject the request unless it carries the admin PIN.

    The PIN is read from the form body first, then the query string. An
    empty configured PIN rejects every request. Called from inside rate
    limited endpoints so failed attempts count against the admin limit.
    """
    provided_pin = None
    if request.method == "POST":
        form = await request.form()
        provided_pin = form.get(ADMIN_PIN_FIELD)
    if provided_pin is None:
        provided_pin = request.query_params.get(ADMIN_PIN_FIELD)

    if (
        not required_pin
        or not isinstance(provided_pin, str)
        or not secrets.compare_digest(provided_pin.encode(), required_pin.encode())
    ):
        logger.warning(f"Rejected admin request to {request.url.path}")
        raise HTTPException(status_code=401, detail="Unauthorized - Invalid PIN")
