from datetime import date, datetime
from pathlib import Path

from fastapi.templating import Jinja2Templates

CURRENCY_SYMBOLS = {"GBP": "£", "USD": "$", "EUR": "€"}

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def currency_symbol(currency: str) -> str:
    return CURRENCY_SYMBOLS.get(currency.upper(), f"{currency.upper()} ")


def format_day(value: str | date | datetime | None) -> str:
    """Render dates like '7 Nov 2026'."""
    if value is None:
        return ""
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value)
        except ValueError:
            return "Invalid Date"
    return f"{value.day} {value.strftime('%b %Y')}"


templates.env.filters["day"] = format_day
