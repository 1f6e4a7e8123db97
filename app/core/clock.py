import datetime
from typing import Optional


def utc_today() -> datetime.date:
    """Server-side "today" for read paths. Write paths take the client's date."""
    return datetime.datetime.now(datetime.timezone.utc).date()


def resolve_today(day: Optional[datetime.date] = None) -> datetime.date:
    """The caller's calendar day when supplied, else the server's UTC day."""
    return day or utc_today()
