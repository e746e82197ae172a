from datetime import date, datetime, timedelta


def parse_iso_date(value) -> date | None:
    """Coerce a date, datetime or ISO string into a ``date``.

    ``None`` and empty strings map to ``None``; anything else unparseable
    raises ``ValueError``.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    # timestamps such as "2024-03-01T09:00:00+00:00"
    if len(text) > 10:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return date.fromisoformat(text)


def sunday_weekday(d: date) -> int:
    """Day of week with 0=Sunday..6=Saturday."""
    return (d.weekday() + 1) % 7


def day_range(start: date, days: int):
    """Yield ``start`` and each of the following ``days`` dates."""
    for offset in range(days + 1):
        yield start + timedelta(days=offset)
