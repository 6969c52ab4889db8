from datetime import datetime, timedelta, timezone

DATE_FORMATS = ['%Y-%m-%d', '%B %d, %Y', '%m/%d/%Y', '%d/%m/%Y']


def parse_date_string(date_str):
    """Parse a sheet date cell in ISO or readable format. Returns None if it isn't a date."""
    if not isinstance(date_str, str) or not date_str.strip():
        return None
    date_str = date_str.strip()

    if 'T' in date_str:
        # ISO instant (2025-09-17T00:00:00.000Z)
        try:
            return datetime.fromisoformat(date_str.replace('Z', '+00:00')).date()
        except ValueError:
            return None

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue
    return None


def start_of_day(day):
    """Midnight UTC at the start of a calendar date"""
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def end_of_day(day):
    return start_of_day(day) + timedelta(hours=24)


def date_to_iso_instant(day):
    """Serialize a date the way browsers print Date.toISOString() for midnight UTC"""
    return start_of_day(day).strftime('%Y-%m-%dT%H:%M:%S.000Z')


def utc_now():
    return datetime.now(timezone.utc)


def reference_instant(tz_offset_minutes=0, now=None):
    """
    Shift "now" so that its UTC calendar day is the client's local day.
    tz_offset_minutes follows Date.getTimezoneOffset(): UTC minus local time,
    so UTC+2 is -120.
    """
    now = now or utc_now()
    return now - timedelta(minutes=tz_offset_minutes)
