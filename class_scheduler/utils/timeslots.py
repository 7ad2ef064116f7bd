from datetime import date, datetime, time, timedelta


def week_anchor(reference: datetime | date) -> datetime:
    """
    Midnight of the Monday of the week containing `reference`.

    date.weekday() is Monday=0..Sunday=6, i.e. (sunday_based_day + 6) % 7,
    so it is already the number of days to step back.
    """
    day = reference.date() if isinstance(reference, datetime) else reference
    monday = day - timedelta(days=day.weekday())
    return datetime.combine(monday, time(0, 0, 0))


def format_time_of_day(instant: datetime | time) -> str:
    """
    datetime(2026, 10, 19, 9, 5) -> "09:05:00"
    """
    return f"{instant.hour:02d}:{instant.minute:02d}:{instant.second:02d}"


def parse_time_of_day(value: str) -> time:
    """
    "09:30" -> time(9, 30, 0), "09:30:15" -> time(9, 30, 15)
    """
    parts = (value or "").strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"invalid time of day: {value!r}")
    hh, mm = int(parts[0]), int(parts[1])
    # missing seconds default to zero
    ss = int(parts[2]) if len(parts) == 3 and parts[2] != "" else 0
    return time(hh, mm, ss)


def overlaps(start_a, end_a, start_b, end_b) -> bool:
    """
    Half-open interval test [start_a, end_a) vs [start_b, end_b).
    Touching endpoints do not overlap; zero-length intervals overlap nothing.
    """
    return start_a < end_b and end_a > start_b and start_a < end_a and start_b < end_b


def to_local_naive(instant: datetime) -> datetime:
    """
    Aware datetimes ("...Z" from a browser) -> naive local time.
    Naive ones are already local and pass through.
    """
    if instant.tzinfo is None or instant.utcoffset() is None:
        return instant
    return instant.astimezone().replace(tzinfo=None)
