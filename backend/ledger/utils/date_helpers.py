import calendar
from datetime import datetime, time, timedelta

PERIODS = ("daily", "monthly", "yearly", "all")


def period_range(period: str, now: datetime) -> tuple[datetime, datetime] | None:
    """Return the (start, end) datetimes covering ``period`` around ``now``.

    Ends are inclusive, down to the microsecond. ``"all"`` returns None.
    E.g. monthly on 2026-02-10 -> (2026-02-01 00:00, 2026-02-28 23:59:59.999999).
    """
    if period == "all":
        return None
    tz = now.tzinfo
    if period == "daily":
        start = datetime.combine(now.date(), time.min, tzinfo=tz)
        return start, datetime.combine(now.date(), time.max, tzinfo=tz)
    if period == "monthly":
        start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        last_day = calendar.monthrange(now.year, now.month)[1]
        end = start.replace(day=last_day) + timedelta(days=1, microseconds=-1)
        return start, end
    if period == "yearly":
        start = now.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
        end = now.replace(month=12, day=31, hour=23, minute=59, second=59, microsecond=999999)
        return start, end
    raise ValueError(f"Invalid period: {period}")
