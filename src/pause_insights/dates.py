"""Date helpers for labels and the home-screen date strip."""

from dataclasses import dataclass, asdict
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
SHORT_MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


@dataclass
class StripDay:
    """One cell of the scrolling date strip."""
    date: str  # YYYY-MM-DD
    day: str  # "Mon"
    num: int  # day of month
    is_today: bool

    def to_dict(self) -> dict:
        return asdict(self)


def parse_day(value: Union[str, date, datetime]) -> date:
    """Parse YYYY-MM-DD (or a datetime/date) into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value[:10], "%Y-%m-%d").date()


def day_name(d: date) -> str:
    """Full weekday name, e.g. 'Monday'."""
    return DAY_NAMES[d.weekday()]


def short_day_label(d: date) -> str:
    """Three-letter weekday label, e.g. 'Mon'."""
    return DAY_NAMES[d.weekday()][:3]


def short_date_label(d: date) -> str:
    """'Jan 5' style label."""
    return f"{SHORT_MONTHS[d.month - 1]} {d.day}"


def format_date_header(d: date, today: Optional[date] = None) -> str:
    """Header for a selected day: 'Today', 'Yesterday' or 'Monday, Jan 5'."""
    today = today or date.today()
    if d == today:
        return "Today"
    if d == today - timedelta(days=1):
        return "Yesterday"
    return f"{day_name(d)}, {short_date_label(d)}"


def build_date_strip(today: Optional[date] = None, count: int = 14) -> List[StripDay]:
    """Last `count` days ending today, oldest first."""
    today = today or date.today()
    days = []
    for offset in range(count - 1, -1, -1):
        d = today - timedelta(days=offset)
        days.append(StripDay(
            date=d.isoformat(),
            day=short_day_label(d),
            num=d.day,
            is_today=offset == 0,
        ))
    return days
