"""
Display formatting for ledger timestamps
"""
from datetime import datetime


def format_date(value: datetime) -> str:
    """Format as M/D/YYYY without zero padding, e.g. 3/7/2024"""
    return f"{value.month}/{value.day}/{value.year}"


def format_time(value: datetime) -> str:
    """Format as 12-hour H:MM AM/PM without hour padding, e.g. 9:05 PM"""
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {meridiem}"
