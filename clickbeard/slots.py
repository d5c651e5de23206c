# clickbeard/slots.py

"""Fixed daily schedule: 08:00 to 18:00 in 30-minute slots."""

from datetime import date, datetime, time, timedelta
from typing import List

OPEN_HOUR = 8
CLOSE_HOUR = 18
SLOT_MINUTES = 30


def generate_all_slots() -> List[str]:
    slots = []
    for hour in range(OPEN_HOUR, CLOSE_HOUR):
        for minute in range(0, 60, SLOT_MINUTES):
            slots.append(format_slot(time(hour, minute)))
    return slots


def format_slot(value: time) -> str:
    return value.strftime("%H:%M:%S")


def is_within_working_hours(value: time) -> bool:
    return OPEN_HOUR <= value.hour < CLOSE_HOUR


def is_on_slot_grid(value: time) -> bool:
    return value.minute % SLOT_MINUTES == 0 and value.second == 0 and value.microsecond == 0


def combine(on_date: date, at: time) -> datetime:
    return datetime.combine(on_date, at)


def is_in_future(on_date: date, at: time, now: datetime) -> bool:
    return combine(on_date, at) > now


def lead_time(on_date: date, at: time, now: datetime) -> timedelta:
    return combine(on_date, at) - now
