# clickbeard/deps.py

from datetime import datetime, timedelta
from enum import Enum

from fastapi import Depends

from .auth import get_current_user
from .config import settings
from .errors import ForbiddenError
from .models import Appointment
from .slots import lead_time


class Capability(str, Enum):
    ALLOWED = "allowed"
    NOT_OWNER = "not_owner"
    NOT_CANCELLABLE = "not_cancellable"
    TOO_LATE = "too_late"


def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    if not current_user["is_admin"]:
        raise ForbiddenError("Acesso negado. Apenas administradores.")
    return current_user


def is_owner_or_admin(user: dict, appointment: Appointment) -> bool:
    return user["is_admin"] or appointment.user_id == user["id"]


def cancel_capability(user: dict, appointment: Appointment, now: datetime) -> Capability:
    """Decide whether ``user`` may cancel ``appointment`` at ``now``.

    Checks run in order: ownership, state, then the lead-time cutoff.
    Administrators are exempt from the cutoff only.
    """
    if not is_owner_or_admin(user, appointment):
        return Capability.NOT_OWNER

    if appointment.status != "scheduled":
        return Capability.NOT_CANCELLABLE

    if not user["is_admin"]:
        cutoff = timedelta(hours=settings.cancellation_cutoff_hours)
        if lead_time(appointment.appointment_date, appointment.appointment_time, now) < cutoff:
            return Capability.TOO_LATE

    return Capability.ALLOWED
