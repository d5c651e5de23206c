# clickbeard/services/appointments.py

import logging
from datetime import date, datetime, time
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from clickbeard.config import settings
from clickbeard.deps import Capability, cancel_capability
from clickbeard.errors import (
    CancellationWindowError,
    ForbiddenError,
    NotCancellableError,
    NotFoundError,
    OffSlotGridError,
    OutsideWorkingHoursError,
    PastAppointmentError,
    SlotTakenError,
    SpecialtyMismatchError,
)
from clickbeard.models import Appointment, Barber, BarberSpecialty, Specialty, User, utcnow
from clickbeard.slots import (
    format_slot,
    generate_all_slots,
    is_in_future,
    is_on_slot_grid,
    is_within_working_hours,
)

logger = logging.getLogger(__name__)


def find_booked_slots(session: Session, barber_id: int, on_date: date) -> List[str]:
    rows = session.exec(
        select(Appointment.appointment_time)
        .where(Appointment.barber_id == barber_id)
        .where(Appointment.appointment_date == on_date)
        .where(Appointment.status == "scheduled")
    ).all()
    return [format_slot(t) for t in rows]


def get_available_slots(session: Session, barber_id: int, on_date: date) -> List[str]:
    booked = set(find_booked_slots(session, barber_id, on_date))
    return [slot for slot in generate_all_slots() if slot not in booked]


def barber_has_specialty(session: Session, barber_id: int, specialty_id: int) -> bool:
    link = session.get(BarberSpecialty, (barber_id, specialty_id))
    return link is not None


def slot_is_available(session: Session, barber_id: int, on_date: date, at: time) -> bool:
    existing = session.exec(
        select(Appointment)
        .where(Appointment.barber_id == barber_id)
        .where(Appointment.appointment_date == on_date)
        .where(Appointment.appointment_time == at)
        .where(Appointment.status == "scheduled")
    ).first()
    return existing is None


def book_appointment(
    session: Session,
    user_id: int,
    barber_id: int,
    specialty_id: int,
    on_date: date,
    at: time,
    now: Optional[datetime] = None,
) -> Appointment:
    """Validate and insert a new ``scheduled`` appointment.

    Rules are checked in order and the first failure is raised:
    specialty, working hours (and the 30-minute grid), slot free, not past.
    The read check on the slot can race with another request; the partial
    unique index catches that case at commit and it is reported the same way.
    """
    if now is None:
        now = datetime.now()

    # 1) Barber must offer the specialty
    if not barber_has_specialty(session, barber_id, specialty_id):
        raise SpecialtyMismatchError()

    # 2) Working hours, on the slot grid
    if not is_within_working_hours(at):
        raise OutsideWorkingHoursError()
    if not is_on_slot_grid(at):
        raise OffSlotGridError()

    # 3) Slot must be free
    if not slot_is_available(session, barber_id, on_date, at):
        raise SlotTakenError()

    # 4) Not in the past
    if not is_in_future(on_date, at, now):
        raise PastAppointmentError()

    appointment = Appointment(
        user_id=user_id,
        barber_id=barber_id,
        specialty_id=specialty_id,
        appointment_date=on_date,
        appointment_time=at,
        status="scheduled",
    )

    session.add(appointment)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        logger.info("Slot %s %s for barber %s taken concurrently", on_date, at, barber_id)
        raise SlotTakenError()

    session.refresh(appointment)
    logger.info(
        "Appointment %s booked: user=%s barber=%s at %s %s",
        appointment.id, user_id, barber_id, on_date, format_slot(at),
    )
    return appointment


def get_appointment(session: Session, appointment_id: int) -> Appointment:
    appointment = session.get(Appointment, appointment_id)
    if appointment is None:
        raise NotFoundError("Agendamento não encontrado")
    return appointment


def _transition(session: Session, appointment_id: int, status: str) -> bool:
    """Move a ``scheduled`` row to ``status`` in one conditional UPDATE.

    Returns False when no row matched, i.e. the id is unknown or the row
    already left ``scheduled``. The status read earlier in the request is
    never written back, so a terminal row cannot be overwritten.
    """
    result = session.exec(
        update(Appointment)
        .where(Appointment.id == appointment_id)
        .where(Appointment.status == "scheduled")
        .values(status=status, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    session.commit()
    return result.rowcount == 1


def cancel_appointment(
    session: Session,
    appointment_id: int,
    user: dict,
    now: Optional[datetime] = None,
) -> Appointment:
    if now is None:
        now = datetime.now()

    appointment = get_appointment(session, appointment_id)

    decision = cancel_capability(user, appointment, now)
    if decision == Capability.NOT_OWNER:
        raise ForbiddenError("Não autorizado")
    if decision == Capability.NOT_CANCELLABLE:
        raise NotCancellableError()
    if decision == Capability.TOO_LATE:
        raise CancellationWindowError(
            "Cancelamento deve ser feito com pelo menos "
            f"{settings.cancellation_cutoff_hours} horas de antecedência"
        )

    if not _transition(session, appointment_id, "cancelled"):
        # finalized by another request after it was read
        raise NotCancellableError()
    appointment = get_appointment(session, appointment_id)

    logger.info("Appointment %s cancelled by user %s", appointment.id, user["id"])
    return appointment


def complete_appointment(session: Session, appointment_id: int) -> Appointment:
    # terminal states are reported exactly like a missing row
    if not _transition(session, appointment_id, "completed"):
        raise NotFoundError("Agendamento não encontrado ou já finalizado")
    appointment = get_appointment(session, appointment_id)

    logger.info("Appointment %s completed", appointment.id)
    return appointment


def _detail_query():
    return (
        select(Appointment, Barber.name, Specialty.name, User.name, User.email)
        .join(Barber, Barber.id == Appointment.barber_id)
        .join(Specialty, Specialty.id == Appointment.specialty_id)
        .join(User, User.id == Appointment.user_id)
    )


def _to_detail(row) -> dict:
    appointment, barber_name, specialty_name, user_name, user_email = row
    detail = appointment.model_dump()
    detail.update(
        barber_name=barber_name,
        specialty_name=specialty_name,
        user_name=user_name,
        user_email=user_email,
    )
    return detail


def list_user_appointments(session: Session, user_id: int) -> List[dict]:
    stmt = (
        _detail_query()
        .where(Appointment.user_id == user_id)
        .order_by(Appointment.appointment_date.desc(), Appointment.appointment_time.desc())
    )
    return [_to_detail(row) for row in session.exec(stmt).all()]


def list_appointments(
    session: Session,
    on_date: Optional[date] = None,
    status: Optional[str] = None,
) -> List[dict]:
    stmt = _detail_query()

    if on_date is not None:
        stmt = stmt.where(Appointment.appointment_date == on_date)
    if status is not None:
        stmt = stmt.where(Appointment.status == status)

    stmt = stmt.order_by(Appointment.appointment_date, Appointment.appointment_time)
    return [_to_detail(row) for row in session.exec(stmt).all()]


def list_today_appointments(session: Session, today: Optional[date] = None) -> List[dict]:
    if today is None:
        today = date.today()
    stmt = (
        _detail_query()
        .where(Appointment.appointment_date == today)
        .where(Appointment.status == "scheduled")
        .order_by(Appointment.appointment_time)
    )
    return [_to_detail(row) for row in session.exec(stmt).all()]


def list_future_appointments(session: Session, today: Optional[date] = None) -> List[dict]:
    if today is None:
        today = date.today()
    stmt = (
        _detail_query()
        .where(Appointment.appointment_date > today)
        .where(Appointment.status == "scheduled")
        .order_by(Appointment.appointment_date, Appointment.appointment_time)
    )
    return [_to_detail(row) for row in session.exec(stmt).all()]
