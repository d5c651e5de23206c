from datetime import date, datetime, time, timedelta

import pytest
from sqlmodel import select

from clickbeard.errors import (
    OffSlotGridError,
    OutsideWorkingHoursError,
    PastAppointmentError,
    SlotTakenError,
    SpecialtyMismatchError,
)
from clickbeard.models import Appointment
from clickbeard.services import appointments as appointment_service
from clickbeard.slots import generate_all_slots

from conftest import NEXT_WEEK, make_appointment, make_barber

NOW = datetime(2025, 6, 1, 9, 0)


def test_available_slots_exclude_booked(session, customer, barber, corte):
    make_appointment(session, customer, barber, corte, on_date=date(2025, 6, 10), at=time(10, 0))

    slots = appointment_service.get_available_slots(session, barber.id, date(2025, 6, 10))

    assert "10:00:00" not in slots
    assert "10:30:00" in slots
    assert len(slots) == 19
    assert slots == [s for s in generate_all_slots() if s != "10:00:00"]


def test_available_slots_ignore_other_barbers_dates_and_terminal_rows(session, customer, barber, corte):
    other = make_barber(session, "Pedro", specialties=[corte])
    make_appointment(session, customer, other, corte, on_date=date(2025, 6, 10), at=time(9, 0))
    make_appointment(session, customer, barber, corte, on_date=date(2025, 6, 11), at=time(9, 0))
    make_appointment(session, customer, barber, corte, on_date=date(2025, 6, 10), at=time(11, 0), status="cancelled")
    make_appointment(session, customer, barber, corte, on_date=date(2025, 6, 10), at=time(11, 30), status="completed")

    slots = appointment_service.get_available_slots(session, barber.id, date(2025, 6, 10))

    assert slots == generate_all_slots()


def test_book_creates_scheduled_row(session, customer, barber, corte):
    appointment = appointment_service.book_appointment(
        session, customer.id, barber.id, corte.id, date(2025, 6, 10), time(14, 30), now=NOW
    )

    assert appointment.id is not None
    assert appointment.status == "scheduled"
    assert appointment.user_id == customer.id
    assert session.exec(select(Appointment)).all() == [appointment]


def test_book_rejects_specialty_mismatch(session, customer, barber, barba):
    with pytest.raises(SpecialtyMismatchError):
        appointment_service.book_appointment(
            session, customer.id, barber.id, barba.id, date(2025, 6, 10), time(10, 0), now=NOW
        )


@pytest.mark.parametrize("at", [time(7, 30), time(18, 0), time(18, 30), time(0, 0)])
def test_book_rejects_outside_working_hours(session, customer, barber, corte, at):
    with pytest.raises(OutsideWorkingHoursError) as exc:
        appointment_service.book_appointment(
            session, customer.id, barber.id, corte.id, date(2025, 6, 10), at, now=NOW
        )
    assert exc.value.message == "Horário fora do expediente (8h-18h)"


def test_working_hours_checked_before_past(session, customer, barber, corte):
    with pytest.raises(OutsideWorkingHoursError):
        appointment_service.book_appointment(
            session, customer.id, barber.id, corte.id, date(2020, 1, 1), time(7, 0), now=NOW
        )


def test_book_rejects_off_grid_time(session, customer, barber, corte):
    with pytest.raises(OffSlotGridError):
        appointment_service.book_appointment(
            session, customer.id, barber.id, corte.id, date(2025, 6, 10), time(10, 15), now=NOW
        )


def test_book_rejects_taken_slot(session, customer, other_customer, barber, corte):
    make_appointment(session, other_customer, barber, corte, on_date=date(2025, 6, 10), at=time(10, 0))

    with pytest.raises(SlotTakenError) as exc:
        appointment_service.book_appointment(
            session, customer.id, barber.id, corte.id, date(2025, 6, 10), time(10, 0), now=NOW
        )
    assert exc.value.status_code == 400


def test_cancelled_slot_can_be_booked_again(session, customer, barber, corte):
    make_appointment(session, customer, barber, corte, on_date=date(2025, 6, 10), at=time(10, 0), status="cancelled")
    make_appointment(session, customer, barber, corte, on_date=date(2025, 6, 10), at=time(10, 0), status="cancelled")

    appointment = appointment_service.book_appointment(
        session, customer.id, barber.id, corte.id, date(2025, 6, 10), time(10, 0), now=NOW
    )

    assert appointment.status == "scheduled"


def test_book_rejects_past(session, customer, barber, corte):
    with pytest.raises(PastAppointmentError):
        appointment_service.book_appointment(
            session, customer.id, barber.id, corte.id, date(2025, 6, 1), time(9, 0), now=NOW
        )


def test_concurrent_booking_is_caught_by_unique_index(session, customer, other_customer, barber, corte, monkeypatch):
    # both requests passed the read check before either inserted
    monkeypatch.setattr(appointment_service, "slot_is_available", lambda *args: True)

    appointment_service.book_appointment(
        session, customer.id, barber.id, corte.id, NEXT_WEEK, time(10, 0)
    )
    with pytest.raises(SlotTakenError):
        appointment_service.book_appointment(
            session, other_customer.id, barber.id, corte.id, NEXT_WEEK, time(10, 0)
        )

    scheduled = session.exec(
        select(Appointment).where(Appointment.status == "scheduled")
    ).all()
    assert len(scheduled) == 1
    assert scheduled[0].user_id == customer.id


def test_uses_current_time_by_default(session, customer, barber, corte):
    yesterday = date.today() - timedelta(days=1)

    with pytest.raises(PastAppointmentError):
        appointment_service.book_appointment(
            session, customer.id, barber.id, corte.id, yesterday, time(10, 0)
        )
