# clickbeard/routers/appointments_routes.py

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from clickbeard.db import get_session
from clickbeard.schemas import (
    AppointmentCreate,
    AppointmentDetail,
    AppointmentPublic,
    AppointmentStatus,
    AppointmentTransition,
)
from clickbeard.auth import get_current_user
from clickbeard.deps import require_admin
from clickbeard.errors import ValidationError
from clickbeard.services import appointments as appointment_service

router = APIRouter(
    prefix="/appointments",
    tags=["appointments"],
)


@router.get("/available-slots", response_model=List[str])
def available_slots(
    barber_id: Optional[str] = Query(None, alias="barberId"),
    on_date: Optional[date] = Query(None, alias="date"),
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    if not barber_id or on_date is None:
        raise ValidationError("Barbeiro e data são obrigatórios")
    if not barber_id.isdecimal():
        raise ValidationError("ID de barbeiro inválido")

    return appointment_service.get_available_slots(session, int(barber_id), on_date)


@router.post("", response_model=AppointmentPublic, status_code=201)
def create_appointment(
    appt: AppointmentCreate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    return appointment_service.book_appointment(
        session,
        user_id=current_user["id"],
        barber_id=appt.barber_id,
        specialty_id=appt.specialty_id,
        on_date=appt.appointment_date,
        at=appt.appointment_time,
    )


@router.get("/my-appointments", response_model=List[AppointmentDetail])
def list_my_appointments(
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    return appointment_service.list_user_appointments(session, current_user["id"])


@router.patch("/{appt_id}/cancel", response_model=AppointmentTransition)
def cancel_appointment(
    appt_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    appointment = appointment_service.cancel_appointment(session, appt_id, current_user)
    return {"message": "Agendamento cancelado com sucesso", "appointment": appointment}


@router.get("/all", response_model=List[AppointmentDetail])
def list_all_appointments(
    on_date: Optional[date] = Query(None, alias="date"),
    status: Optional[AppointmentStatus] = None,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    return appointment_service.list_appointments(
        session,
        on_date=on_date,
        status=status.value if status is not None else None,
    )


@router.get("/today", response_model=List[AppointmentDetail])
def list_today_appointments(
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    return appointment_service.list_today_appointments(session)


@router.get("/future", response_model=List[AppointmentDetail])
def list_future_appointments(
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    return appointment_service.list_future_appointments(session)


@router.patch("/{appt_id}/complete", response_model=AppointmentTransition)
def complete_appointment(
    appt_id: int,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    appointment = appointment_service.complete_appointment(session, appt_id)
    return {"message": "Agendamento marcado como concluído", "appointment": appointment}
