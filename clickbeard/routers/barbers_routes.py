# clickbeard/routers/barbers_routes.py

from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from clickbeard.db import get_session
from clickbeard.schemas import (
    BarberCreate,
    BarberDeleted,
    BarberPublic,
    BarberSpecialtiesResponse,
    BarberSpecialtiesUpdate,
    BarberUpdate,
    BarberWithSpecialties,
    SpecialtyPublic,
)
from clickbeard.auth import get_current_user
from clickbeard.deps import require_admin
from clickbeard.services import barbers as barber_service

router = APIRouter(
    prefix="/barbers",
    tags=["barbers"],
)


@router.get("", response_model=List[BarberPublic])
def list_barbers(
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    return barber_service.list_active_barbers(session)


@router.get("/specialty/{specialty_id}", response_model=List[BarberPublic])
def list_barbers_by_specialty(
    specialty_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    return barber_service.list_barbers_by_specialty(session, specialty_id)


@router.get("/{barber_id}", response_model=BarberWithSpecialties)
def get_barber(
    barber_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    return barber_service.get_barber_with_specialties(session, barber_id)


@router.post("", response_model=BarberPublic, status_code=201)
def create_barber(
    data: BarberCreate,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    return barber_service.create_barber(
        session, data.name, data.age, data.hire_date, data.specialty_ids
    )


@router.put("/{barber_id}", response_model=BarberPublic)
def update_barber(
    barber_id: int,
    data: BarberUpdate,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    return barber_service.update_barber(
        session, barber_id, data.name, data.age, data.hire_date, data.active
    )


@router.delete("/{barber_id}", response_model=BarberDeleted)
def delete_barber(
    barber_id: int,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    barber = barber_service.delete_barber(session, barber_id)
    return {"message": "Barbeiro deletado com sucesso", "barber": barber}


@router.get("/{barber_id}/specialties", response_model=List[SpecialtyPublic])
def get_barber_specialties(
    barber_id: int,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    barber_service.get_barber(session, barber_id)
    return barber_service.list_barber_specialties(session, barber_id)


@router.put("/{barber_id}/specialties", response_model=BarberSpecialtiesResponse)
def update_barber_specialties(
    barber_id: int,
    data: BarberSpecialtiesUpdate,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    specialties = barber_service.sync_specialties(session, barber_id, data.specialty_ids)
    return {"message": "Especialidades atualizadas com sucesso", "specialties": specialties}
