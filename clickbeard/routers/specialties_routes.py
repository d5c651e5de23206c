# clickbeard/routers/specialties_routes.py

from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from clickbeard.db import get_session
from clickbeard.schemas import SpecialtyCreate, SpecialtyDeleted, SpecialtyPublic, SpecialtyUpdate
from clickbeard.auth import get_current_user
from clickbeard.deps import require_admin
from clickbeard.services import specialties as specialty_service

router = APIRouter(
    prefix="/specialties",
    tags=["specialties"],
)


@router.get("", response_model=List[SpecialtyPublic])
def list_specialties(
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    return specialty_service.list_specialties(session)


@router.get("/{specialty_id}", response_model=SpecialtyPublic)
def get_specialty(
    specialty_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    return specialty_service.get_specialty(session, specialty_id)


@router.post("", response_model=SpecialtyPublic, status_code=201)
def create_specialty(
    data: SpecialtyCreate,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    return specialty_service.create_specialty(session, data.name, data.description)


@router.put("/{specialty_id}", response_model=SpecialtyPublic)
def update_specialty(
    specialty_id: int,
    data: SpecialtyUpdate,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    return specialty_service.update_specialty(session, specialty_id, data.name, data.description)


@router.delete("/{specialty_id}", response_model=SpecialtyDeleted)
def delete_specialty(
    specialty_id: int,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    specialty = specialty_service.delete_specialty(session, specialty_id)
    return {"message": "Especialidade deletada com sucesso", "specialty": specialty}
