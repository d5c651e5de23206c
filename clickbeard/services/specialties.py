# clickbeard/services/specialties.py

import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from clickbeard.errors import ConflictError, NotFoundError, ValidationError
from clickbeard.models import Appointment, BarberSpecialty, Specialty

logger = logging.getLogger(__name__)


def list_specialties(session: Session) -> List[Specialty]:
    return session.exec(select(Specialty).order_by(Specialty.name)).all()


def get_specialty(session: Session, specialty_id: int) -> Specialty:
    specialty = session.get(Specialty, specialty_id)
    if specialty is None:
        raise NotFoundError("Especialidade não encontrada")
    return specialty


def _clean(value: Optional[str]) -> Optional[str]:
    return value.strip() if value is not None else None


def _save(session: Session, specialty: Specialty) -> Specialty:
    session.add(specialty)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise ConflictError("Especialidade já existe")
    session.refresh(specialty)
    return specialty


def create_specialty(session: Session, name: str, description: Optional[str] = None) -> Specialty:
    name = _clean(name)
    if not name:
        raise ValidationError("Nome é obrigatório")

    specialty = _save(session, Specialty(name=name, description=_clean(description)))
    logger.info("Specialty %s created: %s", specialty.id, specialty.name)
    return specialty


def update_specialty(
    session: Session,
    specialty_id: int,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> Specialty:
    if not name and not description:
        raise ValidationError("Pelo menos um campo deve ser fornecido")

    specialty = get_specialty(session, specialty_id)
    if name:
        specialty.name = _clean(name)
    if description:
        specialty.description = _clean(description)
    return _save(session, specialty)


def is_used_by_barbers(session: Session, specialty_id: int) -> bool:
    count = session.exec(
        select(func.count()).select_from(BarberSpecialty).where(BarberSpecialty.specialty_id == specialty_id)
    ).one()
    return count > 0


def is_used_in_appointments(session: Session, specialty_id: int) -> bool:
    count = session.exec(
        select(func.count()).select_from(Appointment).where(Appointment.specialty_id == specialty_id)
    ).one()
    return count > 0


def delete_specialty(session: Session, specialty_id: int) -> dict:
    specialty = get_specialty(session, specialty_id)
    if is_used_by_barbers(session, specialty_id) or is_used_in_appointments(session, specialty_id):
        raise ValidationError(
            "Não é possível deletar esta especialidade pois ela está sendo utilizada"
        )

    deleted = specialty.model_dump()
    session.delete(specialty)
    session.commit()
    logger.info("Specialty %s deleted", specialty_id)
    return deleted
