# clickbeard/services/barbers.py

import logging
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from clickbeard.db import transaction
from clickbeard.errors import NotFoundError, ValidationError
from clickbeard.models import Appointment, Barber, BarberSpecialty, Specialty

logger = logging.getLogger(__name__)

MIN_AGE = 18
MAX_AGE = 100


def validate_age(age: int) -> None:
    if age < MIN_AGE or age > MAX_AGE:
        raise ValidationError("Idade inválida")


def list_active_barbers(session: Session) -> List[Barber]:
    return session.exec(
        select(Barber).where(Barber.active == True).order_by(Barber.name)  # noqa: E712
    ).all()


def get_barber(session: Session, barber_id: int) -> Barber:
    barber = session.get(Barber, barber_id)
    if barber is None:
        raise NotFoundError("Barbeiro não encontrado")
    return barber


def list_barber_specialties(session: Session, barber_id: int) -> List[Specialty]:
    return session.exec(
        select(Specialty)
        .join(BarberSpecialty, BarberSpecialty.specialty_id == Specialty.id)
        .where(BarberSpecialty.barber_id == barber_id)
        .order_by(Specialty.name)
    ).all()


def get_barber_with_specialties(session: Session, barber_id: int) -> dict:
    barber = get_barber(session, barber_id)
    data = barber.model_dump()
    data["specialties"] = list_barber_specialties(session, barber_id)
    return data


def list_barbers_by_specialty(session: Session, specialty_id: int) -> List[Barber]:
    return session.exec(
        select(Barber)
        .join(BarberSpecialty, BarberSpecialty.barber_id == Barber.id)
        .where(BarberSpecialty.specialty_id == specialty_id)
        .where(Barber.active == True)  # noqa: E712
        .order_by(Barber.name)
        .distinct()
    ).all()


def specialties_exist(session: Session, specialty_ids: Iterable[int]) -> bool:
    unique_ids = set(specialty_ids)
    if not unique_ids:
        return True
    count = session.exec(
        select(func.count()).select_from(Specialty).where(Specialty.id.in_(list(unique_ids)))
    ).one()
    return count == len(unique_ids)


def _unique(ids: Iterable[int]) -> List[int]:
    # keep first-seen order
    return list(dict.fromkeys(ids))


def create_barber(
    session: Session,
    name: str,
    age: int,
    hire_date: date,
    specialty_ids: Optional[List[int]] = None,
) -> Barber:
    """Insert a barber and its specialty links in one transaction."""
    validate_age(age)
    specialty_ids = _unique(specialty_ids or [])
    if not specialties_exist(session, specialty_ids):
        raise ValidationError("Uma ou mais especialidades não existem")

    barber = Barber(name=name.strip(), age=age, hire_date=hire_date)
    with transaction(session):
        session.add(barber)
        session.flush()  # fills barber.id for the link rows
        for specialty_id in specialty_ids:
            session.add(BarberSpecialty(barber_id=barber.id, specialty_id=specialty_id))

    session.refresh(barber)
    logger.info("Barber %s created with specialties %s", barber.id, specialty_ids)
    return barber


def update_barber(
    session: Session,
    barber_id: int,
    name: Optional[str] = None,
    age: Optional[int] = None,
    hire_date: Optional[date] = None,
    active: Optional[bool] = None,
) -> Barber:
    if age is not None:
        validate_age(age)

    barber = get_barber(session, barber_id)
    if name is not None:
        barber.name = name.strip()
    if age is not None:
        barber.age = age
    if hire_date is not None:
        barber.hire_date = hire_date
    if active is not None:
        barber.active = active

    session.add(barber)
    session.commit()
    session.refresh(barber)
    return barber


def has_appointments(session: Session, barber_id: int) -> bool:
    count = session.exec(
        select(func.count()).select_from(Appointment).where(Appointment.barber_id == barber_id)
    ).one()
    return count > 0


def _remove_links(session: Session, barber_id: int) -> None:
    links = session.exec(
        select(BarberSpecialty).where(BarberSpecialty.barber_id == barber_id)
    ).all()
    for link in links:
        session.delete(link)


def delete_barber(session: Session, barber_id: int) -> dict:
    barber = get_barber(session, barber_id)
    if has_appointments(session, barber_id):
        raise ValidationError(
            "Não é possível deletar este barbeiro pois ele possui agendamentos"
        )

    deleted = barber.model_dump()
    with transaction(session):
        _remove_links(session, barber_id)
        session.flush()
        session.delete(barber)

    logger.info("Barber %s deleted", barber_id)
    return deleted


def sync_specialties(session: Session, barber_id: int, specialty_ids: List[int]) -> List[Specialty]:
    """Replace every specialty link of a barber, all or nothing."""
    get_barber(session, barber_id)

    specialty_ids = _unique(specialty_ids)
    if not specialties_exist(session, specialty_ids):
        raise ValidationError("Uma ou mais especialidades não existem")

    with transaction(session):
        _remove_links(session, barber_id)
        session.flush()
        for specialty_id in specialty_ids:
            session.add(BarberSpecialty(barber_id=barber_id, specialty_id=specialty_id))

    logger.info("Barber %s specialties synced to %s", barber_id, specialty_ids)
    return list_barber_specialties(session, barber_id)
