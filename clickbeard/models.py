# clickbeard/models.py

from typing import Optional
from datetime import datetime, date as Date, time, timezone

from sqlalchemy import Index, text
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    password_hash: str
    is_admin: bool = False
    created_at: datetime = Field(default_factory=utcnow)


class Specialty(SQLModel, table=True):
    __tablename__ = "specialties"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True)
    description: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class Barber(SQLModel, table=True):
    __tablename__ = "barbers"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    age: int
    hire_date: Date
    active: bool = True
    created_at: datetime = Field(default_factory=utcnow)


class BarberSpecialty(SQLModel, table=True):
    __tablename__ = "barber_specialties"

    barber_id: int = Field(foreign_key="barbers.id", primary_key=True)
    specialty_id: int = Field(foreign_key="specialties.id", primary_key=True)


class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    __table_args__ = (
        # one scheduled appointment per barber slot; cancelled/completed rows may repeat
        Index(
            "uq_barber_slot_scheduled",
            "barber_id",
            "appointment_date",
            "appointment_time",
            unique=True,
            sqlite_where=text("status = 'scheduled'"),
            postgresql_where=text("status = 'scheduled'"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="users.id", index=True)
    barber_id: int = Field(foreign_key="barbers.id", index=True)
    specialty_id: int = Field(foreign_key="specialties.id")
    appointment_date: Date = Field(index=True)
    appointment_time: time
    status: str = "scheduled"  # scheduled, cancelled or completed
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
