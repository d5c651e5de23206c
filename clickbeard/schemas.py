# clickbeard/schemas.py

from pydantic import BaseModel, ConfigDict, Field, field_validator
from enum import Enum
from datetime import datetime, date, time
from typing import List, Optional


class AppointmentStatus(str, Enum):
    scheduled = "scheduled"
    cancelled = "cancelled"
    completed = "completed"


class UserPublic(BaseModel):
    id: int
    name: str
    email: str
    isAdmin: bool


class UserProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    is_admin: bool
    created_at: datetime


class UserCreate(BaseModel):
    name: str
    email: str
    password: str = Field(max_length=72)


class LoginRequest(BaseModel):
    email: str
    password: str


class AuthResponse(BaseModel):
    user: UserPublic
    token: str


class SpecialtyCreate(BaseModel):
    name: str
    description: Optional[str] = None


class SpecialtyUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class SpecialtyPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None


class BarberCreate(BaseModel):
    name: str
    age: int
    hire_date: date
    specialty_ids: List[int] = []


class BarberUpdate(BaseModel):
    name: Optional[str] = None
    age: Optional[int] = None
    hire_date: Optional[date] = None
    active: Optional[bool] = None


class BarberPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    age: int
    hire_date: date
    active: bool


class BarberWithSpecialties(BarberPublic):
    specialties: List[SpecialtyPublic]


class BarberSpecialtiesUpdate(BaseModel):
    specialty_ids: List[int]


class BarberSpecialtiesResponse(BaseModel):
    message: str
    specialties: List[SpecialtyPublic]


class BarberDeleted(BaseModel):
    message: str
    barber: BarberPublic


class SpecialtyDeleted(BaseModel):
    message: str
    specialty: SpecialtyPublic


class AppointmentCreate(BaseModel):
    barber_id: int
    specialty_id: int
    appointment_date: date
    appointment_time: time

    @field_validator("appointment_time")
    @classmethod
    def time_is_local(cls, value: time) -> time:
        # slots are shop-local wall-clock times
        if value.tzinfo is not None:
            raise ValueError("appointment_time must not carry a timezone")
        return value


class AppointmentPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    barber_id: int
    specialty_id: int
    appointment_date: date
    appointment_time: time
    status: AppointmentStatus
    created_at: datetime
    updated_at: datetime


class AppointmentDetail(AppointmentPublic):
    barber_name: str
    specialty_name: str
    user_name: str
    user_email: Optional[str] = None


class AppointmentTransition(BaseModel):
    message: str
    appointment: AppointmentPublic
