from datetime import date, datetime, time, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import clickbeard.models  # noqa: F401
from clickbeard.auth import create_access_token, hash_password
from clickbeard.db import get_session
from clickbeard.main import app
from clickbeard.models import Appointment, Barber, BarberSpecialty, Specialty, User

NEXT_WEEK = date.today() + timedelta(days=7)
PASSWORD = "secret123"


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def make_user(session, name="Cliente", email="cliente@example.com", is_admin=False):
    user = User(name=name, email=email, password_hash=hash_password(PASSWORD), is_admin=is_admin)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def make_specialty(session, name="Corte", description=None):
    specialty = Specialty(name=name, description=description)
    session.add(specialty)
    session.commit()
    session.refresh(specialty)
    return specialty


def make_barber(session, name="João", specialties=(), active=True):
    barber = Barber(name=name, age=30, hire_date=date(2020, 1, 15), active=active)
    session.add(barber)
    session.commit()
    session.refresh(barber)
    for specialty in specialties:
        session.add(BarberSpecialty(barber_id=barber.id, specialty_id=specialty.id))
    session.commit()
    return barber


def make_appointment(session, user, barber, specialty, on_date=NEXT_WEEK, at=time(10, 0), status="scheduled"):
    appointment = Appointment(
        user_id=user.id,
        barber_id=barber.id,
        specialty_id=specialty.id,
        appointment_date=on_date,
        appointment_time=at,
        status=status,
    )
    session.add(appointment)
    session.commit()
    session.refresh(appointment)
    return appointment


def make_appointment_at(session, user, barber, specialty, starts_at: datetime, status="scheduled"):
    return make_appointment(
        session, user, barber, specialty,
        on_date=starts_at.date(), at=starts_at.time().replace(microsecond=0), status=status,
    )


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def customer(session):
    return make_user(session)


@pytest.fixture
def other_customer(session):
    return make_user(session, name="Outro", email="outro@example.com")


@pytest.fixture
def admin(session):
    return make_user(session, name="Admin", email="admin@example.com", is_admin=True)


@pytest.fixture
def corte(session):
    return make_specialty(session, "Corte", "Corte de cabelo")


@pytest.fixture
def barba(session):
    return make_specialty(session, "Barba", "Barba completa")


@pytest.fixture
def barber(session, corte):
    return make_barber(session, "João", specialties=[corte])
