# clickbeard/routers/auth_routes.py

from fastapi import APIRouter, Depends
from sqlmodel import Session

from clickbeard.db import get_session
from clickbeard.schemas import AuthResponse, LoginRequest, UserCreate, UserProfile
from clickbeard.auth import create_access_token, get_current_user
from clickbeard.services import users as user_service

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    data: UserCreate,
    session: Session = Depends(get_session),
):
    user = user_service.create_user(session, data.name, data.email, data.password)
    return {"user": user_service.public_user(user), "token": create_access_token(user)}


@router.post("/login", response_model=AuthResponse)
def login(
    data: LoginRequest,
    session: Session = Depends(get_session),
):
    user = user_service.authenticate(session, data.email, data.password)
    return {"user": user_service.public_user(user), "token": create_access_token(user)}


@router.get("/profile", response_model=UserProfile)
def profile(
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    return user_service.get_user(session, current_user["id"])
