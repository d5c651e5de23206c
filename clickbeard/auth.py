# clickbeard/auth.py

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import jwt, JWTError
from passlib.context import CryptContext

from .config import settings
from .errors import AuthenticationError
from .models import User

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(user: User, expires_minutes: int = None) -> str:
    if expires_minutes is None:
        expires_minutes = settings.jwt_expires_minutes
    to_encode = {
        "id": user.id,
        "email": user.email,
        "isAdmin": user.is_admin,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def decode_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise AuthenticationError("Token inválido")

    if payload.get("id") is None:
        raise AuthenticationError("Token inválido")

    return {
        "id": payload["id"],
        "email": payload.get("email"),
        "is_admin": bool(payload.get("isAdmin", False)),
    }


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict:
    # HTTPBearer hands back None for a missing header and for a non-Bearer scheme
    if credentials is None:
        raise AuthenticationError("Token não fornecido")
    return decode_access_token(credentials.credentials)
