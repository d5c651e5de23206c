# clickbeard/services/users.py

import logging
from typing import Optional

from sqlmodel import Session, select

from clickbeard.auth import hash_password, verify_password
from clickbeard.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from clickbeard.models import User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def find_user_by_email(session: Session, email: str) -> Optional[User]:
    return session.exec(select(User).where(User.email == email)).first()


def get_user(session: Session, user_id: int) -> User:
    user = session.get(User, user_id)
    if user is None:
        raise NotFoundError("Usuário não encontrado")
    return user


def create_user(
    session: Session,
    name: str,
    email: str,
    password: str,
    is_admin: bool = False,
) -> User:
    name = name.strip()
    email = email.strip().lower()
    if not name or not email or not password:
        raise ValidationError("Todos os campos são obrigatórios")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("A senha deve ter pelo menos 6 caracteres")

    if find_user_by_email(session, email) is not None:
        raise ConflictError("Email já cadastrado")

    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        is_admin=is_admin,
    )
    session.add(user)
    session.commit()
    session.refresh(user)

    logger.info("User %s registered (admin=%s)", user.id, user.is_admin)
    return user


def authenticate(session: Session, email: str, password: str) -> User:
    user = find_user_by_email(session, email.strip().lower())
    if user is None or not verify_password(password, user.password_hash):
        raise AuthenticationError("Email ou senha incorretos")
    return user


def public_user(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "isAdmin": user.is_admin,
    }
