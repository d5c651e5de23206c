# clickbeard/init_admin.py

"""
Provision an administrator account.

    python -m clickbeard.init_admin --name "Admin" --email admin@clickbeard.com --password secret123

Registration through the API always creates customers, so the first admin
has to come from here. An existing user with the same email is promoted.
"""

import argparse
import logging
import os

from sqlmodel import Session

from .db import engine, init_db
from .services.users import create_user, find_user_by_email

logger = logging.getLogger(__name__)


def create_admin(session: Session, name: str, email: str, password: str):
    existing = find_user_by_email(session, email.strip().lower())
    if existing is not None:
        if not existing.is_admin:
            existing.is_admin = True
            session.add(existing)
            session.commit()
            session.refresh(existing)
            logger.info("User %s promoted to admin", existing.id)
        return existing

    return create_user(session, name, email, password, is_admin=True)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create a ClickBeard administrator")
    parser.add_argument("--name", default=os.getenv("ADMIN_NAME", "Administrador"))
    parser.add_argument("--email", default=os.getenv("ADMIN_EMAIL"))
    parser.add_argument("--password", default=os.getenv("ADMIN_PASSWORD"))
    args = parser.parse_args(argv)

    if not args.email or not args.password:
        parser.error("--email and --password are required (or ADMIN_EMAIL / ADMIN_PASSWORD)")

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    init_db()
    with Session(engine) as session:
        admin = create_admin(session, args.name, args.email, args.password)
        logger.info("Admin ready: id=%s email=%s", admin.id, admin.email)


if __name__ == "__main__":
    main()
