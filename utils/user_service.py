"""
Account operations: registration, login, profile edits and admin actions.

Functions take an open session and raise utils.errors exceptions; commit and
rollback are left to the caller's `get_db` block.
"""

import logging
from datetime import datetime
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.models_user import User
from models.schemas_user import UserRegister, UserUpdate
from utils import crud_user
from utils.auth_utils import hash_password, verify_password
from utils.errors import DuplicateKey, NotFound, Unauthorized, InvalidStateTransition

logger = logging.getLogger(__name__)


def register(db: Session, payload: UserRegister) -> User:
    email = payload.email.lower()
    if crud_user.get_user_by_email(db, email):
        raise DuplicateKey("email")

    fields = payload.model_dump(exclude={"password"})
    fields["email"] = email
    try:
        user = crud_user.create_user(db, password_hash=hash_password(payload.password), **fields)
    except IntegrityError:
        # concurrent registration with the same email
        db.rollback()
        raise DuplicateKey("email")

    logger.info(f"Registered user {user.id}")
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    user = crud_user.get_user_by_email(db, email)
    if not user:
        logger.warning("Login failed: unknown email")
        raise Unauthorized("Invalid email or password")
    if not user.is_active:
        raise Unauthorized("Account is deactivated")
    if not verify_password(password, user.password_hash):
        logger.warning(f"Login failed: bad password for user {user.id}")
        raise Unauthorized("Invalid email or password")

    user.last_login = datetime.utcnow()
    db.flush()
    return user


def update_profile(db: Session, user_id: str, payload: UserUpdate) -> User:
    user = crud_user.get_user_by_id(db, user_id)
    if not user:
        raise NotFound("User not found")
    if not verify_password(payload.password, user.password_hash):
        raise Unauthorized("Invalid password")

    patch = payload.changes()
    if "email" in patch:
        patch["email"] = patch["email"].lower()
        if patch["email"] != user.email and crud_user.get_user_by_email(db, patch["email"]):
            raise DuplicateKey("email")

    try:
        return crud_user.update_user(db, user, patch)
    except IntegrityError:
        db.rollback()
        raise DuplicateKey("email")


def list_active(db: Session) -> list[User]:
    return crud_user.list_active_users(db)


def deactivate(db: Session, user_id: str) -> None:
    user = crud_user.get_user_by_id(db, user_id)
    if not user:
        raise NotFound("User not found")
    if not user.is_active:
        raise InvalidStateTransition("User is already inactive")

    crud_user.update_user(db, user, {"is_active": False, "last_login": datetime.utcnow()})
    logger.info(f"Deactivated user {user_id}")
