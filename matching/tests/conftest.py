"""
Shared fixtures: an in-memory SQLite database rebuilt for every test.
"""

import itertools
import os
import sys
from datetime import date, timedelta

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest

from db import Base, engine, SessionLocal, get_db, init_db
from utils import crud_user
from utils.auth_utils import hash_password

PASSWORD = "secret123"
PASSWORD_HASH = hash_password(PASSWORD)

_emails = itertools.count(1)


@pytest.fixture(autouse=True)
def reset_db():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(reset_db):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


def user_fields(**overrides) -> dict:
    fields = {
        "name": "Test Student",
        "email": f"student{next(_emails)}@uzh.ch",
        "program_of_study": "Informatics",
        "interest": "",
        "skills": ["Python"],
        "project_idea": "",
        "availability_date": date.today() + timedelta(days=30),
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def make_user(db):
    """Create a user straight through the store, skipping request validation."""
    def _make(**overrides):
        role = overrides.pop("role", "student")
        return crud_user.create_user(db, password_hash=PASSWORD_HASH, role=role, **user_fields(**overrides))
    return _make


@pytest.fixture
def committed_user(reset_db):
    """Like make_user, but committed so API requests can see the row."""
    def _make(**overrides):
        role = overrides.pop("role", "student")
        with get_db() as session:
            user = crud_user.create_user(session, password_hash=PASSWORD_HASH, role=role, **user_fields(**overrides))
            return {"id": user.id, "email": user.email}
    return _make
