"""
Account operations: registration, login, profile updates, soft delete.
"""

from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from models.schemas_user import UserRegister, UserUpdate
from utils import user_service
from utils.errors import DuplicateKey, NotFound, Unauthorized, InvalidStateTransition

PASSWORD = "secret123"  # matches the hash used by the make_user fixture


def registration(**overrides) -> UserRegister:
    data = {
        "name": "Lena Muster",
        "email": "lena@uzh.ch",
        "program_of_study": "Informatics",
        "interest": "machine learning, robotics",
        "skills": ["Python", "PyTorch"],
        "project_idea": "A study group finder for exam season",
        "availability_date": date.today() + timedelta(days=14),
        "password": PASSWORD,
    }
    data.update(overrides)
    return UserRegister(**data)


def test_register_stores_lowercase_email_and_hash(db):
    user = user_service.register(db, registration(email="Lena@UZH.ch"))

    assert user.email == "lena@uzh.ch"
    assert user.password_hash != PASSWORD
    assert user.role == "student"
    assert user.is_active


def test_register_duplicate_email_ignores_case(db):
    user_service.register(db, registration(email="lena@uzh.ch"))
    with pytest.raises(DuplicateKey):
        user_service.register(db, registration(email="LENA@uzh.ch"))


def test_register_rejects_past_availability():
    with pytest.raises(ValidationError):
        registration(availability_date=date.today() - timedelta(days=1))


def test_register_requires_a_skill():
    with pytest.raises(ValidationError):
        registration(skills=[])


def test_authenticate_stamps_last_login(db):
    user_service.register(db, registration())

    user = user_service.authenticate(db, "LENA@uzh.ch", PASSWORD)

    assert user.last_login is not None


def test_authenticate_bad_password(db):
    user_service.register(db, registration())
    with pytest.raises(Unauthorized, match="Invalid email or password"):
        user_service.authenticate(db, "lena@uzh.ch", "wrong-password")


def test_authenticate_unknown_email(db):
    with pytest.raises(Unauthorized):
        user_service.authenticate(db, "nobody@uzh.ch", PASSWORD)


def test_authenticate_inactive(db, make_user):
    user = make_user(is_active=False)
    with pytest.raises(Unauthorized, match="deactivated"):
        user_service.authenticate(db, user.email, PASSWORD)


def test_update_profile_changes_only_given_fields(db, make_user):
    user = make_user(interest="chess")

    updated = user_service.update_profile(db, user.id, UserUpdate(skills=["Go"], password=PASSWORD))

    assert updated.skills == ["Go"]
    assert updated.interest == "chess"


def test_update_profile_needs_current_password(db, make_user):
    user = make_user()
    with pytest.raises(Unauthorized):
        user_service.update_profile(db, user.id, UserUpdate(name="New Name", password="nope"))


def test_update_profile_email_collision(db, make_user):
    taken = make_user()
    user = make_user()
    with pytest.raises(DuplicateKey):
        user_service.update_profile(db, user.id, UserUpdate(email=taken.email.upper(), password=PASSWORD))


def test_update_profile_unknown_user(db):
    with pytest.raises(NotFound):
        user_service.update_profile(db, "no-such-user", UserUpdate(password=PASSWORD))


def test_deactivate_is_soft_and_single_shot(db, make_user):
    user = make_user()

    user_service.deactivate(db, user.id)

    assert user.is_active is False
    assert user not in user_service.list_active(db)
    with pytest.raises(InvalidStateTransition):
        user_service.deactivate(db, user.id)


def test_deactivate_unknown_user(db):
    with pytest.raises(NotFound):
        user_service.deactivate(db, "no-such-user")
