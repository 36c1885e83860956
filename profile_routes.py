"""
Account API Routes

Registration, login, the current user's profile and admin user management.
Prefix: /api/user
"""

import logging
import jwt
from fastapi import APIRouter, Depends, Header, HTTPException
from sqlalchemy.orm import Session

from db import get_session
from models.schemas_user import UserRegister, UserLogin, UserUpdate, UserOut, ProfileOut, AuthData
from utils import crud_user, user_service
from utils.auth_utils import create_user_token, decode_token
from utils.errors import Forbidden

router = APIRouter(prefix="/api/user", tags=["user"])
logger = logging.getLogger(__name__)


def auth_user(authorization: str | None = Header(default=None), db: Session = Depends(get_session)) -> UserOut:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Missing token")
    token = authorization.split(" ", 1)[1]
    try:
        data = decode_token(token)
    except jwt.PyJWTError as e:
        logger.error(f"Token decode failed: {e}")
        raise HTTPException(status_code=401, detail="Invalid token")
    user_id = data.get("sub")
    user = crud_user.get_user_by_id(db, user_id) if user_id else None
    if not user:
        logger.error(f"User not found for id: {user_id}")
        raise HTTPException(status_code=401, detail="User not found")
    if not user.is_active:
        raise HTTPException(status_code=401, detail="Account is deactivated")
    return UserOut.model_validate(user)


def require_admin(current: UserOut = Depends(auth_user)) -> UserOut:
    if current.role != "admin":
        raise Forbidden("Admin access required")
    return current


@router.post("/register", status_code=201, summary="Register a new student")
def register(payload: UserRegister, db: Session = Depends(get_session)):
    user = user_service.register(db, payload)
    data = AuthData(user=UserOut.model_validate(user), token=create_user_token(user))
    return {"success": True, "message": "User registered successfully", "data": data}


@router.post("/login", summary="Login and get a bearer token")
def login(payload: UserLogin, db: Session = Depends(get_session)):
    user = user_service.authenticate(db, payload.email, payload.password)
    data = AuthData(user=UserOut.model_validate(user), token=create_user_token(user))
    return {"success": True, "message": "Login successful", "data": data}


@router.get("/profile", summary="Current user's profile")
def get_profile(current: UserOut = Depends(auth_user), db: Session = Depends(get_session)):
    snapshot = crud_user.get_profile(db, current.id)
    profile = ProfileOut(
        **current.model_dump(),
        connections=sorted(snapshot.connections),
        pending_connections=sorted(snapshot.pending_connections),
    )
    return {"success": True, "message": "Profile retrieved successfully", "data": {"user": profile}}


@router.put("/profile", summary="Update current user's profile")
def update_profile(payload: UserUpdate, current: UserOut = Depends(auth_user), db: Session = Depends(get_session)):
    user = user_service.update_profile(db, current.id, payload)
    return {"success": True, "message": "Profile updated successfully", "data": {"user": UserOut.model_validate(user)}}


@router.get("/users", summary="All active users (admin)")
def get_all_users(current: UserOut = Depends(require_admin), db: Session = Depends(get_session)):
    users = [UserOut.model_validate(u) for u in user_service.list_active(db)]
    return {"success": True, "message": "Users retrieved successfully", "data": {"users": users, "count": len(users)}}


@router.delete("/users/{user_id}", summary="Deactivate a user (admin)")
def delete_user(user_id: str, current: UserOut = Depends(require_admin), db: Session = Depends(get_session)):
    user_service.deactivate(db, user_id)
    return {"success": True, "message": "User deleted successfully"}
