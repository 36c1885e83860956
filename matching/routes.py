"""
Matching API Routes

Collaborator suggestions and the connection-request workflow.
Prefix: /api/user
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from db import get_session
from models.schemas_user import UserOut, ConnectionRequestIn, ConnectionRespondIn
from profile_routes import auth_user
from .logic.engine import MatchingEngine
from .logic.connections import ConnectionService


router = APIRouter(prefix="/api/user", tags=["matching"])


@router.get("/get-matches", summary="Ranked collaborator suggestions")
def get_matches(current: UserOut = Depends(auth_user), db: Session = Depends(get_session)):
    """
    Score every eligible student against the current user's profile.

    Users already connected, with a pending request in either direction,
    inactive users and admins are never suggested.
    """
    matches = MatchingEngine(db).find_matches(current.id)
    return {
        "success": True,
        "message": "Matches retrieved successfully",
        "data": {"matches": matches, "count": len(matches)},
    }


@router.post("/connections/request", summary="Send a connection request")
def send_connection_request(
    body: ConnectionRequestIn,
    current: UserOut = Depends(auth_user),
    db: Session = Depends(get_session),
):
    result = ConnectionService(db).send_request(current.id, body.target_user_id)
    return {"success": result.success, "message": result.message}


@router.post("/connections/respond", summary="Accept or reject a connection request")
def respond_to_connection_request(
    body: ConnectionRespondIn,
    current: UserOut = Depends(auth_user),
    db: Session = Depends(get_session),
):
    result = ConnectionService(db).respond(current.id, body.connection_id, body.status)
    return {"success": result.success, "message": result.message}
