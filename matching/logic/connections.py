"""
Connection State Machine

Per ordered pair (A asks B):

    none --send_request--> pending on B --accept--> connected
                                        --reject--> none

A pending request is stored on the recipient only. Accepting writes both
directions of the connection inside the caller's transaction, so a failure
half-way rolls back instead of leaving a one-sided connection.
"""

import logging
from sqlalchemy.orm import Session

from utils import crud_user
from utils.errors import NotFound, InvalidStateTransition, ValidationFailure
from .contracts import ConnectionDecision, ConnectionResult

logger = logging.getLogger(__name__)


def parse_decision(status) -> ConnectionDecision:
    try:
        return ConnectionDecision(status)
    except ValueError:
        raise ValidationFailure({"status": 'Status must be either "accept" or "reject"'})


class ConnectionService:
    """Validates and applies connection-request transitions."""

    def __init__(self, db: Session):
        self.db = db

    def send_request(self, requester_id: str, target_id: str) -> ConnectionResult:
        if str(requester_id) == str(target_id):
            raise InvalidStateTransition("Cannot send connection request to yourself")

        target = crud_user.get_profile(self.db, target_id)
        if target is None:
            raise NotFound("Target user not found")
        if not target.is_active:
            raise InvalidStateTransition("Target user is not active")

        requester = crud_user.get_profile(self.db, requester_id)
        if requester is None:
            raise NotFound("Current user not found")

        if target_id in requester.connections:
            raise InvalidStateTransition("Already connected with this user")
        if requester_id in target.pending_connections:
            raise InvalidStateTransition("Connection request already sent")
        if target_id in requester.pending_connections:
            raise InvalidStateTransition("This user has already sent you a connection request")

        if not crud_user.add_to_set(self.db, target_id, "pending_connections", requester_id):
            # lost a race with an identical request
            raise InvalidStateTransition("Connection request already sent")

        logger.info(f"Connection request {requester_id} -> {target_id}")
        return ConnectionResult(message="Connection request sent successfully")

    def respond(self, responder_id: str, requester_id: str, status) -> ConnectionResult:
        decision = parse_decision(status)

        if crud_user.get_user_by_id(self.db, requester_id) is None:
            raise NotFound("Connection user not found")
        responder = crud_user.get_profile(self.db, responder_id)
        if responder is None:
            raise NotFound("Current user not found")

        if requester_id not in responder.pending_connections:
            raise InvalidStateTransition("No pending connection request found from this user")

        # the delete is the guard: a concurrent response already consumed it
        if not crud_user.remove_from_set(self.db, responder_id, "pending_connections", requester_id):
            raise InvalidStateTransition("No pending connection request found from this user")

        if decision is ConnectionDecision.REJECT:
            logger.info(f"Connection request {requester_id} -> {responder_id} rejected")
            return ConnectionResult(message="Connection request rejected successfully")

        crud_user.add_to_set(self.db, responder_id, "connections", requester_id)
        crud_user.add_to_set(self.db, requester_id, "connections", responder_id)
        logger.info(f"Connection request {requester_id} -> {responder_id} accepted")
        return ConnectionResult(message="Connection request accepted successfully")
