"""
Candidate Filter

Works out who must never be suggested to a requester and fetches the
remaining candidate pool from the store.
"""

from typing import List, Set
from sqlalchemy.orm import Session

from utils import crud_user
from .contracts import ProfileSnapshot


def build_exclusions(requester: ProfileSnapshot, outgoing_requests: Set[str]) -> Set[str]:
    """
    Ids hidden from `requester`'s matches:

    - the requester
    - accepted connections
    - users who asked the requester (`pending_connections`)
    - users the requester asked (`outgoing_requests`, recorded on their side)
    """
    return (
        {requester.id}
        | set(requester.connections)
        | set(requester.pending_connections)
        | set(outgoing_requests)
    )


def exclusions_for(db: Session, requester: ProfileSnapshot) -> Set[str]:
    outgoing = crud_user.get_outgoing_requests(db, requester.id)
    return build_exclusions(requester, outgoing)


def select_candidates(db: Session, requester: ProfileSnapshot) -> List:
    """Active, non-admin users the requester may be matched with."""
    return crud_user.scan_candidates(db, exclusions_for(db, requester))
