from sqlalchemy.orm import Session
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from models.models_user import User, UserConnection, PendingConnection
from matching.logic.contracts import ProfileSnapshot

# set-valued profile fields -> (association model, owner column, member column)
SET_FIELDS = {
    "connections": (UserConnection, "user_id", "peer_id"),
    "pending_connections": (PendingConnection, "recipient_id", "requester_id"),
}

def get_user_by_id(db: Session, user_id: str) -> User | None:
    return db.get(User, user_id)

def get_user_by_email(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == email.strip().lower())).scalar_one_or_none()

def create_user(db: Session, *, password_hash: str, role: str = "student", **fields) -> User:
    user = User(password_hash=password_hash, role=role, **fields)
    user.email = user.email.strip().lower()
    db.add(user)
    db.flush()
    return user

def update_user(db: Session, user: User, patch: dict) -> User:
    for field, value in patch.items():
        setattr(user, field, value)
    db.flush()
    return user

def list_active_users(db: Session) -> list[User]:
    return list(db.execute(select(User).where(User.is_active.is_(True)).order_by(User.created_at)).scalars())

def scan_candidates(db: Session, exclude_ids: set[str]) -> list[User]:
    """Active, non-admin users outside `exclude_ids`, in id order."""
    query = select(User).where(User.is_active.is_(True), User.role != "admin")
    if exclude_ids:
        query = query.where(User.id.not_in(sorted(exclude_ids)))
    return list(db.execute(query.order_by(User.id)).scalars())

def get_set_members(db: Session, user_id: str, field: str) -> set[str]:
    model, owner, member = SET_FIELDS[field]
    column = getattr(model, member)
    return set(db.execute(select(column).where(getattr(model, owner) == user_id)).scalars())

def get_outgoing_requests(db: Session, user_id: str) -> set[str]:
    """Ids of users that `user_id` asked to connect (served by the requester_id index)."""
    return set(db.execute(
        select(PendingConnection.recipient_id).where(PendingConnection.requester_id == user_id)
    ).scalars())

def add_to_set(db: Session, user_id: str, field: str, value: str) -> bool:
    """Add `value` to the set field of `user_id`. Returns False if it was already there."""
    model, owner, member = SET_FIELDS[field]
    if db.get(model, {owner: user_id, member: value}) is not None:
        return False
    try:
        # savepoint: a concurrent insert of the same row only undoes this one
        with db.begin_nested():
            db.add(model(**{owner: user_id, member: value}))
    except IntegrityError:
        return False
    return True

def remove_from_set(db: Session, user_id: str, field: str, value: str) -> bool:
    """Remove `value` from the set field of `user_id`. Returns False if it was absent."""
    model, owner, member = SET_FIELDS[field]
    result = db.execute(
        delete(model).where(getattr(model, owner) == user_id, getattr(model, member) == value)
    )
    return result.rowcount > 0

def to_snapshot(db: Session, user: User, with_connections: bool = True) -> ProfileSnapshot:
    snapshot = ProfileSnapshot(
        id=user.id,
        name=user.name,
        email=user.email,
        program_of_study=user.program_of_study,
        interest=user.interest,
        skills=list(user.skills or []),
        project_idea=user.project_idea,
        availability_date=user.availability_date,
        role=user.role,
        is_active=user.is_active,
        created_at=user.created_at,
    )
    if with_connections:
        snapshot.connections = get_set_members(db, user.id, "connections")
        snapshot.pending_connections = get_set_members(db, user.id, "pending_connections")
    return snapshot

def get_profile(db: Session, user_id: str) -> ProfileSnapshot | None:
    user = get_user_by_id(db, user_id)
    return to_snapshot(db, user) if user else None
