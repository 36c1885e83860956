import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Date, Text, JSON, ForeignKey
from db import Base


def new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    program_of_study = Column(String(100), nullable=False)
    interest = Column(String(500), nullable=False)
    skills = Column(JSON, nullable=False, default=list)
    project_idea = Column(Text, nullable=False)
    availability_date = Column(Date, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="student")
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime(timezone=False), nullable=True)
    created_at = Column(DateTime(timezone=False), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=False), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class UserConnection(Base):
    """One direction of an accepted connection; a pair is stored as two rows."""
    __tablename__ = "user_connections"
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    peer_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime(timezone=False), default=datetime.utcnow, nullable=False)


class PendingConnection(Base):
    """requester_id asked recipient_id to connect; recipient has to answer."""
    __tablename__ = "pending_connections"
    recipient_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    requester_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    created_at = Column(DateTime(timezone=False), default=datetime.utcnow, nullable=False)
