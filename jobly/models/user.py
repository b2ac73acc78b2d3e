"""
User and Application models.

A User applies to jobs; each (username, job_id) pair is one Application
whose state tracks how far the candidate has progressed.
"""

import enum
from sqlalchemy import Column, String, Text, Boolean, Integer, ForeignKey
from sqlalchemy.orm import relationship
from jobly.core.database import Base


class ApplicationState(str, enum.Enum):
    """
    Application progress.

    - INTERESTED: Saved by the user, not yet submitted
    - APPLIED: Submitted (the state a new application starts in)
    - ACCEPTED: Offer made
    - REJECTED: Turned down
    """
    INTERESTED = "interested"
    APPLIED = "applied"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class User(Base):
    """
    User account. Admins may manage companies, jobs and other users.
    """
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)

    # bcrypt hash, never the plain password
    password = Column(Text, nullable=False)

    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)

    # Relationships
    applications = relationship("Application", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"


class Application(Base):
    """
    A user's application to a job.
    """
    __tablename__ = "applications"

    username = Column(
        String(25),
        ForeignKey("users.username", ondelete="CASCADE"),
        primary_key=True
    )
    job_id = Column(
        Integer,
        ForeignKey("jobs.id", ondelete="CASCADE"),
        primary_key=True
    )
    state = Column(String(25), nullable=False, default=ApplicationState.APPLIED.value)

    # Relationships
    user = relationship("User", back_populates="applications")
    job = relationship("Job", back_populates="applications")

    def __repr__(self):
        return f"<Application(username='{self.username}', job_id={self.job_id}, state='{self.state}')>"
