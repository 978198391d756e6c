"""
Enums for the hiring backend API.
"""
from enum import Enum


class UserRole(str, Enum):
    COMPANY_OWNER = "company_owner"
    RECRUITER = "recruiter"
    CANDIDATE = "candidate"


class ApplicationStatus(str, Enum):
    """Application lifecycle: pending until decided, then terminal."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not ApplicationStatus.PENDING


class TechnicalTestStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"

