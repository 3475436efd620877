"""
Domain entities - Pure business logic, no framework dependencies.

Repositories convert ORM rows into these dataclasses; services and
controllers never touch SQLAlchemy models directly. Related entities are
attached as optional references when a repository loads them.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional


@dataclass
class Admin:
    """Back office staff account (no password material)."""

    id: Optional[int] = None
    admin_id: str = ""
    fname: str = ""
    lname: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    dob: Optional[date] = None
    is_male: bool = True
    created_at: Optional[datetime] = None

    # Flask-Login interface
    is_authenticated = True
    is_active = True
    is_anonymous = False

    def get_id(self) -> str:
        return str(self.id)


@dataclass
class Client:
    """Domain entity representing a gym client."""

    id: Optional[int] = None
    fname: str = ""
    lname: Optional[str] = None
    dob: Optional[date] = None
    is_male: bool = True
    email: Optional[str] = None
    phone_number: str = ""
    social_number: str = ""
    description: Optional[str] = None
    locker: Optional[int] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    memberships: Optional[List["Membership"]] = None
    payments: Optional[List["Payment"]] = None
    visits: Optional[List["Visit"]] = None

    @property
    def full_name(self) -> str:
        return f"{self.fname} {self.lname or ''}".strip()


@dataclass
class Package:
    id: Optional[int] = None
    package_name: str = ""
    image_path: Optional[str] = None
    duration: str = ""
    price: int = 0
    days: int = 1
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    membership_count: Optional[int] = None
    instructor_count: Optional[int] = None
    instructors: Optional[List["Instructor"]] = None
    memberships: Optional[List["Membership"]] = None

    def __post_init__(self):
        """Validate business rules."""
        if self.price < 0:
            raise ValueError("Price cannot be negative")
        if self.days < 1:
            raise ValueError("Days must be at least 1")


@dataclass
class Instructor:
    id: Optional[int] = None
    package_id: int = 0
    fname: str = ""
    lname: Optional[str] = None
    dob: Optional[date] = None
    is_male: bool = True
    salary: float = 0.0
    email: Optional[str] = None
    title: str = ""
    description: Optional[str] = None
    phone_number: str = ""
    image_path: Optional[str] = None
    created_at: Optional[datetime] = None

    package: Optional[Package] = None
    membership_count: Optional[int] = None
    session_count: Optional[int] = None
    memberships: Optional[List["Membership"]] = None
    sessions: Optional[List["TrainingSession"]] = None


@dataclass
class Membership:
    """A client's subscription to a package, with paid and date-range state."""

    id: Optional[int] = None
    client_id: int = 0
    package_id: int = 0
    instructor_id: int = 0
    status: str = ""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    payment_date: Optional[datetime] = None
    is_paid: bool = False
    description: Optional[str] = None
    remain_sessions: int = 0
    created_at: Optional[datetime] = None

    client: Optional[Client] = None
    package: Optional[Package] = None
    instructor: Optional[Instructor] = None
    sessions: Optional[List["TrainingSession"]] = None

    def __post_init__(self):
        """Validate business rules."""
        if self.remain_sessions < 0:
            raise ValueError("Remaining sessions cannot be negative")

    def is_active_at(self, now: datetime) -> bool:
        """Active for admission: paid and not yet expired at ``now``."""
        return bool(self.is_paid and self.end_date is not None and self.end_date >= now)


@dataclass
class Payment:
    id: Optional[int] = None
    client_id: int = 0
    payment_type: str = ""
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    client: Optional[Client] = None


@dataclass
class Attendance:
    id: Optional[int] = None
    client_id: int = 0
    session_id: int = 0
    created_at: Optional[datetime] = None

    client: Optional[Client] = None


@dataclass
class TrainingSession:
    id: Optional[int] = None
    instructor_id: int = 0
    membership_id: int = 0
    destination_date: Optional[datetime] = None
    is_attended: bool = False
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    instructor: Optional[Instructor] = None
    membership: Optional[Membership] = None
    attendance: Optional[List[Attendance]] = None


class PresenceState(str, Enum):
    """Where a client is, as far as the visit ledger knows."""

    OUTSIDE = "OUTSIDE"
    INSIDE = "INSIDE"


@dataclass
class Visit:
    """One gym entrance-to-exit interval for a client."""

    id: Optional[int] = None
    client_id: int = 0
    entrance_time: Optional[datetime] = None
    exit_time: Optional[datetime] = None
    locker_number: Optional[int] = None
    created_at: Optional[datetime] = None

    client: Optional[Client] = None

    @property
    def is_open(self) -> bool:
        return self.exit_time is None


@dataclass
class DashboardStats:
    total_clients: int = 0
    total_packages: int = 0
    total_instructors: int = 0
    active_memberships: int = 0
    active_gym_sessions: int = 0
    today_gym_sessions: int = 0
    total_payments: int = 0
    active_sessions: int = 0


@dataclass
class RecentActivity:
    recent_clients: List[Client] = field(default_factory=list)
    recent_memberships: List[Membership] = field(default_factory=list)
    recent_payments: List[Payment] = field(default_factory=list)
    active_visits: List[Visit] = field(default_factory=list)
