from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import (
    BigInteger,
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gym_backoffice.core.config import utcnow

from .session import Base

# 64-bit keys everywhere; SQLite only autoincrements INTEGER PRIMARY KEY columns
BigIntPK = BigInteger().with_variant(Integer, "sqlite")


class Admin(Base):
    """Back office staff account. Authenticates with adminID + password."""

    __tablename__ = "admins"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    admin_id: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    fname: Mapped[str] = mapped_column(String(100), nullable=False)
    lname: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    dob: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    is_male: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    def __repr__(self):
        return f"<Admin(id={self.id}, admin_id='{self.admin_id}')>"


class Client(Base):
    """Gym member. Aggregate root for memberships, payments and visits."""

    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    fname: Mapped[str] = mapped_column(String(100), nullable=False)
    lname: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    dob: Mapped[date] = mapped_column(Date, nullable=False)
    is_male: Mapped[bool] = mapped_column(Boolean, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[str] = mapped_column(String(30), nullable=False)
    social_number: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    locker: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    weight: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    height: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, onupdate=utcnow
    )

    memberships: Mapped[List["Membership"]] = relationship(back_populates="client")
    payments: Mapped[List["Payment"]] = relationship(back_populates="client")
    gym_sessions: Mapped[List["GymSession"]] = relationship(back_populates="client")

    def __repr__(self):
        return f"<Client(id={self.id}, fname='{self.fname}')>"


class Package(Base):
    """Sellable membership package (e.g. "3 months, 12 sessions")."""

    __tablename__ = "packages"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    package_name: Mapped[str] = mapped_column(String(150), nullable=False)
    image_path: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    duration: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    days: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    instructors: Mapped[List["Instructor"]] = relationship(back_populates="package")
    memberships: Mapped[List["Membership"]] = relationship(back_populates="package")

    def __repr__(self):
        return f"<Package(id={self.id}, package_name='{self.package_name}')>"


class Instructor(Base):
    __tablename__ = "instructors"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    package_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("packages.id"), nullable=False, index=True
    )
    fname: Mapped[str] = mapped_column(String(100), nullable=False)
    lname: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    dob: Mapped[date] = mapped_column(Date, nullable=False)
    is_male: Mapped[bool] = mapped_column(Boolean, nullable=False)
    salary: Mapped[float] = mapped_column(Float, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    phone_number: Mapped[str] = mapped_column(String(30), nullable=False)
    image_path: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    package: Mapped["Package"] = relationship(back_populates="instructors")
    memberships: Mapped[List["Membership"]] = relationship(back_populates="instructor")
    sessions: Mapped[List["TrainingSession"]] = relationship(
        back_populates="instructor"
    )

    def __repr__(self):
        return f"<Instructor(id={self.id}, fname='{self.fname}')>"


class Membership(Base):
    """A client's subscription to a package.

    Active for gym admission iff ``is_paid`` and ``end_date >= now``.
    """

    __tablename__ = "memberships"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("clients.id"), nullable=False
    )
    package_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("packages.id"), nullable=False, index=True
    )
    instructor_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("instructors.id"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String(30), nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    payment_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    is_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    remain_sessions: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    client: Mapped["Client"] = relationship(back_populates="memberships")
    package: Mapped["Package"] = relationship(back_populates="memberships")
    instructor: Mapped["Instructor"] = relationship(back_populates="memberships")
    sessions: Mapped[List["TrainingSession"]] = relationship(
        back_populates="membership"
    )

    __table_args__ = (
        # Eligibility lookup: paid memberships of one client by end date
        Index("ix_memberships_client_paid_end", "client_id", "is_paid", "end_date"),
    )

    def __repr__(self):
        return f"<Membership(id={self.id}, client_id={self.client_id}, is_paid={self.is_paid})>"


class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("clients.id"), nullable=False, index=True
    )
    payment_type: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    client: Mapped["Client"] = relationship(back_populates="payments")

    def __repr__(self):
        return f"<Payment(id={self.id}, client_id={self.client_id}, payment_type='{self.payment_type}')>"


class TrainingSession(Base):
    """A scheduled instructor session booked against a membership."""

    __tablename__ = "sessions"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    instructor_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("instructors.id"), nullable=False, index=True
    )
    membership_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("memberships.id"), nullable=False, index=True
    )
    destination_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    is_attended: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    instructor: Mapped["Instructor"] = relationship(back_populates="sessions")
    membership: Mapped["Membership"] = relationship(back_populates="sessions")
    attendance: Mapped[List["Attendance"]] = relationship(
        back_populates="session", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<TrainingSession(id={self.id}, destination_date={self.destination_date})>"


class Attendance(Base):
    """Client attendance at a training session."""

    __tablename__ = "attendance"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("clients.id"), nullable=False, index=True
    )
    session_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    client: Mapped["Client"] = relationship()
    session: Mapped["TrainingSession"] = relationship(back_populates="attendance")


class GymSession(Base):
    """One gym visit: entrance time, and exit time once the client leaves."""

    __tablename__ = "gym_sessions"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("clients.id"), nullable=False
    )
    entrance_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    exit_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    locker_number: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    client: Mapped["Client"] = relationship(back_populates="gym_sessions")

    __table_args__ = (
        Index("ix_gym_sessions_client_entrance", "client_id", "entrance_time"),
        # At most one open visit per client, enforced by the database so
        # concurrent entry requests on separate workers cannot both succeed.
        Index(
            "uq_gym_sessions_open_visit",
            "client_id",
            unique=True,
            sqlite_where=text("exit_time IS NULL"),
            postgresql_where=text("exit_time IS NULL"),
        ),
    )

    def __repr__(self):
        return f"<GymSession(id={self.id}, client_id={self.client_id}, exit_time={self.exit_time})>"
