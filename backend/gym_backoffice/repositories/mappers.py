"""Flat ORM row -> domain entity converters shared by the repositories.

Model attribute names match domain field names, so each converter only
lists the columns to copy. Datetimes are normalized to aware UTC because
SQLite hands them back naive.
"""

from datetime import datetime
from typing import Any, Dict, Iterable

from gym_backoffice.core.config import ensure_utc
from gym_backoffice.db import base as models
from gym_backoffice.domain import entities

CLIENT_COLUMNS = (
    "fname",
    "lname",
    "dob",
    "is_male",
    "email",
    "phone_number",
    "social_number",
    "description",
    "locker",
    "weight",
    "height",
)
PACKAGE_COLUMNS = ("package_name", "image_path", "duration", "price", "days", "description")
INSTRUCTOR_COLUMNS = (
    "package_id",
    "fname",
    "lname",
    "dob",
    "is_male",
    "salary",
    "email",
    "title",
    "description",
    "phone_number",
    "image_path",
)
MEMBERSHIP_COLUMNS = (
    "client_id",
    "package_id",
    "instructor_id",
    "status",
    "start_date",
    "end_date",
    "payment_date",
    "is_paid",
    "description",
    "remain_sessions",
)
PAYMENT_COLUMNS = ("client_id", "payment_type", "description")
SESSION_COLUMNS = (
    "instructor_id",
    "membership_id",
    "destination_date",
    "is_attended",
    "description",
)
VISIT_COLUMNS = ("client_id", "entrance_time", "exit_time", "locker_number")
ADMIN_COLUMNS = ("admin_id", "fname", "lname", "email", "phone_number", "dob", "is_male")


def read_columns(row: Any, names: Iterable[str]) -> Dict[str, Any]:
    """Copy ``id``, ``created_at`` and the named columns off an ORM row."""
    values: Dict[str, Any] = {"id": row.id, "created_at": ensure_utc(row.created_at)}
    for name in names:
        value = getattr(row, name)
        if isinstance(value, datetime):
            value = ensure_utc(value)
        values[name] = value
    return values


def write_columns(entity: Any, names: Iterable[str]) -> Dict[str, Any]:
    """Column values to persist for a domain entity."""
    return {name: getattr(entity, name) for name in names}


def client_from_row(row: models.Client) -> entities.Client:
    values = read_columns(row, CLIENT_COLUMNS)
    values["updated_at"] = ensure_utc(row.updated_at)
    return entities.Client(**values)


def package_from_row(row: models.Package) -> entities.Package:
    return entities.Package(**read_columns(row, PACKAGE_COLUMNS))


def instructor_from_row(row: models.Instructor) -> entities.Instructor:
    return entities.Instructor(**read_columns(row, INSTRUCTOR_COLUMNS))


def membership_from_row(row: models.Membership) -> entities.Membership:
    return entities.Membership(**read_columns(row, MEMBERSHIP_COLUMNS))


def payment_from_row(row: models.Payment) -> entities.Payment:
    return entities.Payment(**read_columns(row, PAYMENT_COLUMNS))


def session_from_row(row: models.TrainingSession) -> entities.TrainingSession:
    return entities.TrainingSession(**read_columns(row, SESSION_COLUMNS))


def attendance_from_row(row: models.Attendance) -> entities.Attendance:
    return entities.Attendance(
        **read_columns(row, ("client_id", "session_id")),
        client=client_from_row(row.client),
    )


def visit_from_row(row: models.GymSession) -> entities.Visit:
    return entities.Visit(**read_columns(row, VISIT_COLUMNS))


def admin_from_row(row: models.Admin) -> entities.Admin:
    return entities.Admin(**read_columns(row, ADMIN_COLUMNS))
