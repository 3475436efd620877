"""
Domain entity -> JSON body converters.

Responses use camelCase keys. 64-bit identifiers are rendered as decimal
strings so JavaScript clients never lose precision, and datetimes as
ISO-8601 UTC with a trailing ``Z``. Related entities are embedded only when
the repository loaded them.
"""

from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, Iterable, Optional

from gym_backoffice.domain.entities import (
    Admin,
    Attendance,
    Client,
    DashboardStats,
    Instructor,
    Membership,
    Package,
    Payment,
    RecentActivity,
    TrainingSession,
    Visit,
)

JSON = Dict[str, Any]


def format_id(value: Optional[int]) -> Optional[str]:
    return str(value) if value is not None else None


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def format_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _embed(body: JSON, key: str, value: Any, serializer: Callable[[Any], JSON]) -> None:
    if value is not None:
        body[key] = serializer(value)


def _embed_many(
    body: JSON, key: str, values: Optional[Iterable[Any]], serializer: Callable[[Any], JSON]
) -> None:
    if values is not None:
        body[key] = [serializer(v) for v in values]


def serialize_admin(admin: Admin) -> JSON:
    return {
        "id": format_id(admin.id),
        "adminID": admin.admin_id,
        "fname": admin.fname,
        "lname": admin.lname,
        "email": admin.email,
        "phoneNumber": admin.phone_number,
        "dob": format_date(admin.dob),
        "isMale": admin.is_male,
        "createdAt": format_datetime(admin.created_at),
    }


def serialize_client(client: Client) -> JSON:
    body = {
        "id": format_id(client.id),
        "fname": client.fname,
        "lname": client.lname,
        "dob": format_date(client.dob),
        "isMale": client.is_male,
        "email": client.email,
        "phoneNumber": client.phone_number,
        "socialNumber": client.social_number,
        "description": client.description,
        "locker": client.locker,
        "weight": client.weight,
        "height": client.height,
        "createdAt": format_datetime(client.created_at),
        "updatedAt": format_datetime(client.updated_at),
    }
    _embed_many(body, "memberships", client.memberships, serialize_membership)
    _embed_many(body, "payments", client.payments, serialize_payment)
    _embed_many(body, "gymSessions", client.visits, serialize_visit)
    return body


def serialize_package(package: Package) -> JSON:
    body = {
        "id": format_id(package.id),
        "packageName": package.package_name,
        "imagePath": package.image_path,
        "duration": package.duration,
        "price": package.price,
        "days": package.days,
        "description": package.description,
        "createdAt": format_datetime(package.created_at),
    }
    if package.membership_count is not None or package.instructor_count is not None:
        body["_count"] = {
            "memberships": package.membership_count or 0,
            "instructors": package.instructor_count or 0,
        }
    _embed_many(body, "instructors", package.instructors, serialize_instructor)
    _embed_many(body, "memberships", package.memberships, serialize_membership)
    return body


def serialize_instructor(instructor: Instructor) -> JSON:
    body = {
        "id": format_id(instructor.id),
        "packageId": format_id(instructor.package_id),
        "fname": instructor.fname,
        "lname": instructor.lname,
        "dob": format_date(instructor.dob),
        "isMale": instructor.is_male,
        "salary": instructor.salary,
        "email": instructor.email,
        "title": instructor.title,
        "description": instructor.description,
        "phoneNumber": instructor.phone_number,
        "imagePath": instructor.image_path,
        "createdAt": format_datetime(instructor.created_at),
    }
    _embed(body, "package", instructor.package, serialize_package)
    if instructor.membership_count is not None or instructor.session_count is not None:
        body["_count"] = {
            "memberships": instructor.membership_count or 0,
            "sessions": instructor.session_count or 0,
        }
    _embed_many(body, "memberships", instructor.memberships, serialize_membership)
    _embed_many(body, "sessions", instructor.sessions, serialize_session)
    return body


def serialize_membership(membership: Membership) -> JSON:
    body = {
        "id": format_id(membership.id),
        "clientId": format_id(membership.client_id),
        "packageId": format_id(membership.package_id),
        "instructorId": format_id(membership.instructor_id),
        "status": membership.status,
        "startDate": format_datetime(membership.start_date),
        "endDate": format_datetime(membership.end_date),
        "paymentDate": format_datetime(membership.payment_date),
        "isPaid": membership.is_paid,
        "description": membership.description,
        "remainSessions": membership.remain_sessions,
        "createdAt": format_datetime(membership.created_at),
    }
    _embed(body, "client", membership.client, serialize_client)
    _embed(body, "package", membership.package, serialize_package)
    _embed(body, "instructor", membership.instructor, serialize_instructor)
    _embed_many(body, "sessions", membership.sessions, serialize_session)
    return body


def serialize_payment(payment: Payment) -> JSON:
    body = {
        "id": format_id(payment.id),
        "clientId": format_id(payment.client_id),
        "paymentType": payment.payment_type,
        "description": payment.description,
        "createdAt": format_datetime(payment.created_at),
    }
    _embed(body, "client", payment.client, serialize_client)
    return body


def serialize_attendance(attendance: Attendance) -> JSON:
    body = {
        "id": format_id(attendance.id),
        "clientId": format_id(attendance.client_id),
        "sessionId": format_id(attendance.session_id),
        "createdAt": format_datetime(attendance.created_at),
    }
    _embed(body, "client", attendance.client, serialize_client)
    return body


def serialize_session(session: TrainingSession) -> JSON:
    body = {
        "id": format_id(session.id),
        "instructorId": format_id(session.instructor_id),
        "membershipId": format_id(session.membership_id),
        "destinationDate": format_datetime(session.destination_date),
        "isAttended": session.is_attended,
        "description": session.description,
        "createdAt": format_datetime(session.created_at),
    }
    _embed(body, "instructor", session.instructor, serialize_instructor)
    _embed(body, "membership", session.membership, serialize_membership)
    _embed_many(body, "attendance", session.attendance, serialize_attendance)
    return body


def serialize_visit(visit: Visit) -> JSON:
    body = {
        "id": format_id(visit.id),
        "clientId": format_id(visit.client_id),
        "entranceTime": format_datetime(visit.entrance_time),
        "exitTime": format_datetime(visit.exit_time),
        "lockerNumber": visit.locker_number,
        "createdAt": format_datetime(visit.created_at),
    }
    _embed(body, "client", visit.client, serialize_client)
    return body


def serialize_stats(stats: DashboardStats) -> JSON:
    return {
        "totalClients": stats.total_clients,
        "totalPackages": stats.total_packages,
        "totalInstructors": stats.total_instructors,
        "activeMemberships": stats.active_memberships,
        "activeGymSessions": stats.active_gym_sessions,
        "todayGymSessions": stats.today_gym_sessions,
        "totalPayments": stats.total_payments,
        "activeSessions": stats.active_sessions,
    }


def serialize_recent_activity(activity: RecentActivity) -> JSON:
    return {
        "recentClients": [serialize_client(c) for c in activity.recent_clients],
        "recentMemberships": [
            serialize_membership(m) for m in activity.recent_memberships
        ],
        "recentPayments": [serialize_payment(p) for p in activity.recent_payments],
        "activeGymSessions": [serialize_visit(v) for v in activity.active_visits],
    }
