"""
Schemas package - JSON response bodies for the API.
"""

from .serializers import (
    format_datetime,
    format_id,
    serialize_admin,
    serialize_client,
    serialize_instructor,
    serialize_membership,
    serialize_package,
    serialize_payment,
    serialize_recent_activity,
    serialize_session,
    serialize_stats,
    serialize_visit,
)

__all__ = [
    "format_datetime",
    "format_id",
    "serialize_admin",
    "serialize_client",
    "serialize_instructor",
    "serialize_membership",
    "serialize_package",
    "serialize_payment",
    "serialize_recent_activity",
    "serialize_session",
    "serialize_stats",
    "serialize_visit",
]
