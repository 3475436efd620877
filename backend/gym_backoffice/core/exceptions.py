"""
Custom exceptions for the application.

Services raise these; the error handlers registered in ``main.create_app``
translate each one into a JSON response with a human-readable message.
"""

from typing import Optional


class GymBackofficeError(Exception):
    """Base class for errors that map to a 4xx response."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(GymBackofficeError):
    """A referenced client, visit, membership or other row does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id: Optional[int] = None):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class NoActiveMembershipError(GymBackofficeError):
    """Entry denied: the client has no paid, unexpired membership."""

    def __init__(self, client_id: int):
        super().__init__("Client does not have an active membership")
        self.client_id = client_id


class AlreadyPresentError(GymBackofficeError):
    """Entry denied: the client already has an open visit.

    Also raised when the storage-level open visit constraint rejects a
    concurrent insert for the same client.
    """

    def __init__(self, client_id: int):
        super().__init__("Client is already in the gym")
        self.client_id = client_id


class RelatedRecordsError(GymBackofficeError):
    """Delete refused because other rows still reference the target."""

    status_code = 409

    def __init__(self, entity: str, related: str):
        super().__init__(f"{entity} cannot be deleted while it has {related}")
        self.entity = entity
        self.related = related


class InvalidCredentialsError(GymBackofficeError):
    """Login rejected: unknown adminID or wrong password."""

    status_code = 401

    def __init__(self):
        super().__init__("Invalid credentials")
