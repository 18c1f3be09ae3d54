"""
Domain errors.

Raised by use cases and adapters; the API layer maps each one to an
HTTP status in a single exception handler.
"""


class VerificationError(Exception):
    """Base class for every error this service raises on purpose."""


class ValidationError(VerificationError):
    """Malformed or disallowed input (unknown docType, empty field, bad status)."""


class NotFoundError(VerificationError):
    """Driver, document or vehicle-type mapping does not exist."""


class AuthorizationError(VerificationError):
    """Requester does not own the resource or is not a trusted caller."""


class StorageError(VerificationError):
    """The object-storage collaborator failed."""


class InternalError(VerificationError):
    """Anything unexpected, e.g. a failed record write after storage succeeded."""
