"""
Domain exceptions for the inventory and order core

Raised by repositories and services; the HTTP layer turns them into
status codes and the importer collects them per order group.
"""


class TallyError(Exception):
    """Base exception for all domain errors"""
    pass


class ValidationError(TallyError):
    """Raised when input is missing or invalid, before anything is written"""
    pass


class InvalidTransitionError(ValidationError):
    """Raised when an order status transition is not allowed"""
    pass


class UniqueConstraintError(TallyError):
    """Raised when a write collides with a unique key (SKU, order code, channel + external id)"""
    pass


class NotFoundError(TallyError):
    """Raised when a looked-up record does not exist"""
    pass


class PersistenceError(TallyError):
    """Raised when the database write or read fails for any other reason"""
    pass
