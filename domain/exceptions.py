"""Domain Exceptions"""


class DomainException(Exception):
    """Base exception raised by the reservation engine"""
    pass


class ValidationError(DomainException, ValueError):
    """Request rejected before any state change (bad dates, empty name, room taken)"""
    pass


class PaymentDeclinedError(DomainException):
    """Payment gateway reported a failed charge"""
    pass


class PersistenceError(DomainException):
    """Snapshot could not be read or written"""
    pass


class UnsavedChangesError(PersistenceError):
    """Save failed after an in-memory mutation.

    The mutation is not rolled back; ``reservation`` is the record that now
    differs from what is on disk.
    """

    def __init__(self, message: str, reservation=None):
        super().__init__(message)
        self.reservation = reservation
