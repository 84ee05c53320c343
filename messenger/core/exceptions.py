"""
Domain errors raised by the service layer.

Every failed operation surfaces as one MessengerError subclass carrying an
ErrorKind. Nothing here is retried; the HTTP layer renders them through a
single exception handler using each class's status_code.
"""
import enum

from fastapi import status


class ErrorKind(str, enum.Enum):
    """Semantic error kinds returned to the immediate caller."""
    NOT_FOUND = "not_found"
    SELF_REFERENCE = "self_reference"
    ALREADY_RELATED = "already_related"
    NOT_IN_LIST = "not_in_list"
    NOT_IN_CHAT = "not_in_chat"
    OWNER_ONLY = "owner_only"
    OWNER_MISMATCH = "owner_mismatch"
    CANNOT_REMOVE_OWNER = "cannot_remove_owner"
    DUPLICATE_MEMBERSHIP = "duplicate_membership"
    DUPLICATE_LOGIN = "duplicate_login"
    BLOCKED_PARTICIPANT = "blocked_participant"
    CONFIRMATION_REQUIRED = "confirmation_required"
    VALIDATION_ERROR = "validation_error"
    STORE_ERROR = "store_error"


class MessengerError(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind = ErrorKind.STORE_ERROR
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"error": self.kind.value, "detail": self.detail}


class NotFoundError(MessengerError):
    kind = ErrorKind.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND


class SelfReferenceError(MessengerError):
    kind = ErrorKind.SELF_REFERENCE
    status_code = status.HTTP_400_BAD_REQUEST


class AlreadyRelatedError(MessengerError):
    kind = ErrorKind.ALREADY_RELATED
    status_code = status.HTTP_409_CONFLICT


class NotInListError(MessengerError):
    kind = ErrorKind.NOT_IN_LIST
    status_code = status.HTTP_404_NOT_FOUND


class NotInChatError(MessengerError):
    kind = ErrorKind.NOT_IN_CHAT
    status_code = status.HTTP_403_FORBIDDEN


class OwnerOnlyError(MessengerError):
    """Only the chat's initial sender may do this."""
    kind = ErrorKind.OWNER_ONLY
    status_code = status.HTTP_403_FORBIDDEN


class OwnerMismatchError(MessengerError):
    """Only a message's author may edit or delete it."""
    kind = ErrorKind.OWNER_MISMATCH
    status_code = status.HTTP_403_FORBIDDEN


class CannotRemoveOwnerError(MessengerError):
    kind = ErrorKind.CANNOT_REMOVE_OWNER
    status_code = status.HTTP_400_BAD_REQUEST


class DuplicateMembershipError(MessengerError):
    kind = ErrorKind.DUPLICATE_MEMBERSHIP
    status_code = status.HTTP_409_CONFLICT


class DuplicateLoginError(MessengerError):
    kind = ErrorKind.DUPLICATE_LOGIN
    status_code = status.HTTP_409_CONFLICT


class BlockedParticipantError(MessengerError):
    kind = ErrorKind.BLOCKED_PARTICIPANT
    status_code = status.HTTP_403_FORBIDDEN


class ConfirmationRequiredError(MessengerError):
    """
    The mutation crosses the contact/block boundary.

    The caller re-invokes the same operation with the confirm flag set.
    """
    kind = ErrorKind.CONFIRMATION_REQUIRED
    status_code = status.HTTP_409_CONFLICT


class ValidationError(MessengerError):
    kind = ErrorKind.VALIDATION_ERROR
    status_code = status.HTTP_400_BAD_REQUEST


class StoreError(MessengerError):
    """Wraps an underlying persistence failure; the operation was rolled back."""
    kind = ErrorKind.STORE_ERROR
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
