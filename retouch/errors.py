"""
Errors - Typed failures surfaced by every operation.

Every failure is terminal for the operation that raised it; nothing in the
engine retries. Each error carries a machine-readable code and the HTTP
status the API layer answers with.
"""

from __future__ import annotations
from enum import Enum


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
    ACCOUNT_EXPIRED = "ACCOUNT_EXPIRED"
    DUPLICATE_ACCOUNT = "DUPLICATE_ACCOUNT"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    PROTECTED_ACCOUNT = "PROTECTED_ACCOUNT"
    ADMIN_REQUIRED = "ADMIN_REQUIRED"
    SESSION_INVALID = "SESSION_INVALID"
    MISSING_INPUT = "MISSING_INPUT"
    MISSING_ACCESS_CREDENTIAL = "MISSING_ACCESS_CREDENTIAL"
    TRANSFORM_FAILED = "TRANSFORM_FAILED"
    WORKSPACE_BUSY = "WORKSPACE_BUSY"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class RetouchError(Exception):
    """Base class for all engine errors."""
    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None, **details):
        self.message = message or self.default_message
        self.details = details or None
        super().__init__(self.message)


class InvalidCredentials(RetouchError):
    code = ErrorCode.INVALID_CREDENTIALS
    status_code = 401
    default_message = "Invalid username or password."


class AccountInactive(RetouchError):
    code = ErrorCode.ACCOUNT_INACTIVE
    status_code = 403
    default_message = "Account is inactive."


class AccountExpired(RetouchError):
    code = ErrorCode.ACCOUNT_EXPIRED
    status_code = 403
    default_message = "Account expired."


class DuplicateAccount(RetouchError):
    code = ErrorCode.DUPLICATE_ACCOUNT
    status_code = 409
    default_message = "User exists."


class AccountNotFound(RetouchError):
    code = ErrorCode.ACCOUNT_NOT_FOUND
    status_code = 404
    default_message = "Account not found."


class ProtectedAccount(RetouchError):
    """Admin accounts are not managed through the member path."""
    code = ErrorCode.PROTECTED_ACCOUNT
    status_code = 403
    default_message = "Admin accounts cannot be changed here."


class AdminRequired(RetouchError):
    code = ErrorCode.ADMIN_REQUIRED
    status_code = 403
    default_message = "Admin access required."


class SessionInvalid(RetouchError):
    """
    Expired, banned and token-mismatch sessions all collapse into this.

    The message is fixed so callers cannot tell the causes apart.
    """
    code = ErrorCode.SESSION_INVALID
    status_code = 401
    default_message = "Session expired or invalid. Please log in again."

    def __init__(self):
        super().__init__()


class MissingInput(RetouchError):
    code = ErrorCode.MISSING_INPUT
    status_code = 400
    default_message = "Please enter a prompt or upload a reference image."


class MissingAccessCredential(RetouchError):
    code = ErrorCode.MISSING_ACCESS_CREDENTIAL
    status_code = 400
    default_message = "An API key is required. Please save your API key first."


class TransformFailed(RetouchError):
    code = ErrorCode.TRANSFORM_FAILED
    status_code = 502
    default_message = "Failed to generate image. Please check your API Key and try again."


class WorkspaceBusy(RetouchError):
    code = ErrorCode.WORKSPACE_BUSY
    status_code = 409
    default_message = "A generation is already in progress."
