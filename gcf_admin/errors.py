"""Exceptions raised by the Cloud Functions wrappers."""
from typing import Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError


class FunctionsClientError(Exception):
    """Base class for all errors raised by this package."""
    pass


class ClientNotInitializedError(FunctionsClientError):
    """An operation was polled before any Cloud Functions client was created."""
    pass


class ActivationError(FunctionsClientError):
    """The Cloud Functions API could not be enabled for the project."""
    pass


class TransportError(FunctionsClientError):
    """Network or authentication failure while reaching the remote API."""
    pass


class AuthenticationError(TransportError):
    """Credentials are missing, invalid or could not be refreshed."""
    pass


class RemoteRejectionError(FunctionsClientError):
    """The remote API answered the request with an application-level failure."""

    def __init__(self, message: str, status_code: Optional[int] = None, reason: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class FunctionNotFoundError(RemoteRejectionError):
    pass


class FunctionAlreadyExistsError(RemoteRejectionError):
    pass


class PermissionDeniedError(RemoteRejectionError):
    pass


class OperationFailedError(FunctionsClientError):
    """A long-running operation finished with an error payload."""

    def __init__(self, message: str, operation: Optional[dict] = None):
        super().__init__(message)
        self.operation = operation


class OperationTimeoutError(FunctionsClientError):
    pass


class SourceUploadError(FunctionsClientError):
    pass


_REJECTIONS_BY_STATUS = {
    403: PermissionDeniedError,
    404: FunctionNotFoundError,
    409: FunctionAlreadyExistsError,
}

TRANSPORT_EXCEPTIONS = (GoogleAuthError, httplib2.HttpLib2Error, OSError)


def rejection_from_http_error(context: str, error: HttpError) -> RemoteRejectionError:
    """Map an HttpError onto the matching RemoteRejectionError subclass."""
    status = getattr(error.resp, 'status', None)
    try:
        status = int(status) if status is not None else None
    except (TypeError, ValueError):
        status = None
    reason = getattr(error, 'reason', None)
    error_class = _REJECTIONS_BY_STATUS.get(status, RemoteRejectionError)
    return error_class(f"{context}: {error}", status_code=status, reason=reason)


def wrap_remote_error(context: str, error: Exception) -> FunctionsClientError:
    """
    Wrap a failure raised by the transport library with a short context string.

    Args:
        context: which action failed, e.g. "could not get function"
        error: the exception raised by googleapiclient / google-auth / httplib2

    Returns:
        A FunctionsClientError to be raised by the caller with `from error`.
    """
    if isinstance(error, FunctionsClientError):
        return error
    if isinstance(error, HttpError):
        return rejection_from_http_error(context, error)
    if isinstance(error, GoogleAuthError):
        return AuthenticationError(f"{context}: {error}")
    if isinstance(error, TRANSPORT_EXCEPTIONS):
        return TransportError(f"{context}: {error}")
    return FunctionsClientError(f"{context}: {error}")
