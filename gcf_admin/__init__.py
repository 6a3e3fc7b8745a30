"""Convenience wrappers over the Google Cloud Functions management API."""
__version__ = "0.1.0"

from .errors import (
    ActivationError,
    AuthenticationError,
    ClientNotInitializedError,
    FunctionAlreadyExistsError,
    FunctionNotFoundError,
    FunctionsClientError,
    OperationFailedError,
    OperationTimeoutError,
    PermissionDeniedError,
    RemoteRejectionError,
    SourceUploadError,
    TransportError,
)
from .functions_client import FunctionsClient
from .resource_names import function_name, location_name
from .service_enabler import ServiceEnabler

__all__ = [
    'FunctionsClient',
    'ServiceEnabler',
    'function_name',
    'location_name',
    'FunctionsClientError',
    'ActivationError',
    'TransportError',
    'AuthenticationError',
    'ClientNotInitializedError',
    'RemoteRejectionError',
    'FunctionNotFoundError',
    'FunctionAlreadyExistsError',
    'PermissionDeniedError',
    'OperationFailedError',
    'OperationTimeoutError',
    'SourceUploadError',
]
