"""Polling of long-running operations returned by Google APIs."""
import logging
import time
from typing import Any, Callable, Dict

from .errors import OperationFailedError, OperationTimeoutError


def operation_error_message(operation: Dict[str, Any]) -> str:
    error = operation.get('error') or {}
    code = error.get('code')
    message = error.get('message', 'unknown error')
    return f"{message} (code {code})" if code is not None else message


def poll_operation(fetch: Callable[[], Dict[str, Any]],
                   operation: Dict[str, Any],
                   timeout_seconds: float,
                   poll_interval_seconds: float,
                   logger: logging.Logger) -> Dict[str, Any]:
    """
    Poll an operation until it reports `done`.

    Args:
        fetch: callable returning the current state of the operation
        operation: the operation as initially returned by the API
        timeout_seconds: maximum time to wait for completion
        poll_interval_seconds: delay between two polls
        logger: logger for progress messages

    Returns:
        The final operation resource.

    Raises:
        OperationFailedError: the operation completed with an error
        OperationTimeoutError: the operation was not done before the timeout
    """
    name = operation.get('name', '<unnamed>')
    deadline = time.monotonic() + timeout_seconds

    while not operation.get('done'):
        if time.monotonic() >= deadline:
            raise OperationTimeoutError(f"operation {name} did not complete within {timeout_seconds} seconds")
        time.sleep(poll_interval_seconds)
        operation = fetch()
        logger.debug(f"Polled operation {name}: done={operation.get('done', False)}")

    if operation.get('error'):
        raise OperationFailedError(f"operation {name} failed: {operation_error_message(operation)}", operation)

    return operation
