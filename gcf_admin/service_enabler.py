"""Enables Google APIs on a project through the Service Usage API."""
import logging
import threading
from typing import Callable, Optional

from google.auth.credentials import Credentials
from googleapiclient.errors import HttpError

from .discovery_clients import DEFAULT_USER_AGENT, default_credentials, serviceusage_v1
from .errors import TRANSPORT_EXCEPTIONS, ActivationError, FunctionsClientError
from .operations import poll_operation
from .resource_names import service_name


class ServiceEnabler:
    """Makes sure an API is enabled on a project before it is used."""

    def __init__(self,
                 credentials: Optional[Credentials] = None,
                 service_builder: Optional[Callable] = None,
                 user_agent: str = DEFAULT_USER_AGENT,
                 logger: Optional[logging.Logger] = None,
                 poll_interval_seconds: float = 2,
                 timeout_seconds: float = 120):
        self.credentials = credentials
        self.service_builder = service_builder or serviceusage_v1
        self.user_agent = user_agent
        self.logger = logger or logging.getLogger(__name__)
        self.poll_interval_seconds = poll_interval_seconds
        self.timeout_seconds = timeout_seconds
        self._service = None
        self._lock = threading.Lock()

    def _get_service(self):
        with self._lock:
            if self._service is None:
                if self.credentials is None:
                    self.credentials, _ = default_credentials()
                self._service = self.service_builder(self.credentials, self.user_agent)
            return self._service

    def is_enabled(self, project: str, api_name: str) -> bool:
        svc = self._get_service()
        result = svc.services().get(name=service_name(project, api_name)).execute()
        return result.get('state') == 'ENABLED'

    def enable_service(self, project: str, api_name: str) -> None:
        """
        Enable `api_name` on `project`. A no-op if the API is already enabled.

        Raises:
            ActivationError: the API could not be enabled
        """
        try:
            if self.is_enabled(project, api_name):
                self.logger.debug(f"Service {api_name} already enabled for project {project}")
                return

            self.logger.info(f"Enabling service {api_name} for project {project}...")
            svc = self._get_service()
            operation = svc.services().enable(name=service_name(project, api_name), body={}).execute()
            poll_operation(
                lambda: svc.operations().get(name=operation['name']).execute(),
                operation,
                timeout_seconds=self.timeout_seconds,
                poll_interval_seconds=self.poll_interval_seconds,
                logger=self.logger,
            )
            self.logger.info(f"Service {api_name} enabled for project {project}.")
        except (HttpError, FunctionsClientError) + TRANSPORT_EXCEPTIONS as e:
            raise ActivationError(f"could not enable {api_name} for project {project}: {e}") from e
