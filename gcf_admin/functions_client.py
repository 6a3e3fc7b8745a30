"""Client for the Cloud Functions v1 management API."""
import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional

from google.auth.credentials import Credentials
from googleapiclient.errors import HttpError

from .discovery_clients import DEFAULT_USER_AGENT, cloudfunctions_v1, default_credentials
from .errors import TRANSPORT_EXCEPTIONS, ActivationError, ClientNotInitializedError, wrap_remote_error
from .operations import poll_operation
from .resource_names import CLOUD_FUNCTIONS_API, function_name, location_name, project_name
from .service_enabler import ServiceEnabler

REMOTE_EXCEPTIONS = (HttpError,) + TRANSPORT_EXCEPTIONS


class FunctionsClient:
    """
    Thin wrapper over the Cloud Functions v1 API.

    The underlying service object is created on first use and then shared by
    every call made through this client. Creating it enables the Cloud Functions
    API for the project passed to that first call; later calls for other
    projects reuse the same handle without activating again.
    """

    def __init__(self,
                 credentials: Optional[Credentials] = None,
                 service_enabler: Optional[Callable[[str, str], None]] = None,
                 service_builder: Optional[Callable] = None,
                 user_agent: str = DEFAULT_USER_AGENT,
                 logger: Optional[logging.Logger] = None):
        """
        Args:
            credentials: google-auth credentials. Application Default Credentials when omitted
            service_enabler: callable (project, api_name) enabling an API on a project
            service_builder: callable (credentials, user_agent) returning a cloudfunctions v1 service
            user_agent: user agent attached to every request
            logger: logger to use, module logger by default
        """
        self.credentials = credentials
        self.user_agent = user_agent
        self.logger = logger or logging.getLogger(__name__)
        self.service_builder = service_builder or cloudfunctions_v1
        if service_enabler is None:
            service_enabler = ServiceEnabler(credentials, user_agent=user_agent, logger=self.logger).enable_service
        self.enable_service = service_enabler
        self._service = None
        self._service_lock = threading.Lock()

    def _activate(self, project: str) -> None:
        try:
            self.enable_service(project, CLOUD_FUNCTIONS_API)
        except Exception as e:
            raise ActivationError(f"error activating service for polling: {e}") from e

    def get_service(self, project: str):
        """Returns the shared service handle, creating it on first use."""
        if self._service is not None:
            return self._service

        with self._service_lock:
            if self._service is not None:
                return self._service

            self._activate(project)

            try:
                if self.credentials is None:
                    self.credentials, _ = default_credentials()
                svc = self.service_builder(self.credentials, self.user_agent)
            except TRANSPORT_EXCEPTIONS as e:
                raise wrap_remote_error("could not create cloud functions client", e) from e

            self.logger.info(f"Created Cloud Functions client (user agent: {self.user_agent})")
            self._service = svc
            return svc

    def list_regions(self, project: str) -> List[str]:
        """
        List the regions Cloud Functions can be deployed to for a project.

        The API is activated on every call, even when the handle is already
        cached. Only the first page of locations is read.

        Returns:
            Sorted list of location ids, e.g. ['europe-west1', 'us-central1']
        """
        self._activate(project)
        svc = self.get_service(project)

        try:
            results = svc.projects().locations().list(name=project_name(project)).execute()
        except REMOTE_EXCEPTIONS as e:
            self.logger.warning(f"Listing regions for {project} failed: {e}")
            raise wrap_remote_error("could not list regions", e) from e

        # entries without a locationId are skipped
        regions = [location['locationId'] for location in results.get('locations', [])
                   if location.get('locationId')]
        return sorted(regions)

    def deploy_function(self, project: str, region: str, descriptor: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a function in the given location.

        Args:
            project: GCP project id
            region: location id
            descriptor: CloudFunction resource body, sent without modification

        Returns:
            The long-running operation started by the API.
        """
        svc = self.get_service(project)
        location = location_name(project, region)
        self.logger.info(f"Creating function in {location}")

        try:
            return svc.projects().locations().functions().create(location=location, body=descriptor).execute()
        except REMOTE_EXCEPTIONS as e:
            self.logger.warning(f"Creating function in {location} failed: {e}")
            raise wrap_remote_error("could not create function", e) from e

    def delete_function(self, project: str, region: str, name: str) -> Dict[str, Any]:
        """Delete a function. Returns the long-running operation."""
        svc = self.get_service(project)
        fname = function_name(project, region, name)
        self.logger.info(f"Deleting function {fname}")

        try:
            return svc.projects().locations().functions().delete(name=fname).execute()
        except REMOTE_EXCEPTIONS as e:
            self.logger.warning(f"Deleting function {fname} failed: {e}")
            raise wrap_remote_error("could not delete function", e) from e

    def get_function(self, project: str, region: str, name: str) -> Dict[str, Any]:
        """Returns the function resource exactly as the API reports it."""
        svc = self.get_service(project)
        fname = function_name(project, region, name)

        try:
            return svc.projects().locations().functions().get(name=fname).execute()
        except REMOTE_EXCEPTIONS as e:
            raise wrap_remote_error("could not get function", e) from e

    def generate_upload_url(self, project: str, region: str) -> str:
        """Returns a signed URL the function source zip can be PUT to."""
        location = location_name(project, region)
        svc = self.get_service(project)

        try:
            result = svc.projects().locations().functions().generateUploadUrl(parent=location, body={}).execute()
        except REMOTE_EXCEPTIONS as e:
            raise wrap_remote_error("could not generate upload url", e) from e

        return result['uploadUrl']

    def get_operation(self, operation_name: str) -> Dict[str, Any]:
        if self._service is None:
            raise ClientNotInitializedError("no Cloud Functions client has been created yet")

        try:
            return self._service.operations().get(name=operation_name).execute()
        except REMOTE_EXCEPTIONS as e:
            raise wrap_remote_error("could not get operation", e) from e

    def wait_for_operation(self,
                           operation: Dict[str, Any],
                           timeout_seconds: float = 600,
                           poll_interval_seconds: float = 5) -> Dict[str, Any]:
        """Block until a create/delete operation is done and return its final state."""
        return poll_operation(
            lambda: self.get_operation(operation['name']),
            operation,
            timeout_seconds=timeout_seconds,
            poll_interval_seconds=poll_interval_seconds,
            logger=self.logger,
        )
