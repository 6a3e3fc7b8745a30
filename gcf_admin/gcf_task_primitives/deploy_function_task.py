"""Deploy task for Cloud Functions."""
import dataclasses
import logging
import random
import tempfile
import time
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..errors import AuthenticationError, FunctionsClientError, RemoteRejectionError, TransportError
from ..functions_client import FunctionsClient
from ..gcf_models import CloudFunction
from ..gcf_models.deploy_function_result import DeploymentFailure, DeploymentResult, DeploymentSuccess
from ..source_archive import create_source_archive, upload_source_archive


def wait_before_retry(attempt: int) -> int:
    """
    Wait before retrying using a random delay from normal distribution.

    Args:
        attempt: Retry attempt number (0-indexed: 0, 1, 2)

    Returns:
        Wait time in seconds that was actually waited (minimum 20 seconds)
    """
    # means of 30s, 90s, 120s for attempts 1, 2, 3
    retry_means = [30, 90, 120]
    retry_std_dev = 60
    mean = retry_means[min(attempt, len(retry_means) - 1)]

    while True:
        wait_time = max(1, int(random.normalvariate(mean, retry_std_dev)))
        if wait_time >= 20:
            break

    time.sleep(wait_time)
    return wait_time


def _should_retry(error: Exception) -> bool:
    """Quota and server-side rejections are retried, everything else fails fast."""
    if isinstance(error, AuthenticationError):
        return False
    if isinstance(error, TransportError):
        return True
    if isinstance(error, RemoteRejectionError) and error.status_code is not None:
        return error.status_code == 429 or error.status_code >= 500
    return False


def _handle_retry_wait(attempt: int, max_retries: int, reason: str, logger: logging.Logger) -> None:
    """Logs and waits before retry."""
    if attempt < max_retries - 1:
        logger.warning(f"Deployment attempt {attempt + 1}/{max_retries} failed. Reason: {reason}. Retrying.")
        wait_time = wait_before_retry(attempt)
        logger.info(f"Waited {wait_time} seconds.")
    else:
        logger.error(f"Deployment attempt {attempt + 1}/{max_retries} failed. Reason: {reason}. Max retries reached.")


class DeployFunctionTask:
    """Task to deploy a single Cloud Function and wait for it to become active."""

    MAX_RETRIES = 3

    def __init__(self,
                 client: FunctionsClient,
                 project: str,
                 function: CloudFunction,
                 deployment_timeout_seconds: int = 600,
                 source_dir: Optional[Path] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Args:
            client: FunctionsClient used for every remote call
            project: GCP project id
            function: the function to deploy
            deployment_timeout_seconds: maximum time to wait for the create operation
            source_dir: local source directory, zipped and uploaded before deploying when given
            logger: logger to use, the client's logger by default
        """
        self.client = client
        self.project = project
        self.f = function
        self.deployment_timeout_seconds = deployment_timeout_seconds
        self.source_dir = source_dir
        self.logger = logger or client.logger

    def _upload_source(self) -> str:
        upload_url = self.client.generate_upload_url(self.project, self.f.region)
        with tempfile.TemporaryDirectory() as tmp_dir:
            archive = create_source_archive(self.source_dir, Path(tmp_dir) / f"{self.f.name}.zip")
            upload_source_archive(upload_url, archive, logger=self.logger)
        return upload_url

    def _get_function_url(self) -> Optional[str]:
        """Retrieves the deployed function's HTTPS trigger URL."""
        try:
            function = self.client.get_function(self.project, self.f.region, self.f.name)
        except FunctionsClientError as e:
            self.logger.warning(f"Failed to retrieve function URL: {e}")
            return None
        url = function.get('httpsTrigger', {}).get('url')
        if url:
            self.logger.info(f"Function URL retrieved: {url}")
        return url

    def _deploy_once(self) -> None:
        function = self.f
        if self.source_dir is not None:
            # the caller's CloudFunction is never modified
            function = dataclasses.replace(self.f, source_upload_url=self._upload_source())
        operation = self.client.deploy_function(self.project, function.region, function.to_descriptor(self.project))
        self.client.wait_for_operation(operation, timeout_seconds=self.deployment_timeout_seconds)

    def execute(self) -> DeploymentResult:
        """Execute the deployment with retry logic for rate limiting.

        Returns:
            DeploymentResult: Immutable result of the deployment
        """
        self.logger.info(f"[{self.f.name}] Deploying to {self.f.region}")
        last_error: Optional[Exception] = None

        for attempt in range(self.MAX_RETRIES):
            attempt_start_time = time.time()
            try:
                self._deploy_once()
            except FunctionsClientError as e:
                last_error = e
                if not _should_retry(e):
                    self.logger.error(f"Deployment failed with non-retriable error: {e}")
                    return DeploymentFailure(function_name=self.f.name, used_region=self.f.region,
                                             error=e, attempts=attempt + 1)
                _handle_retry_wait(attempt, self.MAX_RETRIES, str(e), self.logger)
                continue
            except OSError as e:
                self.logger.error(f"Exception during deployment: {e}")
                self.logger.debug(traceback.format_exc())
                return DeploymentFailure(function_name=self.f.name, used_region=self.f.region,
                                         error=e, attempts=attempt + 1)

            duration_sec = time.time() - attempt_start_time
            return DeploymentSuccess(
                function_name=self.f.name,
                used_region=self.f.region,
                url=self._get_function_url(),
                deployment_duration_seconds=duration_sec,
                deploy_time=datetime.now(timezone.utc).isoformat(),
                attempts=attempt + 1,
            )

        return DeploymentFailure(function_name=self.f.name, used_region=self.f.region,
                                 error=last_error, attempts=self.MAX_RETRIES)
