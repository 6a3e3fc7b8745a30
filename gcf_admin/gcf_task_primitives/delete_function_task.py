"""Delete task for Cloud Functions."""
import logging
from typing import Optional

from ..errors import FunctionsClientError
from ..functions_client import FunctionsClient
from ..gcf_models.delete_function_result import DeleteFailure, DeleteFunctionResult, DeleteSuccess


class DeleteFunctionTask:
    """Task to delete a single Cloud Function."""

    def __init__(self,
                 client: FunctionsClient,
                 project: str,
                 region: str,
                 name: str,
                 logger: Optional[logging.Logger] = None):
        self.client = client
        self.project = project
        self.region = region
        self.name = name
        self.logger = logger or client.logger

    def execute(self, timeout: int = 120) -> DeleteFunctionResult:
        """Execute the deletion and wait up to `timeout` seconds for it to finish."""
        self.logger.info(f"Deleting function {self.name} in {self.region}...")

        try:
            operation = self.client.delete_function(self.project, self.region, self.name)
            self.client.wait_for_operation(operation, timeout_seconds=timeout)
        except FunctionsClientError as e:
            self.logger.warning(f"Failed to delete function {self.name}: {e}")
            return DeleteFailure(function_name=self.name, error=e)

        self.logger.info(f"Function {self.name} deleted successfully.")
        return DeleteSuccess(function_name=self.name)
