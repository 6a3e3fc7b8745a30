"""Unit tests for DeployFunctionTask."""
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

from google.auth.exceptions import DefaultCredentialsError

from gcf_admin.functions_client import FunctionsClient
from gcf_admin.gcf_models import CloudFunction, DeploymentFailure, DeploymentSuccess
from gcf_admin.gcf_task_primitives.deploy_function_task import DeployFunctionTask, _should_retry
from gcf_admin.errors import AuthenticationError, FunctionNotFoundError, RemoteRejectionError, TransportError
from gcf_admin.tests.fakes import FakeCloudFunctionsService, http_error


class TestDeployFunctionTask(unittest.TestCase):
    """Test DeployFunctionTask class."""

    def setUp(self):
        self.service = FakeCloudFunctionsService(operations_done=False)
        self.client = FunctionsClient(credentials=Mock(), service_enabler=Mock(),
                                      service_builder=Mock(return_value=self.service), logger=MagicMock())
        self.client.wait_for_operation = Mock(side_effect=lambda op, **kwargs: dict(op, done=True))
        self.function = CloudFunction(
            name='testfunction-001',
            region='us-central1',
            runtime='nodejs20',
            entry_point='handler',
            source_archive_url='gs://bucket/src.zip',
        )

    def test_successful_deployment(self):
        task = DeployFunctionTask(self.client, 'test-project', self.function, deployment_timeout_seconds=30)

        result = task.execute()

        self.assertIsInstance(result, DeploymentSuccess)
        self.assertEqual(result.url, 'https://testfunction-001.example.test')
        self.assertEqual(result.used_region, 'us-central1')
        self.assertEqual(result.attempts, 1)
        self.client.wait_for_operation.assert_called_once()
        self.assertEqual(self.client.wait_for_operation.call_args.kwargs['timeout_seconds'], 30)

    @patch('gcf_admin.gcf_task_primitives.deploy_function_task.wait_before_retry', return_value=20)
    def test_retries_on_quota_error(self, mock_wait):
        self.service.fail('create', http_error(429, 'quota exceeded'))

        result = DeployFunctionTask(self.client, 'test-project', self.function).execute()

        self.assertIsInstance(result, DeploymentSuccess)
        self.assertEqual(result.attempts, 2)
        mock_wait.assert_called_once_with(0)

    @patch('gcf_admin.gcf_task_primitives.deploy_function_task.wait_before_retry', return_value=20)
    def test_gives_up_after_max_retries(self, mock_wait):
        self.service.fail('create', http_error(503), http_error(503), http_error(503))

        result = DeployFunctionTask(self.client, 'test-project', self.function).execute()

        self.assertIsInstance(result, DeploymentFailure)
        self.assertEqual(result.attempts, 3)
        self.assertIsInstance(result.error, RemoteRejectionError)
        self.assertEqual(mock_wait.call_count, 2)

    @patch('gcf_admin.gcf_task_primitives.deploy_function_task.wait_before_retry')
    def test_non_retriable_error(self, mock_wait):
        self.service.fail('create', http_error(400, 'invalid runtime'))

        result = DeployFunctionTask(self.client, 'test-project', self.function).execute()

        self.assertIsInstance(result, DeploymentFailure)
        self.assertEqual(result.attempts, 1)
        self.assertIn('invalid runtime', str(result.error))
        mock_wait.assert_not_called()

    def test_missing_url_does_not_fail_deployment(self):
        self.service.fail('get', http_error(404))

        result = DeployFunctionTask(self.client, 'test-project', self.function).execute()

        self.assertIsInstance(result, DeploymentSuccess)
        self.assertIsNone(result.url)

    @patch('gcf_admin.gcf_task_primitives.deploy_function_task.upload_source_archive')
    def test_uploads_source_dir(self, mock_upload):
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / 'index.js').write_text('exports.handler = () => {};')
            task = DeployFunctionTask(self.client, 'test-project', self.function, source_dir=Path(tmp))

            result = task.execute()

        self.assertIsInstance(result, DeploymentSuccess)
        mock_upload.assert_called_once()
        upload_url = mock_upload.call_args.args[0]
        stored = self.service.functions['projects/test-project/locations/us-central1/functions/testfunction-001']
        self.assertEqual(stored['sourceUploadUrl'], upload_url)
        self.assertNotIn('sourceArchiveUrl', stored)

    @patch('gcf_admin.gcf_task_primitives.deploy_function_task.upload_source_archive')
    def test_caller_function_left_unchanged(self, mock_upload):
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / 'index.js').write_text('exports.handler = () => {};')
            task = DeployFunctionTask(self.client, 'test-project', self.function, source_dir=Path(tmp))

            task.execute()
            task.execute()

        self.assertIsNone(self.function.source_upload_url)
        self.assertEqual(self.function.source_archive_url, 'gs://bucket/src.zip')
        self.assertEqual(mock_upload.call_count, 2)

    @patch('gcf_admin.gcf_task_primitives.deploy_function_task.wait_before_retry')
    @patch('gcf_admin.functions_client.default_credentials',
           side_effect=DefaultCredentialsError('Could not automatically determine credentials'))
    def test_missing_credentials_not_retried(self, mock_credentials, mock_wait):
        client = FunctionsClient(service_enabler=Mock(), service_builder=Mock(return_value=self.service),
                                 logger=MagicMock())

        result = DeployFunctionTask(client, 'test-project', self.function).execute()

        self.assertIsInstance(result, DeploymentFailure)
        self.assertIsInstance(result.error, AuthenticationError)
        self.assertEqual(result.attempts, 1)
        mock_credentials.assert_called_once()
        mock_wait.assert_not_called()

    def test_missing_source_dir(self):
        task = DeployFunctionTask(self.client, 'test-project', self.function, source_dir=Path('/nonexistent/src'))

        result = task.execute()

        self.assertIsInstance(result, DeploymentFailure)
        self.assertIsInstance(result.error, FileNotFoundError)

    def test_should_retry(self):
        self.assertTrue(_should_retry(RemoteRejectionError('x', status_code=429)))
        self.assertTrue(_should_retry(RemoteRejectionError('x', status_code=502)))
        self.assertTrue(_should_retry(TransportError('x')))
        self.assertFalse(_should_retry(AuthenticationError('x')))
        self.assertFalse(_should_retry(FunctionNotFoundError('x', status_code=404)))
        self.assertFalse(_should_retry(RemoteRejectionError('x')))


if __name__ == '__main__':
    unittest.main()
