import dataclasses
import unittest

from gcf_admin.errors import FunctionNotFoundError
from gcf_admin.gcf_models import DeleteFailure, DeleteSuccess, DeploymentFailure, DeploymentSuccess


class TestDeploymentResult(unittest.TestCase):

    def test_success_to_dict(self):
        result = DeploymentSuccess(function_name='f', used_region='us-central1', url='https://f.example.test',
                                   deployment_duration_seconds=1.5, deploy_time='2026-01-01T00:00:00+00:00')

        d = result.to_dict()

        self.assertTrue(result.success)
        self.assertTrue(d['success'])
        self.assertEqual(d['url'], 'https://f.example.test')
        self.assertEqual(d['used_region'], 'us-central1')
        self.assertEqual(d['attempts'], 1)

    def test_failure_to_dict(self):
        result = DeploymentFailure(function_name='f', used_region='us-central1', error=Exception('quota'), attempts=3)

        d = result.to_dict()

        self.assertFalse(result.success)
        self.assertEqual(d['error'], 'quota')
        self.assertEqual(d['attempts'], 3)

    def test_immutable(self):
        result = DeploymentFailure(function_name='f', error=Exception('x'))

        with self.assertRaises(dataclasses.FrozenInstanceError):
            result.function_name = 'g'


class TestDeleteResult(unittest.TestCase):

    def test_success(self):
        self.assertEqual(DeleteSuccess(function_name='f').to_dict(), {'function_name': 'f', 'success': True})

    def test_not_found_failure(self):
        result = DeleteFailure(function_name='f', error=FunctionNotFoundError('gone', status_code=404))

        self.assertTrue(result.not_found)
        self.assertEqual(result.to_dict()['not_found'], True)
        self.assertFalse(result.to_dict()['success'])


if __name__ == '__main__':
    unittest.main()
