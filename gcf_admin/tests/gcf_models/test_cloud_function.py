"""Unit tests for the CloudFunction model."""
import unittest

from gcf_admin.gcf_models import CloudFunction


class TestCloudFunction(unittest.TestCase):
    def setUp(self):
        self.function = CloudFunction(
            name='hello',
            region='us-central1',
            runtime='nodejs20',
            entry_point='helloWorld',
            source_upload_url='https://storage.example.test/upload/1',
        )

    def test_minimal_descriptor(self):
        descriptor = self.function.to_descriptor('test-proj')

        self.assertEqual(descriptor, {
            'name': 'projects/test-proj/locations/us-central1/functions/hello',
            'runtime': 'nodejs20',
            'entryPoint': 'helloWorld',
            'sourceUploadUrl': 'https://storage.example.test/upload/1',
            'httpsTrigger': {'securityLevel': 'SECURE_ALWAYS'},
            'availableMemoryMb': 256,
            'timeout': '60s',
        })

    def test_event_trigger_replaces_https_trigger(self):
        self.function.event_trigger = {
            'eventType': 'google.pubsub.topic.publish',
            'resource': 'projects/test-proj/topics/t',
        }

        descriptor = self.function.to_descriptor('test-proj')

        self.assertNotIn('httpsTrigger', descriptor)
        self.assertEqual(descriptor['eventTrigger']['eventType'], 'google.pubsub.topic.publish')

    def test_optional_fields(self):
        self.function.source_upload_url = None
        self.function.source_archive_url = 'gs://bucket/source.zip'
        self.function.max_instances = 3
        self.function.min_instances = 1
        self.function.env_vars = {'MODE': 'test'}
        self.function.labels = {'team': 'infra'}
        self.function.service_account_email = 'fn@test-proj.iam.gserviceaccount.com'

        descriptor = self.function.to_descriptor('test-proj')

        self.assertEqual(descriptor['sourceArchiveUrl'], 'gs://bucket/source.zip')
        self.assertNotIn('sourceUploadUrl', descriptor)
        self.assertEqual(descriptor['maxInstances'], 3)
        self.assertEqual(descriptor['minInstances'], 1)
        self.assertEqual(descriptor['environmentVariables'], {'MODE': 'test'})
        self.assertEqual(descriptor['labels'], {'team': 'infra'})
        self.assertEqual(descriptor['serviceAccountEmail'], 'fn@test-proj.iam.gserviceaccount.com')

    def test_extra_fields_win(self):
        self.function.extra_fields = {'timeout': '120s', 'vpcConnector': 'conn'}

        descriptor = self.function.to_descriptor('test-proj')

        self.assertEqual(descriptor['timeout'], '120s')
        self.assertEqual(descriptor['vpcConnector'], 'conn')


if __name__ == '__main__':
    unittest.main()
