import unittest

from gcf_admin.resource_names import (
    function_name,
    location_name,
    project_name,
    service_name,
)


class TestResourceNames(unittest.TestCase):

    def test_location_name(self):
        self.assertEqual(location_name('p', 'r'), 'projects/p/locations/r')

    def test_function_name(self):
        self.assertEqual(function_name('p', 'r', 'f'), 'projects/p/locations/r/functions/f')

    def test_function_name_is_deterministic(self):
        self.assertEqual(function_name('p', 'r', 'f'), function_name('p', 'r', 'f'))

    def test_project_and_service_names(self):
        self.assertEqual(project_name('demo'), 'projects/demo')
        self.assertEqual(service_name('demo', 'cloudfunctions.googleapis.com'),
                         'projects/demo/services/cloudfunctions.googleapis.com')


if __name__ == '__main__':
    unittest.main()
