import os
from unittest import TestCase, mock

from lnsimulator import settings


class TestSettings(TestCase):
    def test_parse_env_defaults(self):
        self.assertEqual(10, settings.parse_env('LNSIMULATOR_TEST_UNSET', '10', int))
        self.assertIsNone(settings.parse_env('LNSIMULATOR_TEST_UNSET', 'None', int))
        self.assertEqual('x', settings.parse_env('LNSIMULATOR_TEST_UNSET', 'x'))

    @mock.patch.dict(os.environ, {'LNSIMULATOR_TEST_VALUE': '0.75'})
    def test_parse_env_from_environment(self):
        self.assertEqual(0.75, settings.parse_env('LNSIMULATOR_TEST_VALUE', '0.3', float))

    def test_logger_config_without_file(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            settings.set_logger_config()
        self.assertEqual(['default'], list(settings.logger_config['handlers']))

    def test_logger_config_with_file(self):
        settings.set_logger_config('/tmp/lnsimulator.log')
        self.assertEqual(
            '/tmp/lnsimulator.log',
            settings.logger_config['handlers']['file']['filename'])
        self.assertEqual(
            ['default', 'file'], settings.logger_config['loggers']['']['handlers'])
        settings.set_logger_config()

    def test_relative_logfile(self):
        with self.assertRaises(ValueError):
            settings.set_logger_config('lnsimulator.log')
