import logging
import unittest
from unittest.mock import patch

from config.logging_config import LOG_FORMAT, get_logger, setup_logging


class TestSetupLogging(unittest.TestCase):
    @patch("config.logging_config.logging.basicConfig")
    def test_explicit_level(self, mock_basic_config):
        setup_logging("debug")
        kwargs = mock_basic_config.call_args.kwargs
        self.assertEqual(kwargs["level"], logging.DEBUG)
        self.assertEqual(kwargs["format"], LOG_FORMAT)

    @patch("config.logging_config.settings")
    @patch("config.logging_config.logging.basicConfig")
    def test_level_from_settings(self, mock_basic_config, mock_settings):
        mock_settings.log_level = "warning"
        setup_logging()
        self.assertEqual(mock_basic_config.call_args.kwargs["level"], logging.WARNING)

    @patch("config.logging_config.logging.basicConfig")
    def test_unknown_level_falls_back_to_info(self, mock_basic_config):
        setup_logging("chatty")
        self.assertEqual(mock_basic_config.call_args.kwargs["level"], logging.INFO)

    def test_get_logger_uses_name(self):
        self.assertEqual(get_logger("translator.cache").name, "translator.cache")


if __name__ == "__main__":
    unittest.main()
