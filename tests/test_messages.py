from __future__ import annotations

import unittest

from pluginkit.cli.errors import MessageNotFoundError, PluginKitError, UsageError
from pluginkit.cli.messages import Messages, error_name_for_key

_CATALOG = {
    "demo": {
        "en_US": {
            "errors.Broken": "%s is broken",
            "errors.Broken.actions": ["Fix %s."],
            "greeting": "hello",
        },
        "fr_FR": {"greeting": "bonjour"},
    }
}


class MessagesTests(unittest.TestCase):
    def test_get_formats_tokens(self):
        messages = Messages.load("demo", "en_US", catalog=_CATALOG)
        self.assertEqual(messages.get("errors.Broken", ["deploy"]), "deploy is broken")
        self.assertEqual(messages.get("greeting"), "hello")

    def test_locale_lookup_and_fallback(self):
        self.assertEqual(
            Messages.load("demo", "fr_FR", catalog=_CATALOG).get("greeting"), "bonjour"
        )
        fallback = Messages.load("demo", "de_DE", catalog=_CATALOG)
        self.assertEqual(fallback.locale, "en_US")
        self.assertEqual(fallback.get("greeting"), "hello")

    def test_missing_bundle_and_key(self):
        with self.assertRaises(MessageNotFoundError):
            Messages.load("nope", catalog=_CATALOG)
        messages = Messages.load("demo", "en_US", catalog=_CATALOG)
        with self.assertRaises(MessageNotFoundError):
            messages.get("errors.Missing")
        with self.assertRaises(MessageNotFoundError):
            messages.get("errors.Broken.actions")

    def test_create_error(self):
        messages = Messages.load("demo", "en_US", catalog=_CATALOG)
        error = messages.create_error(
            "errors.Broken", ["deploy"], ["the config"], error_cls=UsageError
        )
        self.assertIsInstance(error, UsageError)
        self.assertEqual(str(error), "deploy is broken")
        self.assertEqual(error.name, "BrokenError")
        self.assertEqual(error.actions, ["Fix the config."])
        self.assertEqual(error.exit_code, 2)

    def test_create_error_without_actions(self):
        messages = Messages.load("demo", "en_US", catalog=_CATALOG)
        cause = ValueError("root")
        error = messages.create_error("greeting", cause=cause)
        self.assertIsInstance(error, PluginKitError)
        self.assertIsNone(error.actions)
        self.assertIs(error.__cause__, cause)

    def test_shipped_catalog(self):
        messages = Messages.load("pluginkit", "en_US")
        self.assertEqual(messages.get("errors.InvalidDuration"), "The value must be an integer.")
        self.assertEqual(
            messages.get("errors.DurationBounds", [1, 5]),
            "The value must be between 1 and 5 (inclusive).",
        )

    def test_error_name_for_key(self):
        self.assertEqual(error_name_for_key("errors.InvalidDuration"), "InvalidDurationError")
        self.assertEqual(error_name_for_key("error.Timeout"), "TimeoutError")
        self.assertEqual(error_name_for_key("errors.FooError"), "FooError")


if __name__ == "__main__":
    unittest.main()
