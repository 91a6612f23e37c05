"""Tests for top-level package lazy exports."""

from __future__ import annotations

import unittest

import event_channel
from event_channel.channel import EventChannel


class PackageExportTests(unittest.TestCase):
    """Ensure __getattr__ and exported symbols behave as expected."""

    def test_lazy_exports_resolve_known_symbols(self) -> None:
        self.assertIs(event_channel.EventChannel, EventChannel)
        self.assertTrue(callable(event_channel.load_config))
        self.assertTrue(callable(event_channel.configure))
        self.assertTrue(callable(event_channel.configure_logging))
        self.assertTrue(callable(event_channel.set_subscriber_warning_threshold))
        self.assertIsNotNone(event_channel.EventArgs)
        self.assertIsNotNone(event_channel.EMPTY_ARGS)
        self.assertIsNotNone(event_channel.NO_CONTEXT)
        self.assertIsNotNone(event_channel.Event)
        self.assertIsNotNone(event_channel.EventEmitter)
        self.assertIsNotNone(event_channel.Disposable)
        self.assertIsNotNone(event_channel.EventHandler)
        self.assertIsNotNone(event_channel.EventChannelError)
        self.assertIsNotNone(event_channel.ConfigValidationError)

    def test_all_names_resolve(self) -> None:
        for name in event_channel.__all__:
            self.assertIsNotNone(getattr(event_channel, name), name)

    def test_unknown_symbol_raises_attribute_error(self) -> None:
        with self.assertRaises(AttributeError):
            getattr(event_channel, "THIS_DOES_NOT_EXIST")


if __name__ == "__main__":
    unittest.main()
