"""Tests for operator_config.options and the default values of new()."""

import logging
from unittest.mock import Mock

from operator_config import constants, options
from operator_config.config import new
from operator_config.options import ConfigOptions
from operator_config.platform import Platform
from operator_config.version import Version


class TestOptions:
    """Test cases for the individual options."""

    def test_options_set_their_field(self, mock_detector):
        """Test that each option only sets its own field."""
        o = ConfigOptions()
        test_logger = logging.getLogger("test")
        v = Version(open_telemetry_collector="1.0.0")

        options.collector_image("some-image")(o)
        options.collector_config_map_entry("some-config.yaml")(o)
        options.platform(Platform.KUBERNETES)(o)
        options.auto_detect(mock_detector)(o)
        options.auto_detect_frequency(0.5)(o)
        options.version(v)(o)
        options.logger(test_logger)(o)

        assert o.collector_image == "some-image"
        assert o.collector_config_map_entry == "some-config.yaml"
        assert o.platform == Platform.KUBERNETES
        assert o.auto_detect is mock_detector
        assert o.auto_detect_frequency == 0.5
        assert o.version is v
        assert o.logger is test_logger
        assert o.on_change == []

    def test_on_change_appends(self):
        """Test that registering callbacks appends them in order."""
        o = ConfigOptions()
        first, second = Mock(), Mock()

        options.on_change(first)(o)
        options.on_change(second)(o)

        assert o.on_change == [first, second]

    def test_defaults(self):
        """Test the values of a fresh options object."""
        o = ConfigOptions()

        assert o.collector_image is None
        assert o.collector_config_map_entry == "collector.yaml"
        assert o.platform == Platform.UNKNOWN
        assert o.auto_detect is None
        assert o.auto_detect_frequency == constants.DEFAULT_AUTO_DETECT_FREQUENCY
        assert o.logger is None


class TestNew:
    """Test cases for building a Config from options."""

    def test_build_with_given_options(self):
        """Test building a configuration with explicit values."""
        cfg = new(
            options.collector_image("some-image"),
            options.collector_config_map_entry("some-config.yaml"),
            options.platform(Platform.KUBERNETES),
        )

        assert cfg.collector_image == "some-image"
        assert cfg.collector_config_map_entry == "some-config.yaml"
        assert cfg.platform == Platform.KUBERNETES

    def test_later_option_wins(self):
        """Test that the last option applied for a field wins."""
        cfg = new(
            options.collector_image("first-image"),
            options.collector_config_map_entry("first.yaml"),
            options.platform(Platform.KUBERNETES),
            options.auto_detect_frequency(1),
            options.collector_image("second-image"),
            options.collector_config_map_entry("second.yaml"),
            options.platform(Platform.OPENSHIFT),
            options.auto_detect_frequency(2),
        )

        assert cfg.collector_image == "second-image"
        assert cfg.collector_config_map_entry == "second.yaml"
        assert cfg.platform == Platform.OPENSHIFT
        assert cfg.auto_detect_frequency == 2

    def test_version_used_in_default_image(self):
        """Test that the collector version is part of the default image."""
        v = Version(open_telemetry_collector="the-version")

        cfg = new(options.version(v))

        assert "the-version" in cfg.collector_image
        assert cfg.collector_image.startswith(constants.COLLECTOR_IMAGE_BASE)

    def test_explicit_image_ignores_version(self):
        """Test that an explicit image is not derived from the version."""
        v = Version(open_telemetry_collector="the-version")

        cfg = new(options.version(v), options.collector_image("custom"))

        assert cfg.collector_image == "custom"

    def test_empty_values_accepted(self):
        """Test that empty strings are kept as-is."""
        cfg = new(
            options.collector_image(""),
            options.collector_config_map_entry(""),
        )

        assert cfg.collector_image == ""
        assert cfg.collector_config_map_entry == ""

    def test_no_options(self):
        """Test building a configuration without any option."""
        cfg = new()

        assert cfg.platform == Platform.UNKNOWN
        assert cfg.collector_config_map_entry == "collector.yaml"
        assert cfg.auto_detect_frequency == constants.DEFAULT_AUTO_DETECT_FREQUENCY

    def test_platform_unknown_with_detector(self, mock_detector):
        """Test that a detector alone does not resolve the platform."""
        cfg = new(options.auto_detect(mock_detector))

        assert cfg.platform == Platform.UNKNOWN
        mock_detector.platform.assert_not_called()
