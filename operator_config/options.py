"""Options used to build a Config.

Each function takes a single value and returns an Option, a callable that
sets that value on the configuration being built. Options are applied in
order, so the last one wins when a field is set more than once.
"""

import logging
from typing import Callable

from operator_config import constants
from operator_config.autodetect import AutoDetect
from operator_config.platform import Platform
from operator_config.version import Version


ChangeCallback = Callable[[], None]


class ConfigOptions:
    """Fields of a Config that is still being built."""

    def __init__(self) -> None:
        self.collector_image: str | None = None
        self.collector_config_map_entry = constants.DEFAULT_COLLECTOR_CONFIG_MAP_ENTRY
        self.platform = Platform.UNKNOWN
        self.auto_detect: AutoDetect | None = None
        self.auto_detect_frequency = constants.DEFAULT_AUTO_DETECT_FREQUENCY
        self.on_change: list[ChangeCallback] = []
        self.version = Version()
        self.logger: logging.Logger | None = None


Option = Callable[[ConfigOptions], None]


def collector_image(image: str) -> Option:
    def apply(o: ConfigOptions) -> None:
        o.collector_image = image

    return apply


def collector_config_map_entry(entry: str) -> Option:
    def apply(o: ConfigOptions) -> None:
        o.collector_config_map_entry = entry

    return apply


def platform(plt: Platform) -> Option:
    def apply(o: ConfigOptions) -> None:
        o.platform = plt

    return apply


def auto_detect(detector: AutoDetect) -> Option:
    def apply(o: ConfigOptions) -> None:
        o.auto_detect = detector

    return apply


def auto_detect_frequency(seconds: float) -> Option:
    """Set the interval between two detection attempts of the background loop."""

    def apply(o: ConfigOptions) -> None:
        o.auto_detect_frequency = seconds

    return apply


def version(v: Version) -> Option:
    def apply(o: ConfigOptions) -> None:
        o.version = v

    return apply


def on_change(callback: ChangeCallback) -> Option:
    """Register a callback invoked each time the platform changes.

    Registering more than once appends, every callback is called in
    registration order.
    """

    def apply(o: ConfigOptions) -> None:
        o.on_change.append(callback)

    return apply


def logger(log: logging.Logger) -> Option:
    def apply(o: ConfigOptions) -> None:
        o.logger = log

    return apply
