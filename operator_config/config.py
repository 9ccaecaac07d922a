"""Operator configuration with platform auto-detection.

The configuration is built once from a sequence of options and then shared
across threads. The platform is the only field that changes afterwards: it
is resolved by the configured detector, either on demand through
`Config.auto_detect()` or periodically in a background thread started by
`Config.start_auto_detect()`. Callbacks registered with `options.on_change`
are invoked each time the detected platform differs from the stored one.
"""

import logging
import threading

from operator_config import constants
from operator_config.autodetect import AutoDetect
from operator_config.options import ChangeCallback, ConfigOptions, Option
from operator_config.platform import Platform
from operator_config.version import Version

logger = logging.getLogger(__name__)


class Config:
    """Thread-safe holder of the operator configuration."""

    shutdown_event: threading.Event

    def __init__(self, options: ConfigOptions) -> None:
        """Initialize the configuration from already applied options.

        Args:
            options: Options object, `collector_image` must be resolved
        """
        self._collector_image = options.collector_image or ""
        self._collector_config_map_entry = options.collector_config_map_entry
        self._platform = options.platform
        self._auto_detect: AutoDetect | None = options.auto_detect
        self._auto_detect_frequency = options.auto_detect_frequency
        self._on_change: list[ChangeCallback] = list(options.on_change)
        self._version = options.version
        self._logger = options.logger or logger

        # guards the platform and the dispatch of its change callbacks,
        # re-entrant so callbacks can read the config from the same thread
        self._lock = threading.RLock()
        self._auto_detect_lock = threading.Lock()
        self._auto_detect_thread: threading.Thread | None = None

        self.shutdown_event = threading.Event()

    @property
    def collector_image(self) -> str:
        return self._collector_image

    @property
    def collector_config_map_entry(self) -> str:
        return self._collector_config_map_entry

    @property
    def auto_detect_frequency(self) -> float:
        return self._auto_detect_frequency

    @property
    def version(self) -> Version:
        return self._version

    @property
    def platform(self) -> Platform:
        """The current platform, blocks while a change is being applied."""
        with self._lock:
            return self._platform

    def auto_detect(self) -> None:
        """Run a single platform detection.

        Does nothing when no detector is configured. The detector is called
        without holding the configuration lock. When the detected platform
        differs from the stored one, the platform is updated and all change
        callbacks are invoked in registration order.

        Raises:
            Exception: Whatever the detector raises, in which case the
                platform is left unchanged, or the first exception raised
                by a change callback, in which case the platform stays
                updated and the remaining callbacks are skipped
        """
        if self._auto_detect is None:
            return

        self._logger.debug("Auto-detecting the platform based on the environment")
        detected = self._auto_detect.platform()

        with self._lock:
            if detected == self._platform:
                return

            self._logger.info(
                "Platform detected: %s (was %s)", detected, self._platform
            )
            self._platform = detected
            for callback in self._on_change:
                callback()

    def start_auto_detect(self) -> None:
        """Start the periodic platform detection in a background thread.

        The first attempt runs right away, following ones every
        `auto_detect_frequency` seconds until `stop_auto_detect()` is
        called. Polling continues after the platform is known so later
        changes are still picked up. Without a detector this only logs and
        returns, no thread is started. Calling it while the loop is running
        does nothing, and a stop requested before the loop ever ran keeps it
        from starting.
        """
        if self._auto_detect is None:
            self._logger.info(
                "No platform detector configured, skipping auto-detection"
            )
            return

        with self._auto_detect_lock:
            if (
                self._auto_detect_thread is not None
                and self._auto_detect_thread.is_alive()
            ):
                self._logger.warning("Platform auto-detection is already running")
                return

            if self.shutdown_event.is_set():
                self._logger.info(
                    "Shutdown requested, not starting platform auto-detection"
                )
                return

            self._auto_detect_thread = threading.Thread(
                target=self._run_auto_detect,
                args=(self.shutdown_event,),
                name="platform-auto-detect",
                daemon=True,
            )
            self._auto_detect_thread.start()

        self._logger.info(
            "Started platform auto-detection, interval: %.1f seconds",
            self._auto_detect_frequency,
        )

    def _run_auto_detect(self, shutdown_event: threading.Event) -> None:
        """Detection loop, failed attempts are logged and retried on the next tick."""
        while not shutdown_event.is_set():
            try:
                self.auto_detect()
            except Exception as e:
                self._logger.error(
                    "Error during platform auto-detection: %s", e, exc_info=True
                )

            if self.platform == Platform.UNKNOWN:
                self._logger.debug(
                    "Platform still unknown, retrying in %.1f seconds",
                    self._auto_detect_frequency,
                )

            if shutdown_event.wait(self._auto_detect_frequency):
                self._logger.info("Shutdown requested, stopping platform auto-detection")
                break

    def stop_auto_detect(
        self, timeout: float | None = constants.AUTO_DETECT_STOP_TIMEOUT
    ) -> None:
        """Stop the background detection and wait for its thread to finish.

        The stopped thread keeps its own event, the next
        `start_auto_detect()` runs on a fresh one. Without a running loop
        the stop request stays pending and prevents a later start.

        Args:
            timeout: Maximum number of seconds to wait for the thread, a
                detector call in flight is not interrupted
        """
        with self._auto_detect_lock:
            self.shutdown_event.set()
            thread = self._auto_detect_thread
            if thread is None:
                return

            self._auto_detect_thread = None
            self.shutdown_event = threading.Event()

        if thread is not threading.current_thread():
            thread.join(timeout)
            if thread.is_alive():
                self._logger.warning(
                    "Platform auto-detection did not stop within %s seconds", timeout
                )


def new(*opts: Option) -> Config:
    """Build a configuration by applying the given options in order.

    When no collector image is set, it defaults to the base collector image
    tagged with the collector version.
    """
    o = ConfigOptions()
    for opt in opts:
        opt(o)

    if o.collector_image is None:
        o.collector_image = (
            f"{constants.COLLECTOR_IMAGE_BASE}:v{o.version.open_telemetry_collector}"
        )

    return Config(o)
