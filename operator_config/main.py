#!/usr/bin/env python3
"""Main entrypoint for the operator configuration and platform auto-detection."""

import argparse
import json
import logging
import signal
import sys
import threading
import yaml
from pathlib import Path
from typing import TypeVar, cast

from pydantic import ValidationError

from operator_config import constants, options, version
from operator_config.autodetect import ApiGroupsAutoDetect, AutoDetect, AutoDetectError
from operator_config.config import Config, new
from operator_config.platform import Platform
from operator_config.settings import OperatorSettings


class Args(argparse.Namespace):
    config: Path | None
    collector_image: str | None
    collector_config_map_entry: str | None
    platform: Platform | None
    auto_detect_frequency: float | None
    no_auto_detect: bool
    kubeconfig: str | None
    log_level: str
    rich_logs: bool
    print_config_and_exit: bool


logger = logging.getLogger(__name__)


def platform_name(value: str) -> Platform:
    """Parse a case-insensitive platform name given on the command line."""
    platform = Platform.from_name(value)
    if platform is None:
        raise argparse.ArgumentTypeError(f"invalid platform: '{value}'")
    return platform


def parse_args() -> Args:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Operator configuration with platform auto-detection",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )

    # Configuration overrides (optional when using config file)
    parser.add_argument(
        "--collector-image",
        help="Collector image to use, derived from the collector version when not set",
    )

    parser.add_argument(
        "--collector-config-map-entry",
        help="Name of the config map entry holding the collector configuration",
    )

    parser.add_argument(
        "--platform",
        type=platform_name,
        metavar="{" + ",".join(p.value for p in Platform) + "}",
        help="Platform to start with, replaced by the auto-detected one when it differs",
    )

    parser.add_argument(
        "--auto-detect-frequency",
        type=float,
        help="Interval between two platform detection attempts in seconds",
    )

    parser.add_argument(
        "--no-auto-detect",
        action="store_true",
        help="Do not auto-detect the platform",
    )

    parser.add_argument(
        "--kubeconfig",
        help="Path to a kubeconfig file, the in-cluster configuration is used when not set",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set the logging level",
    )

    parser.add_argument(
        "--rich-logs",
        action="store_true",
        help="Enable rich colored logging output",
    )

    parser.add_argument(
        "--print-config-and-exit",
        action="store_true",
        help="Print the resolved configuration as JSON and exit without auto-detecting",
    )

    return cast(Args, parser.parse_args())


def configure_logging(log_level: str, use_rich: bool = False) -> None:
    """Configure logging with optional rich formatting.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_rich: Whether to use rich colored logging
    """
    if use_rich:
        from rich.logging import RichHandler
        from rich.console import Console

        logging.basicConfig(
            level=getattr(logging, log_level),
            format="%(message)s",
            datefmt="[%X]",
            handlers=[
                RichHandler(
                    console=Console(),
                    show_path=True,
                    show_time=True,
                    show_level=True,
                    markup=True,
                    rich_tracebacks=True,
                )
            ],
        )
    else:
        logging.basicConfig(
            level=getattr(logging, log_level),
            format="%(asctime)s [%(name)s:%(filename)s:%(lineno)d] %(levelname)s: %(message)s",
        )

    # silence libs logging
    # - urllib3 - we don't care about those debug posts
    # - kubernetes - prints resources content when debug
    logging.getLogger("kubernetes").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


T = TypeVar("T")


def first_not_none(*values: T | None) -> T | None:
    for v in values:
        if v is not None:
            return v
    return None


def load_settings(args: Args) -> OperatorSettings:
    """Merge the command line flags over the YAML configuration file.

    Raises:
        ValidationError: If the merged settings are invalid
    """
    config_dict = {}
    if args.config:
        logger.info("Loading configuration from %s", args.config)
        with open(args.config, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f) or {}

    return OperatorSettings(
        collector_image=first_not_none(
            args.collector_image, config_dict.get("collector_image")
        ),
        collector_config_map_entry=first_not_none(
            args.collector_config_map_entry,
            config_dict.get("collector_config_map_entry"),
            constants.DEFAULT_COLLECTOR_CONFIG_MAP_ENTRY,
        ),
        platform=first_not_none(
            args.platform, config_dict.get("platform"), Platform.UNKNOWN
        ),
        auto_detect_frequency=first_not_none(
            args.auto_detect_frequency,
            config_dict.get("auto_detect_frequency"),
            constants.DEFAULT_AUTO_DETECT_FREQUENCY,
        ),
        auto_detect=first_not_none(
            False if args.no_auto_detect is True else None,
            config_dict.get("auto_detect"),
            True,
        ),
        kubeconfig=first_not_none(args.kubeconfig, config_dict.get("kubeconfig")),
    )


def build_config(settings: OperatorSettings, detector: AutoDetect | None) -> Config:
    """Build the operator configuration from resolved settings."""
    opts = [
        options.version(version.get()),
        options.collector_config_map_entry(settings.collector_config_map_entry),
        options.platform(settings.platform),
        options.auto_detect_frequency(settings.auto_detect_frequency),
    ]
    if settings.collector_image is not None:
        opts.append(options.collector_image(settings.collector_image))
    if detector is not None:
        opts.append(options.auto_detect(detector))

    def log_platform_change() -> None:
        logger.info("Operator platform is now %s", config.platform)

    config = new(*opts, options.on_change(log_platform_change))
    return config


def describe_config(config: Config) -> dict[str, str | float]:
    return {
        "collector_image": config.collector_image,
        "collector_config_map_entry": config.collector_config_map_entry,
        "platform": str(config.platform),
        "auto_detect_frequency": config.auto_detect_frequency,
        "version": str(config.version),
    }


def main() -> int:
    """Main function."""
    args = parse_args()

    configure_logging(args.log_level, args.rich_logs)

    logger.info("Starting operator configuration")

    try:
        settings = load_settings(args)

        detector = None
        if settings.auto_detect and not args.print_config_and_exit:
            detector = ApiGroupsAutoDetect(kubeconfig=settings.kubeconfig)

        config = build_config(settings, detector)

        # If print-config-and-exit flag is set, output config and exit
        if args.print_config_and_exit:
            logger.info("Printing resolved configuration")
            print(json.dumps(describe_config(config), indent=2, sort_keys=True))
            return 0

        if detector is None:
            logger.info(
                "Auto-detection disabled, platform stays %s", config.platform
            )
            return 0

        shutdown_event = threading.Event()
        _ = signal.signal(signal.SIGTERM, lambda _, _2: shutdown_event.set())

        try:
            config.start_auto_detect()
            shutdown_event.wait()
        finally:
            config.stop_auto_detect()

    except ValidationError as e:
        logger.error(
            "Invalid config\n"
            + "\n".join(
                [
                    f"{''.join([str(loc) for loc in err['loc']])}: {err['msg']} (got {err['input']})"
                    for err in e.errors()
                ]
            )
        )
        return 1
    except AutoDetectError as e:
        logger.error("Platform auto-detection failed: %s", e)
        logger.info(
            "Ensure the operator runs in a cluster or pass a valid --kubeconfig"
        )
        return 1
    except KeyboardInterrupt:
        logger.info("Operator stopped by user")
        return 0
    except Exception as e:
        logger.error("Error running operator: %s", e, exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
