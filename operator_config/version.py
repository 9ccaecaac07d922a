"""Build and component version information."""

import platform as platform_mod
from importlib import metadata
from os import environ

from pydantic import BaseModel, ConfigDict

from operator_config import constants


class Version(BaseModel):
    """Versions of the operator and the components it manages."""

    model_config = ConfigDict(frozen=True)

    operator: str = ""
    build_date: str = ""
    open_telemetry_collector: str = ""
    python_version: str = ""

    def __str__(self) -> str:
        return (
            f"Version(Operator='{self.operator}', BuildDate='{self.build_date}', "
            f"OpenTelemetryCollector='{self.open_telemetry_collector}', "
            f"Python='{self.python_version}')"
        )


def _operator_version() -> str:
    try:
        return metadata.version(constants.PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return ""


def get() -> Version:
    """Get the version information of the running operator.

    The collector version and build date can be set through the
    `OTELCOL_VERSION` and `BUILD_DATE` environment variables.
    """
    return Version(
        operator=_operator_version(),
        build_date=environ.get("BUILD_DATE", ""),
        open_telemetry_collector=environ.get(
            "OTELCOL_VERSION", constants.DEFAULT_OPENTELEMETRY_COLLECTOR_VERSION
        ),
        python_version=platform_mod.python_version(),
    )
