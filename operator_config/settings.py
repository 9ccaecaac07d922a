from pydantic import (
    BaseModel,
    PositiveFloat,
    ConfigDict,
    field_validator,
)

from operator_config.platform import Platform


class OperatorSettings(BaseModel):
    """Operator settings loaded from YAML configuration files and flags.

    Settings are immutable per runtime, only the platform can later be
    replaced by the auto-detection.
    """

    model_config = ConfigDict(frozen=True)

    collector_config_map_entry: str
    platform: Platform
    auto_detect_frequency: PositiveFloat
    auto_detect: bool

    # Derived from the collector version when not set
    collector_image: str | None = None
    kubeconfig: str | None = None

    @field_validator("platform", mode="before")
    @classmethod
    def platform_name_case_insensitive(cls, value):
        if isinstance(value, str):
            platform = Platform.from_name(value)
            if platform is not None:
                return platform
        return value
