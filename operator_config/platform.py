"""Platforms the operator can be deployed on."""

import enum


class Platform(str, enum.Enum):
    """Runtime platform; UNKNOWN until a detector resolves it."""

    UNKNOWN = "Unknown"
    KUBERNETES = "Kubernetes"
    OPENSHIFT = "OpenShift"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, value: str) -> "Platform | None":
        """Look up a platform by its case-insensitive name, None if there is none."""
        name = value.strip().lower()
        for member in cls:
            if member.value.lower() == name:
                return member
        return None

    @classmethod
    def parse(cls, value: str | None) -> "Platform":
        """Map a case-insensitive platform name to a Platform.

        Anything unrecognised, including None, maps to UNKNOWN.
        """
        if not value:
            return cls.UNKNOWN
        return cls.from_name(value) or cls.UNKNOWN
