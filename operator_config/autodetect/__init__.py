"""Platform detectors for different deployment environments."""

from .types import AutoDetect, AutoDetectError

from .openshift import ApiGroupsAutoDetect, ClusterAPINotReachableError

__all__ = [
    "ApiGroupsAutoDetect",
    "AutoDetect",
    "AutoDetectError",
    "ClusterAPINotReachableError",
]
