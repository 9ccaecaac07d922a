"""Detector based on the API groups served by the cluster."""

import logging
import kubernetes
import kubernetes.client
import kubernetes.config

from operator_config import constants
from operator_config.platform import Platform

from .types import AutoDetect, AutoDetectError


logger = logging.getLogger(__name__)


class ClusterAPINotReachableError(AutoDetectError):
    """Exception raised when the cluster API groups cannot be listed."""


class ApiGroupsAutoDetect(AutoDetect):
    """Tell OpenShift apart from plain Kubernetes by its route API group."""

    def __init__(self, kubeconfig: str | None = None):
        """Initialize the detector.

        Args:
            kubeconfig: Path to a kubeconfig file, the in-cluster
                configuration is used when not given
        """
        try:
            if kubeconfig:
                kubernetes.config.load_kube_config(config_file=kubeconfig)
            else:
                kubernetes.config.load_incluster_config()
            self._apis_client = kubernetes.client.ApisApi()
            logger.info("Initialized API groups platform detector")
        except kubernetes.config.ConfigException as e:
            logger.error("Failed to load cluster config: %s", e)
            raise AutoDetectError("Cannot load cluster configuration") from e

    def platform(self) -> Platform:
        """Determine the platform from the server API groups.

        Returns:
            Platform: OPENSHIFT when routes are served, KUBERNETES otherwise

        Raises:
            ClusterAPINotReachableError: If the API groups cannot be listed
        """
        try:
            api_groups = self._apis_client.get_api_versions()
        except kubernetes.client.exceptions.ApiException as e:
            logger.error("Failed to list API groups, body: %s", str(e.body))
            raise ClusterAPINotReachableError("Cannot list cluster API groups") from e

        for group in api_groups.groups or []:
            if group.name == constants.OPENSHIFT_ROUTE_API_GROUP:
                return Platform.OPENSHIFT

        return Platform.KUBERNETES
