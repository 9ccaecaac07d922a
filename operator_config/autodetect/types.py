from operator_config.platform import Platform


class AutoDetectError(Exception):
    """Exception raised when the platform cannot be determined."""


class AutoDetect:
    """Base class for platform detectors."""

    def platform(self) -> Platform:
        """Determine the platform the operator is running on.

        Returns:
            Platform: The detected platform, UNKNOWN when inconclusive

        Raises:
            AutoDetectError: If the platform cannot be determined
        """
        raise NotImplementedError
