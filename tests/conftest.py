"""Shared pytest fixtures and configuration."""

import pytest
import tempfile
from pathlib import Path
from unittest.mock import Mock

from operator_config.autodetect import AutoDetect
from operator_config.platform import Platform


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_detector():
    """Mock platform detector reporting OpenShift."""
    detector = Mock(spec=AutoDetect)
    detector.platform.return_value = Platform.OPENSHIFT
    return detector


@pytest.fixture
def sample_config_file(temp_dir):
    """Create a YAML configuration file for testing."""
    config_file = temp_dir / "config.yaml"
    config_file.write_text(
        "collector_image: registry.example.com/collector:1.2.3\n"
        "collector_config_map_entry: otel.yaml\n"
        "platform: kubernetes\n"
        "auto_detect_frequency: 30\n"
    )
    return config_file
