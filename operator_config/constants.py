# Collector image defaults
COLLECTOR_IMAGE_BASE = "quay.io/opentelemetry/opentelemetry-collector"
DEFAULT_COLLECTOR_CONFIG_MAP_ENTRY = "collector.yaml"
DEFAULT_OPENTELEMETRY_COLLECTOR_VERSION = "0.0.0"

# Timing constants (in seconds)
DEFAULT_AUTO_DETECT_FREQUENCY = 5.0
AUTO_DETECT_STOP_TIMEOUT = 10

# API group only served by OpenShift clusters
OPENSHIFT_ROUTE_API_GROUP = "route.openshift.io"

PACKAGE_NAME = "operator-config"
