"""Constants shared by the manifest builders."""

# Operating modes of an AmazonCloudWatchAgent resource
MODE_DAEMONSET = "daemonset"
MODE_DEPLOYMENT = "deployment"
MODE_SIDECAR = "sidecar"
MODE_STATEFULSET = "statefulset"
AGENT_MODES = (MODE_DAEMONSET, MODE_DEPLOYMENT, MODE_SIDECAR, MODE_STATEFULSET)

# Custom resource kind the CLI picks out of parsed manifests
AGENT_KIND = "AmazonCloudWatchAgent"

COMPONENT_NAME = "amazon-cloudwatch-agent"
MANAGED_BY = "amazon-cloudwatch-agent-operator"

# Ports every agent Service opens unless the resource overrides them
# (Application Signals gRPC/HTTP receivers and the X-Ray proxy)
CLOUDWATCH_AGENT_PORTS = (
    {"name": "appsig-grpc", "port": 4315, "protocol": "TCP", "targetPort": 4315},
    {"name": "appsig-http", "port": 4316, "protocol": "TCP", "targetPort": 4316},
    {"name": "appsig-xray", "port": 2000, "protocol": "TCP", "targetPort": 2000},
)

# Name given to an inferred port whose own name is already taken
FALLBACK_PORT_NAME = "port-{port}"

# Distinguishes the headless Service from the ClusterIP one
HEADLESS_LABEL = "operator.opentelemetry.io/collector-headless-service"
HEADLESS_EXISTS = "Exists"
SERVING_CERT_ANNOTATION = "service.beta.openshift.io/serving-cert-secret-name"

MONITORING_PORT_NAME = "monitoring"
DEFAULT_METRICS_PORT = 8888

# Environment variables naming the auto-instrumentation images
JAVA_IMAGE_ENV = "AUTO_INSTRUMENTATION_JAVA"
PYTHON_IMAGE_ENV = "AUTO_INSTRUMENTATION_PYTHON"
