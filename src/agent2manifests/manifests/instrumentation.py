"""Default auto-instrumentation resource for Java and Python workloads."""

from agent2manifests.core.errors import MissingImageError

API_VERSION = "cloudwatch.aws.amazon.com/v1alpha1"
KIND = "Instrumentation"
NAME = "java-instrumentation"
NAMESPACE = "default"

PROPAGATORS = ("tracecontext", "baggage", "b3", "xray")

# Everything below points the SDKs at the cloudwatch-agent Service
OTEL_SMP_ENABLED = ("OTEL_SMP_ENABLED", "true")
OTEL_TRACES_SAMPLER_ARG = (
    "OTEL_TRACES_SAMPLER_ARG", "endpoint=http://cloudwatch-agent.amazon-cloudwatch:2000")
OTEL_TRACES_SAMPLER = ("OTEL_TRACES_SAMPLER", "xray")
OTEL_EXPORTER_OTLP_PROTOCOL = ("OTEL_EXPORTER_OTLP_PROTOCOL", "http/protobuf")
OTEL_EXPORTER_OTLP_TRACES_ENDPOINT = (
    "OTEL_EXPORTER_OTLP_TRACES_ENDPOINT",
    "http://cloudwatch-agent.amazon-cloudwatch:4316/v1/traces")
OTEL_AWS_SMP_EXPORTER_ENDPOINT = (
    "OTEL_AWS_SMP_EXPORTER_ENDPOINT", "http://cloudwatch-agent.amazon-cloudwatch:4315")
OTEL_METRICS_EXPORTER = ("OTEL_METRICS_EXPORTER", "none")
OTEL_PYTHON_DISTRO = ("OTEL_PYTHON_DISTRO", "aws_distro")
OTEL_PYTHON_CONFIGURATOR = ("OTEL_PYTHON_CONFIGURATOR", "aws_configurator")

JAVA_ENV = (
    OTEL_SMP_ENABLED,
    OTEL_TRACES_SAMPLER_ARG,
    OTEL_TRACES_SAMPLER,
    OTEL_EXPORTER_OTLP_PROTOCOL,
    OTEL_EXPORTER_OTLP_TRACES_ENDPOINT,
    OTEL_AWS_SMP_EXPORTER_ENDPOINT,
    OTEL_METRICS_EXPORTER,
)

# Python has no xray sampler selection but needs the AWS distro/configurator
PYTHON_ENV = (
    OTEL_SMP_ENABLED,
    OTEL_TRACES_SAMPLER_ARG,
    OTEL_EXPORTER_OTLP_PROTOCOL,
    OTEL_EXPORTER_OTLP_TRACES_ENDPOINT,
    OTEL_AWS_SMP_EXPORTER_ENDPOINT,
    OTEL_METRICS_EXPORTER,
    OTEL_PYTHON_DISTRO,
    OTEL_PYTHON_CONFIGURATOR,
)


def _env_list(entries) -> list[dict]:
    return [{"name": name, "value": value} for name, value in entries]


def build_default_instrumentation(images: dict) -> dict:
    """Build the default Instrumentation resource.

    *images* maps ``java`` and ``python`` to their auto-instrumentation
    image references. Both are required; MissingImageError names the first
    one missing and nothing is built.
    """
    for runtime in ("java", "python"):
        if images.get(runtime) is None:
            raise MissingImageError(runtime)

    return {
        "apiVersion": API_VERSION,
        "kind": KIND,
        "metadata": {"name": NAME, "namespace": NAMESPACE},
        "spec": {
            "propagators": list(PROPAGATORS),
            "java": {"image": images["java"], "env": _env_list(JAVA_ENV)},
            "python": {"image": images["python"], "env": _env_list(PYTHON_ENV)},
        },
    }
