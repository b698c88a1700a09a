"""Base, headless and monitoring Service manifests."""

import copy

import pytest

from agent2manifests.core.constants import CLOUDWATCH_AGENT_PORTS
from agent2manifests.core.errors import AgentConfigError
from agent2manifests.manifests.service import (
    build_headless_service, build_monitoring_service, build_service, headless_from,
)
from agent2manifests.pacts.types import AgentSpec, BuildContext

SELECTOR = {
    "app.kubernetes.io/managed-by": "amazon-cloudwatch-agent-operator",
    "app.kubernetes.io/instance": "amazon-cloudwatch.cloudwatch-agent",
    "app.kubernetes.io/part-of": "amazon-cloudwatch-agent",
    "app.kubernetes.io/component": "amazon-cloudwatch-agent",
}


def _spec(**overrides):
    fields = {
        "name": "cloudwatch-agent",
        "namespace": "amazon-cloudwatch",
        "annotations": {"team": "observability"},
        "image": "public.ecr.aws/cloudwatch-agent/cloudwatch-agent:1.300032.2b361",
    }
    fields.update(overrides)
    return AgentSpec(**fields)


# ---------------------------------------------------------------------------
# Base Service
# ---------------------------------------------------------------------------

def test_default_ports_when_none_declared():
    svc = build_service(_spec())
    assert svc["kind"] == "Service"
    assert svc["metadata"]["name"] == "cloudwatch-agent"
    assert svc["metadata"]["namespace"] == "amazon-cloudwatch"
    assert svc["spec"]["ports"] == list(CLOUDWATCH_AGENT_PORTS)
    assert svc["spec"]["clusterIP"] == ""
    assert svc["spec"]["selector"] == SELECTOR


def test_labels_include_name_and_version():
    labels = build_service(_spec(labels={"team": "o11y"}))["metadata"]["labels"]
    assert labels["app.kubernetes.io/name"] == "cloudwatch-agent"
    assert labels["app.kubernetes.io/version"] == "1.300032.2b361"
    assert labels["team"] == "o11y"


def test_declared_ports_take_priority():
    declared = [{"name": "appsig-grpc", "port": 5000}, {"name": "statsd", "port": 4316}]
    svc = build_service(_spec(ports=declared))
    assert svc["spec"]["ports"] == declared + [
        {"name": "port-4315", "port": 4315, "protocol": "TCP", "targetPort": 4315},
        {"name": "appsig-xray", "port": 2000, "protocol": "TCP", "targetPort": 2000},
    ]


@pytest.mark.parametrize("mode,policy", [
    ("daemonset", "Local"),
    ("deployment", "Cluster"),
    ("statefulset", "Cluster"),
    ("sidecar", "Cluster"),
])
def test_internal_traffic_policy(mode, policy):
    assert build_service(_spec(mode=mode))["spec"]["internalTrafficPolicy"] == policy


def test_no_ports_means_no_service():
    ctx = BuildContext(default_ports=[])
    assert build_service(_spec(), ctx) is None
    assert build_headless_service(_spec(), ctx) is None
    assert ctx.warnings == []


def test_annotations_are_copied():
    spec = _spec()
    svc = build_service(spec)
    svc["metadata"]["annotations"]["extra"] = "x"
    assert spec.annotations == {"team": "observability"}


def test_unresolvable_collision_is_a_warning():
    ctx = BuildContext(default_ports=[{"name": "metrics", "port": 4317}])
    declared = [{"name": "metrics", "port": 8888}, {"name": "port-4317", "port": 1}]
    svc = build_service(_spec(ports=declared), ctx)
    assert svc["spec"]["ports"] == declared
    assert len(ctx.warnings) == 1


def test_service_is_deterministic():
    spec = _spec(ports=[{"name": "appsig-grpc", "port": 5000}])
    assert build_service(spec) == build_service(spec)
    assert build_headless_service(spec) == build_headless_service(spec)


# ---------------------------------------------------------------------------
# Headless Service
# ---------------------------------------------------------------------------

def test_headless_service():
    spec = _spec()
    base = build_service(spec)
    svc = build_headless_service(spec)
    meta = svc["metadata"]
    assert meta["name"] == "cloudwatch-agent-headless"
    assert meta["labels"]["operator.opentelemetry.io/collector-headless-service"] == "Exists"
    assert meta["annotations"] == {
        "team": "observability",
        "service.beta.openshift.io/serving-cert-secret-name": "cloudwatch-agent-headless-tls",
    }
    assert svc["spec"]["clusterIP"] == "None"
    assert svc["spec"]["ports"] == base["spec"]["ports"]
    assert svc["spec"]["selector"] == base["spec"]["selector"]


def test_headless_keeps_user_serving_cert_annotation():
    spec = _spec(annotations={
        "service.beta.openshift.io/serving-cert-secret-name": "my-cert"})
    annotations = build_headless_service(spec)["metadata"]["annotations"]
    assert annotations == {"service.beta.openshift.io/serving-cert-secret-name": "my-cert"}


def test_headless_annotations_do_not_alias_spec():
    spec = _spec()
    before = copy.deepcopy(spec.annotations)
    svc = build_headless_service(spec)
    svc["metadata"]["annotations"]["mutated"] = "yes"
    svc["metadata"]["labels"]["mutated"] = "yes"
    assert spec.annotations == before
    assert "mutated" not in build_service(spec)["metadata"]["labels"]


def test_headless_from_leaves_base_untouched():
    spec = _spec()
    base = build_service(spec)
    before = copy.deepcopy(base)
    svc = headless_from(base, spec)
    assert base == before
    assert svc == build_headless_service(spec)
    svc["spec"]["ports"][0]["name"] = "changed"
    assert base["spec"]["ports"][0]["name"] == "appsig-grpc"


# ---------------------------------------------------------------------------
# Monitoring Service
# ---------------------------------------------------------------------------

def test_monitoring_service_default_port():
    svc = build_monitoring_service(_spec(config="receivers: {}\n"))
    assert svc["metadata"]["name"] == "cloudwatch-agent-monitoring"
    assert svc["spec"]["ports"] == [{"name": "monitoring", "port": 8888}]
    assert svc["spec"]["clusterIP"] == ""
    assert svc["spec"]["selector"] == SELECTOR
    assert "internalTrafficPolicy" not in svc["spec"]


def test_monitoring_service_configured_port():
    config = "service:\n  telemetry:\n    metrics:\n      address: 0.0.0.0:9090\n"
    svc = build_monitoring_service(_spec(config=config))
    assert svc["spec"]["ports"] == [{"name": "monitoring", "port": 9090}]


def test_monitoring_service_bad_config():
    with pytest.raises(AgentConfigError):
        build_monitoring_service(_spec(config="receivers: [unclosed"))


def test_monitoring_service_bad_address():
    config = '{"service": {"telemetry": {"metrics": {"address": "no-port"}}}}'
    with pytest.raises(AgentConfigError):
        build_monitoring_service(_spec(config=config))


def test_monitoring_failure_does_not_affect_base():
    spec = _spec(config="receivers: [unclosed")
    assert build_service(spec) is not None
    assert build_headless_service(spec) is not None
