"""Service manifests for an agent: base (ClusterIP), headless and monitoring."""

import copy

from agent2manifests.core import labels as manifest_labels
from agent2manifests.core import naming
from agent2manifests.core.agent_config import config_from_string, config_to_metrics_port
from agent2manifests.core.constants import (
    HEADLESS_EXISTS, HEADLESS_LABEL, MODE_DAEMONSET, MONITORING_PORT_NAME,
    SERVING_CERT_ANNOTATION,
)
from agent2manifests.manifests.ports import resolve_ports
from agent2manifests.pacts.types import AgentSpec, BuildContext


def _service_manifest(spec: AgentSpec, name: str, ports: list[dict]) -> dict:
    """Skeleton v1/Service shared by all variants (fresh maps, nothing aliased)."""
    return {
        "apiVersion": "v1",
        "kind": "Service",
        "metadata": {
            "name": name,
            "namespace": spec.namespace,
            "labels": manifest_labels.labels(spec, name),
            "annotations": copy.deepcopy(spec.annotations),
        },
        "spec": {
            "selector": manifest_labels.selector_labels(spec),
            "clusterIP": "",
            "ports": ports,
        },
    }


def service_ports(spec: AgentSpec, ctx: BuildContext) -> list[dict]:
    """Ports the agent's Service should expose.

    Without ports on the resource the defaults are used directly; otherwise
    the defaults are merged in behind the declared ports.
    """
    if not spec.ports:
        return copy.deepcopy(list(ctx.default_ports))
    return resolve_ports(ctx.default_ports, spec.ports, ctx.warnings).ports


def build_service(spec: AgentSpec, ctx: BuildContext | None = None) -> dict | None:
    """Build the agent's ClusterIP Service, or None when there is nothing to expose."""
    ctx = ctx or BuildContext()
    ports = service_ports(spec, ctx)

    # if we have no ports, we don't need a service
    if not ports:
        return None

    svc = _service_manifest(spec, naming.service(spec.name), ports)
    policy = "Local" if spec.mode == MODE_DAEMONSET else "Cluster"
    svc["spec"]["internalTrafficPolicy"] = policy
    return svc


def headless_from(base: dict, spec: AgentSpec) -> dict:
    """Derive the headless twin (``clusterIP: None``) of an already built Service.

    *base* is left untouched; the result shares no mappings with it.
    """
    svc = copy.deepcopy(base)
    meta = svc["metadata"]
    meta["name"] = naming.headless_service(spec.name)
    meta["labels"] = {**meta["labels"], HEADLESS_LABEL: HEADLESS_EXISTS}
    # Existing annotations win over the generated serving-cert hint
    annotations = {SERVING_CERT_ANNOTATION: f"{meta['name']}-tls"}
    annotations.update(meta["annotations"])
    meta["annotations"] = annotations

    svc["spec"]["clusterIP"] = "None"
    return svc


def build_headless_service(spec: AgentSpec, ctx: BuildContext | None = None) -> dict | None:
    """Build the headless twin of the agent's Service, or None when there is none."""
    svc = build_service(spec, ctx)
    if svc is None:
        return None
    return headless_from(svc, spec)


def build_monitoring_service(spec: AgentSpec) -> dict:
    """Build the Service exposing the agent's own metrics endpoint.

    Raises AgentConfigError when the configuration can't be parsed or names
    an invalid metrics address.
    """
    config = config_from_string(spec.config)
    metrics_port = config_to_metrics_port(config)
    name = naming.monitoring_service(spec.name)
    return _service_manifest(spec, name, [{"name": MONITORING_PORT_NAME, "port": metrics_port}])
