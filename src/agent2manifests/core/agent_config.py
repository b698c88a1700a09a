"""Reading the agent's own configuration text."""

import yaml

from agent2manifests.core.constants import DEFAULT_METRICS_PORT
from agent2manifests.core.errors import AgentConfigError


def config_from_string(text: str) -> dict:
    """Parse the agent configuration (YAML or JSON) into a dict.

    An empty configuration parses to ``{}``.
    """
    try:
        config = yaml.safe_load(text or "")
    except yaml.YAMLError as exc:
        raise AgentConfigError(
            f"couldn't parse the agent configuration: {exc.__class__.__name__}") from exc
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise AgentConfigError(
            f"agent configuration must be a mapping, got {type(config).__name__}")
    return config


def _split_host_port(address: str) -> tuple[str, str]:
    """Split ``host:port`` (IPv6 hosts bracketed) the way net.SplitHostPort does."""
    if address.startswith("["):
        end = address.find("]")
        if end < 0 or address[end + 1:end + 2] != ":":
            raise AgentConfigError(f"missing port in address '{address}'")
        return address[1:end], address[end + 2:]
    if address.count(":") != 1:
        raise AgentConfigError(f"address '{address}' is not of the form host:port")
    host, port = address.split(":")
    return host, port


def config_to_metrics_port(config: dict) -> int:
    """Return the port the agent serves its own metrics on.

    Reads ``service.telemetry.metrics.address``; falls back to 8888 when the
    configuration doesn't set one. A section that is present but isn't a
    mapping raises AgentConfigError.
    """
    node = config
    path = []
    for key in ("service", "telemetry", "metrics"):
        path.append(key)
        node = node.get(key)
        if node is None:
            return DEFAULT_METRICS_PORT
        if not isinstance(node, dict):
            raise AgentConfigError(
                f"'{'.'.join(path)}' must be a mapping, got {type(node).__name__}")
    address = node.get("address")
    if not address:
        return DEFAULT_METRICS_PORT

    _host, port = _split_host_port(str(address))
    try:
        number = int(port)
    except ValueError as exc:
        raise AgentConfigError(f"invalid metrics port '{port}' in '{address}'") from exc
    if not 0 < number < 65536:
        raise AgentConfigError(f"metrics port {number} out of range in '{address}'")
    return number
