"""Public data types for the builders used across the package."""

import copy
from dataclasses import dataclass, field

from agent2manifests.core.constants import AGENT_MODES, CLOUDWATCH_AGENT_PORTS, MODE_DEPLOYMENT
from agent2manifests.core.errors import InvalidModeError


@dataclass(frozen=True)
class AgentSpec:
    """The parts of an AmazonCloudWatchAgent resource the builders read.

    Builders treat every field as read-only and copy any mapping they
    place in an output descriptor.
    """
    name: str
    namespace: str = ""
    annotations: dict = field(default_factory=dict)
    labels: dict = field(default_factory=dict)
    mode: str = MODE_DEPLOYMENT
    ports: list = field(default_factory=list)
    config: str = ""
    image: str = ""

    @classmethod
    def from_manifest(cls, manifest: dict) -> "AgentSpec":
        """Build a spec from an AmazonCloudWatchAgent manifest dict.

        Raises InvalidModeError when ``spec.mode`` isn't one of the agent modes.
        """
        meta = manifest.get("metadata") or {}
        spec = manifest.get("spec") or {}
        mode = spec.get("mode") or MODE_DEPLOYMENT
        if not isinstance(mode, str) or mode.lower() not in AGENT_MODES:
            raise InvalidModeError(mode)
        return cls(
            name=meta.get("name", ""),
            namespace=meta.get("namespace", ""),
            annotations=copy.deepcopy(meta.get("annotations") or {}),
            labels=copy.deepcopy(meta.get("labels") or {}),
            mode=mode.lower(),
            ports=copy.deepcopy(spec.get("ports") or []),
            config=spec.get("config") or "",
            image=spec.get("image") or "",
        )


@dataclass
class ResolvedPorts:
    """Output of port resolution."""
    ports: list = field(default_factory=list)
    dropped: list = field(default_factory=list)


@dataclass
class BuildContext:
    """Shared state passed to the builders during one run."""
    default_ports: list = field(
        default_factory=lambda: copy.deepcopy(list(CLOUDWATCH_AGENT_PORTS)))
    warnings: list = field(default_factory=list)
