"""Public contracts shared by the builders and their callers."""

from agent2manifests.pacts.types import AgentSpec, BuildContext, ResolvedPorts

__all__ = [
    "AgentSpec",
    "BuildContext",
    "ResolvedPorts",
]
