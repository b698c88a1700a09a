"""agent2manifests — Service and Instrumentation manifests for CloudWatch agents.

Re-exports the public API so callers can import from the package root.
"""

from agent2manifests.pacts.types import AgentSpec, BuildContext, ResolvedPorts
from agent2manifests.manifests.ports import resolve_ports
from agent2manifests.manifests.service import (
    build_headless_service, build_monitoring_service, build_service, headless_from,
)
from agent2manifests.manifests.instrumentation import build_default_instrumentation
from agent2manifests.core.errors import (
    AgentConfigError, InvalidModeError, ManifestError, MissingImageError,
)

__all__ = [
    "AgentSpec",
    "BuildContext",
    "ResolvedPorts",
    "resolve_ports",
    "build_service",
    "build_headless_service",
    "headless_from",
    "build_monitoring_service",
    "build_default_instrumentation",
    "AgentConfigError",
    "InvalidModeError",
    "ManifestError",
    "MissingImageError",
]
