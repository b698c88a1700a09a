"""Merge inferred Service ports with the ports declared on the resource."""

import copy

from agent2manifests.core.constants import FALLBACK_PORT_NAME
from agent2manifests.pacts.types import ResolvedPorts


def fallback_port_name(port: dict) -> str:
    """Name an inferred port takes when its own name is already declared."""
    return FALLBACK_PORT_NAME.format(port=port.get("port"))


def _port_numbers_and_names(ports: list[dict]) -> tuple[set, set]:
    return {p.get("port") for p in ports}, {p.get("name") for p in ports}


def resolve_ports(inferred: list[dict], declared: list[dict],
                  warnings: list[str] | None = None) -> ResolvedPorts:
    """Merge *inferred* ports into *declared* ones, declared first and verbatim.

    An inferred port is dropped when its number is already exposed. When
    only its name is taken it is renamed to ``port-<number>``; if that name
    is taken as well it ends up in ``dropped`` and a warning is recorded.
    Neither input list is modified.
    """
    numbers, names = _port_numbers_and_names(declared)
    result = ResolvedPorts(ports=copy.deepcopy(list(declared)))
    for candidate in inferred:
        # The resource already exposes this port number
        if candidate.get("port") in numbers:
            continue

        port = copy.deepcopy(candidate)
        if port.get("name") in names:
            fallback = fallback_port_name(port)
            if fallback in names:
                result.dropped.append(port)
                if warnings is not None:
                    warnings.append(
                        f"inferred port '{port.get('name')}' ({port.get('port')}) clashes "
                        f"with a declared port name, and so does its fallback name "
                        f"'{fallback}' — port skipped"
                    )
                continue
            port["name"] = fallback

        numbers.add(port.get("port"))
        names.add(port.get("name"))
        result.ports.append(port)
    return result
