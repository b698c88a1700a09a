"""Kubernetes object names derived from an agent name."""

import re

# Anything outside [a-z0-9-] is replaced when sanitising a DNS-1123 label
_INVALID_DNS_CHARS_RE = re.compile(r'[^a-z0-9-]+')
_EDGE_RE = re.compile(r'^[^a-z0-9]+|[^a-z0-9]+$')

MAX_NAME_LENGTH = 63


def dns_name(name: str) -> str:
    """Sanitise *name* into a valid DNS-1123 label (lowercase, [a-z0-9-])."""
    name = _INVALID_DNS_CHARS_RE.sub("-", name.lower())
    return _EDGE_RE.sub("", name)


def truncate(fmt: str, name: str, max_len: int = MAX_NAME_LENGTH) -> str:
    """Format *name* into *fmt*, shortening *name* so the result fits *max_len*.

    The suffix/prefix carried by *fmt* always survives, e.g.
    ``truncate("{}-headless", "a" * 70)`` keeps ``-headless``.
    """
    room = max_len - len(fmt.format(""))
    return fmt.format(name[:max(room, 0)].rstrip("-"))


def service(agent: str) -> str:
    return dns_name(truncate("{}", agent))


def headless_service(agent: str) -> str:
    return dns_name(truncate("{}-headless", service(agent)))


def monitoring_service(agent: str) -> str:
    return dns_name(truncate("{}-monitoring", service(agent)))
