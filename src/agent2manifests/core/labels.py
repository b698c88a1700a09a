"""Standard labels and selectors for objects owned by an agent."""

from agent2manifests.core.constants import COMPONENT_NAME, MANAGED_BY


def _image_version(image: str) -> str:
    """Return the tag (or digest) of an image reference, ``latest`` when unset."""
    if "@" in image:
        return image.rsplit("@", 1)[1].split(":", 1)[-1][:63]
    # A colon before the last slash belongs to a registry host:port
    last = image.rsplit("/", 1)[-1]
    if ":" in last:
        return last.rsplit(":", 1)[1]
    return "latest"


def selector_labels(spec) -> dict[str, str]:
    """Labels that select the pods of *spec*'s workload."""
    return {
        "app.kubernetes.io/managed-by": MANAGED_BY,
        "app.kubernetes.io/instance": f"{spec.namespace}.{spec.name}",
        "app.kubernetes.io/part-of": COMPONENT_NAME,
        "app.kubernetes.io/component": COMPONENT_NAME,
    }


def labels(spec, name: str) -> dict[str, str]:
    """Full label set for an object called *name* belonging to *spec*.

    User labels are kept, except that the selector labels and the version
    are always the operator's. ``app.kubernetes.io/name`` is only filled in
    when the user hasn't set it. Always returns a fresh dict.
    """
    result = dict(spec.labels)
    result.update(selector_labels(spec))
    result["app.kubernetes.io/version"] = _image_version(spec.image or "")
    result.setdefault("app.kubernetes.io/name", name)
    return result
