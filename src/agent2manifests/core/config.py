"""agent2manifests.yaml loading and instrumentation image lookup."""

import copy
import os

import yaml

from agent2manifests.core.constants import (
    CLOUDWATCH_AGENT_PORTS, JAVA_IMAGE_ENV, PYTHON_IMAGE_ENV,
)

CONFIG_FILE = "agent2manifests.yaml"
VERSION_KEY = "agent2manifestsVersion"


def load_config(path: str) -> dict:
    """Load agent2manifests.yaml or return empty config."""
    if os.path.exists(path):
        with open(path, encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    else:
        cfg = {}
    cfg.setdefault(VERSION_KEY, "v1")
    cfg.setdefault("defaultPorts", None)
    cfg.setdefault("instrumentation", {})
    return cfg


def save_config(path: str, config: dict) -> None:
    """Write agent2manifests.yaml."""
    # Ensure version key comes first
    ordered = {VERSION_KEY: config.get(VERSION_KEY, "v1")}
    for k, v in config.items():
        if k != VERSION_KEY:
            ordered[k] = v
    with open(path, "w", encoding="utf-8") as f:
        f.write("# Configuration for agent2manifests\n\n")
        yaml.dump(ordered, f, default_flow_style=False, sort_keys=False)


def default_ports_from_config(config: dict) -> list[dict]:
    """Ports inferred for every agent: ``defaultPorts`` from config, else the built-in set.

    An explicit empty list in config means "no inferred ports".
    """
    configured = config.get("defaultPorts")
    if configured is None:
        return copy.deepcopy(list(CLOUDWATCH_AGENT_PORTS))
    return copy.deepcopy(list(configured))


def instrumentation_images_from_env(environ=None) -> dict[str, str]:
    """Collect the auto-instrumentation images set in the environment.

    Only variables that are present are returned; an empty value counts as set.
    """
    environ = os.environ if environ is None else environ
    images = {}
    for runtime, var in (("java", JAVA_IMAGE_ENV), ("python", PYTHON_IMAGE_ENV)):
        if var in environ:
            images[runtime] = environ[var]
    return images


def instrumentation_images(config: dict, environ=None) -> dict[str, str]:
    """Images from the ``instrumentation`` config section, environment filling the gaps."""
    images = instrumentation_images_from_env(environ)
    for runtime, image in (config.get("instrumentation") or {}).items():
        if image is not None:
            images[runtime] = image
    return images
