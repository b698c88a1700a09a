"""Exceptions raised by the manifest builders."""


class ManifestError(Exception):
    """Base class: a descriptor could not be built from its inputs."""


class AgentConfigError(ManifestError):
    """The agent configuration text is unparseable or yields no metrics port."""


class MissingImageError(ManifestError):
    """A required auto-instrumentation image was not supplied."""

    def __init__(self, runtime: str):
        self.runtime = runtime
        super().__init__(f"unable to determine {runtime} instrumentation image")


class InvalidModeError(ManifestError):
    """The resource asks for an operating mode the agent doesn't support."""

    def __init__(self, mode):
        self.mode = mode
        super().__init__(f"unsupported agent mode {mode!r}")
