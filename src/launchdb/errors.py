from __future__ import annotations


class LaunchDBError(RuntimeError):
    pass


class StoreUnavailable(LaunchDBError):
    """The application registry cannot be opened or written."""


class AttributeUnsupported(LaunchDBError):
    """The filesystem (or platform) does not honor extended attributes."""


class AttributeWriteRejected(LaunchDBError):
    pass


class ResourceReadFailure(LaunchDBError):
    pass


class ConfigError(LaunchDBError):
    pass
