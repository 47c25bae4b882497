"""
launchdb: registry of launchable applications and their can-open capabilities.
"""

from launchdb.capability import CapabilityResolver, FilesystemCapability, ResolveOutcome, probe_filesystem
from launchdb.config import LaunchConfig, load_config
from launchdb.errors import StoreUnavailable
from launchdb.handler import ApplicationHandler, LaunchDB, open_launch_db
from launchdb.registry import Registry
from launchdb.xattrs import AttributeStore

__all__ = [
    "ApplicationHandler",
    "AttributeStore",
    "CapabilityResolver",
    "FilesystemCapability",
    "LaunchConfig",
    "LaunchDB",
    "Registry",
    "ResolveOutcome",
    "StoreUnavailable",
    "load_config",
    "open_launch_db",
    "probe_filesystem",
]
