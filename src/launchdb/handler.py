from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from launchdb.capability import (
    CapabilityResolver,
    FilesystemCapability,
    ResolveOutcome,
    probe_filesystem,
)
from launchdb.config import LaunchConfig
from launchdb.paths import canonicalize, file_exists, is_directory
from launchdb.registry import Registry
from launchdb.xattrs import AttributeStore

logger = logging.getLogger(__name__)


class PathEvent(str, Enum):
    VANISHED = "VANISHED"
    PRESENT = "PRESENT"


@dataclass(frozen=True)
class HandleResult:
    path: str
    event: PathEvent
    registered: bool
    capability: Optional[ResolveOutcome] = None


class ApplicationHandler:
    """
    Applies one path event to the launch database.

    - Path gone: drop it from the registry; no capability work.
    - Path present: register it (idempotent), then resolve and cache its
      can-open capability if caching is enabled and the filesystem supports it.

    Each call is independent. Concurrent calls for the same path must be
    serialized by the caller.
    """

    def __init__(
        self,
        registry: Registry,
        resolver: CapabilityResolver,
        cache_capabilities: bool = True,
    ) -> None:
        self.registry = registry
        self.resolver = resolver
        self.cache_capabilities = cache_capabilities

    def handle(self, path: str) -> HandleResult:
        canonical = canonicalize(path)

        if not (is_directory(canonical) or file_exists(canonical)):
            logger.info("%s does not exist, removing from launch database", canonical)
            self.registry.remove(canonical)
            return HandleResult(path=canonical, event=PathEvent.VANISHED, registered=False)

        self.registry.add(canonical)
        registered = self.registry.exists(canonical)

        outcome: Optional[ResolveOutcome] = None
        if self.cache_capabilities:
            if self.resolver.capability.supports_xattr:
                outcome = self.resolver.resolve(canonical)
            else:
                outcome = ResolveOutcome.SKIPPED
        return HandleResult(path=canonical, event=PathEvent.PRESENT, registered=registered, capability=outcome)

    def handle_many(self, paths: Iterable[str]) -> List[HandleResult]:
        return [self.handle(p) for p in paths]


@dataclass
class LaunchDB:
    config: LaunchConfig
    registry: Registry
    attributes: AttributeStore
    capability: FilesystemCapability
    resolver: CapabilityResolver
    handler: ApplicationHandler

    def close(self) -> None:
        self.registry.close()

    def __enter__(self) -> "LaunchDB":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def open_launch_db(config: LaunchConfig, attributes: Optional[AttributeStore] = None) -> LaunchDB:
    """
    Wire the full stack. Raises StoreUnavailable if the registry cannot be
    opened; the filesystem probe runs exactly once here.
    """
    registry = Registry(config.database_path).open()
    attrs = attributes if attributes is not None else AttributeStore()

    if config.cache_capabilities:
        capability = probe_filesystem(attrs, config.probe_path)
    else:
        capability = FilesystemCapability(supports_xattr=False, reference_path=config.probe_path)

    resolver = CapabilityResolver(attrs, capability, attribute_name=config.attribute_name)
    handler = ApplicationHandler(registry, resolver, cache_capabilities=config.cache_capabilities)
    return LaunchDB(
        config=config,
        registry=registry,
        attributes=attrs,
        capability=capability,
        resolver=resolver,
        handler=handler,
    )
