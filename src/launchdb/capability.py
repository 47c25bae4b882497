"""
Can-open capability resolution.

Design goals:
- Attribute I/O is attempted only when the filesystem probe said it works.
- An existing attribute is final, even if empty; it is never overwritten.
- Source formats: bundle resource file (`<bundle>/Resources/can-open`) and
  desktop-entry `MimeType=` lines. Anything else is reported as unsupported.
- No negative caching: a path without a usable source is retried on the next event.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from launchdb.config import DEFAULT_ATTRIBUTE_NAME
from launchdb.errors import ResourceReadFailure
from launchdb.paths import BUNDLE_CAN_OPEN, file_exists, is_bundle, is_desktop_entry, read_all_text
from launchdb.xattrs import AttributeStore

logger = logging.getLogger(__name__)

MIME_PREFIX = "MimeType="


@dataclass(frozen=True)
class FilesystemCapability:
    supports_xattr: bool
    reference_path: str


def probe_filesystem(store: AttributeStore, reference_path: str) -> FilesystemCapability:
    """Run the one-time extended attribute probe against `reference_path`."""
    ok = store.probe_support(reference_path)
    if ok:
        logger.info("extended attributes are supported on %s; using them", reference_path)
    else:
        logger.info(
            "extended attributes are not supported on %s (or not writable); capability caching disabled",
            reference_path,
        )
    return FilesystemCapability(supports_xattr=ok, reference_path=reference_path)


class SourceStatus(str, Enum):
    FOUND = "FOUND"
    NOT_FOUND = "NOT_FOUND"
    UNSUPPORTED = "UNSUPPORTED"


@dataclass(frozen=True)
class SourceLookup:
    status: SourceStatus
    value: str = ""


class ResolveOutcome(str, Enum):
    SKIPPED = "SKIPPED"
    CACHED = "CACHED"
    NO_VALUE = "NO_VALUE"
    EMPTY = "EMPTY"
    WRITTEN = "WRITTEN"
    WRITE_FAILED = "WRITE_FAILED"


def _read_bundle_resource(bundle_path: str) -> str:
    resource = os.path.join(bundle_path, str(BUNDLE_CAN_OPEN))
    if not file_exists(resource):
        raise ResourceReadFailure(f"no can-open file in {bundle_path}")
    try:
        return read_all_text(resource)
    except OSError as e:
        raise ResourceReadFailure(f"{resource}: {e}") from e


def read_desktop_mime(desktop_path: str) -> str:
    """
    Value of the last `MimeType=` line, or "" if there is none or the file
    cannot be read. Lines are trimmed and matched literally; no group or
    comment handling, so `;` separators survive intact.
    """
    mime = ""
    try:
        with open(desktop_path, "r", encoding="utf-8", errors="replace") as f:
            for line in f:
                line = line.strip()
                if line.startswith(MIME_PREFIX):
                    mime = line[len(MIME_PREFIX):]
    except OSError as e:
        logger.debug("cannot read desktop entry %s: %s", desktop_path, e)
        return ""
    return mime


class CapabilityResolver:
    def __init__(
        self,
        attributes: AttributeStore,
        capability: FilesystemCapability,
        attribute_name: str = DEFAULT_ATTRIBUTE_NAME,
    ) -> None:
        self.attributes = attributes
        self.capability = capability
        self.attribute_name = attribute_name

    def read_source(self, path: str) -> SourceLookup:
        """Read the capability declared by the application itself, ignoring any cache."""
        if is_bundle(path):
            try:
                return SourceLookup(SourceStatus.FOUND, _read_bundle_resource(path))
            except ResourceReadFailure as e:
                logger.debug("%s", e)
                return SourceLookup(SourceStatus.NOT_FOUND)
        if is_desktop_entry(path):
            return SourceLookup(SourceStatus.FOUND, read_desktop_mime(path))
        # TODO: AppDir bundles need their own source format here.
        return SourceLookup(SourceStatus.UNSUPPORTED)

    def cached(self, path: str) -> Optional[str]:
        if not self.capability.supports_xattr:
            return None
        value, found = self.attributes.get(path, self.attribute_name)
        return value if found else None

    def resolve(self, path: str) -> ResolveOutcome:
        if not self.capability.supports_xattr:
            return ResolveOutcome.SKIPPED

        if self.cached(path) is not None:
            return ResolveOutcome.CACHED

        lookup = self.read_source(path)
        if lookup.status is not SourceStatus.FOUND:
            logger.debug("no 'can-open' source: %s", path)
            return ResolveOutcome.NO_VALUE
        if lookup.value == "":
            logger.debug("empty 'can-open' source: %s", path)
            return ResolveOutcome.EMPTY

        if self.attributes.set(path, self.attribute_name, lookup.value):
            logger.debug("set '%s' attribute on %s", self.attribute_name, path)
            return ResolveOutcome.WRITTEN
        logger.warning("cannot set '%s' attribute on %s", self.attribute_name, path)
        return ResolveOutcome.WRITE_FAILED

    def can_open(self, path: str) -> Optional[str]:
        """
        Capability for `path` as the `open` command sees it: the cached
        attribute when there is one, otherwise whatever the source declares.
        None means unknown.
        """
        value = self.cached(path)
        if value is not None:
            return value
        lookup = self.read_source(path)
        if lookup.status is SourceStatus.FOUND:
            return lookup.value
        return None
