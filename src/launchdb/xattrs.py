"""
Extended-attribute key/value store.

Attributes live in the Linux `user.` namespace; callers pass bare names
("can-open") and this module adds the prefix. Every failure is soft: reads
report found=False and writes report False.
"""

from __future__ import annotations

import logging
import os
from typing import Tuple

from launchdb.errors import AttributeUnsupported, AttributeWriteRejected

logger = logging.getLogger(__name__)

NAMESPACE = "user."
PROBE_ATTRIBUTE = "filesystemSupportsExtattr"


class AttributeStore:
    def __init__(self, namespace: str = NAMESPACE) -> None:
        self.namespace = namespace

    def _name(self, key: str) -> str:
        return key if key.startswith(self.namespace) else self.namespace + key

    def write(self, path: str, key: str, value: str) -> None:
        """Strict write; raises AttributeUnsupported or AttributeWriteRejected."""
        setxattr = getattr(os, "setxattr", None)
        if setxattr is None:
            raise AttributeUnsupported("platform has no extended attribute support")
        if not value:
            raise AttributeWriteRejected(f"empty value for {key} on {path}")
        try:
            setxattr(path, self._name(key), value.encode("utf-8"))
        except OSError as e:
            raise AttributeWriteRejected(f"{key} on {path}: {e}") from e

    def probe_support(self, reference_path: str) -> bool:
        try:
            self.write(reference_path, PROBE_ATTRIBUTE, "1")
        except (AttributeUnsupported, AttributeWriteRejected) as e:
            logger.debug("extended attribute probe on %s failed: %s", reference_path, e)
            return False
        return True

    def get(self, path: str, key: str) -> Tuple[str, bool]:
        getxattr = getattr(os, "getxattr", None)
        if getxattr is None:
            return "", False
        try:
            raw = getxattr(path, self._name(key))
        except OSError:
            return "", False
        return raw.decode("utf-8", errors="replace"), True

    def set(self, path: str, key: str, value: str) -> bool:
        try:
            self.write(path, key, value)
        except (AttributeUnsupported, AttributeWriteRejected) as e:
            logger.debug("set attribute failed: %s", e)
            return False
        return True
