from __future__ import annotations

from typing import List

from launchdb.capability import CapabilityResolver
from launchdb.registry import Registry


def mime_entries(can_open: str) -> List[str]:
    return [m.strip() for m in can_open.replace("\n", ";").split(";") if m.strip()]


def applications_for_mime(registry: Registry, resolver: CapabilityResolver, mime: str) -> List[str]:
    """
    Registered applications declaring `mime`, in registry listing order
    (desktop entries last). Applications with unknown capability are skipped.
    """
    out: List[str] = []
    for path in registry.list_all():
        can_open = resolver.can_open(path)
        if can_open and mime in mime_entries(can_open):
            out.append(path)
    return out
