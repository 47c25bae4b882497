from __future__ import annotations

import os
from pathlib import Path

BUNDLE_SUFFIX = ".app"
DESKTOP_SUFFIX = ".desktop"

# Relative to the bundle root.
BUNDLE_CAN_OPEN = Path("Resources") / "can-open"


def canonicalize(path: str) -> str:
    return os.path.realpath(os.path.abspath(path))


def file_exists(path: str) -> bool:
    return os.path.isfile(path)


def is_directory(path: str) -> bool:
    return os.path.isdir(path)


def read_all_text(path: str) -> str:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def is_bundle(path: str) -> bool:
    return path.endswith(BUNDLE_SUFFIX)


def is_desktop_entry(path: str) -> bool:
    return path.endswith(DESKTOP_SUFFIX)
