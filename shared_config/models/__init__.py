"""Data models for the shared config sync."""

from .config import (
    DEFAULT_HEADER,
    DEFAULT_OPT_OUTS,
    TRACKED_FILES,
    FileKind,
    RunEnvironment,
    SyncConfig,
    TrackedFile,
)

__all__ = [
    "DEFAULT_HEADER",
    "DEFAULT_OPT_OUTS",
    "FileKind",
    "RunEnvironment",
    "SyncConfig",
    "TRACKED_FILES",
    "TrackedFile",
]
