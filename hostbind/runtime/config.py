# hostbind/runtime/config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
import os
from dataclasses import dataclass, field

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


@dataclass(frozen=True)
class BuildConfig:
    """Build-time capability flags reported by the capability queries.

    Values can be overridden via environment variables:
    - HOSTBIND_DEBUG: report a debug build
    - HOSTBIND_NO_PARALLEL: report a build without parallel execution support
    """

    debug: bool = field(default_factory=lambda: _env_flag("HOSTBIND_DEBUG"))
    parallel: bool = field(default_factory=lambda: not _env_flag("HOSTBIND_NO_PARALLEL"))
