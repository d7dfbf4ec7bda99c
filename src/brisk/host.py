# Copyright (c) Syntropy Systems
"""Host information attached to suite reports."""
from __future__ import annotations

import logging
import platform
import socket
from typing import cast

import psutil

from brisk.models.result import HostInfo

logger = logging.getLogger(__name__)


def get_memory_total_gb() -> float | None:
    """Total physical memory in GB, or None if it cannot be read."""
    try:
        mem = psutil.virtual_memory()
        total = cast("int", mem.total)
    except (AttributeError, OSError, ValueError):
        return None
    else:
        return round(total / (1024**3), 2)


def get_cpu_count() -> int | None:
    """Logical CPU count, or None if unknown."""
    try:
        return cast("int | None", psutil.cpu_count(logical=True))
    except (AttributeError, OSError, ValueError):
        return None


def collect_host_info() -> HostInfo:
    """Collect a snapshot of the current machine."""
    try:
        hostname = socket.gethostname()
    except OSError:
        logger.debug("Could not resolve hostname", exc_info=True)
        hostname = "unknown"

    return HostInfo(
        hostname=hostname,
        platform=platform.platform(),
        python_version=platform.python_version(),
        processor=platform.processor() or None,
        cpu_count=get_cpu_count(),
        memory_total_gb=get_memory_total_gb(),
    )
