"""Process introspection: uptime, memory and runtime identity.

Route handlers never call these primitives directly. They receive a
``ProcessSnapshot`` / ``RuntimeInfo`` through FastAPI dependencies so tests can
swap in fixed values.
"""

import os
import platform
import resource
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Optional

_STATM_PATH = Path("/proc/self/statm")


@dataclass(frozen=True)
class ProcessSnapshot:
    """Point-in-time process vitals."""

    timestamp_ms: int
    uptime_seconds: float
    pid: int
    memory: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class RuntimeInfo:
    """Static description of the interpreter and host."""

    runtime_version: str
    platform: str
    architecture: str


def read_memory_usage() -> Dict[str, int]:
    """
    Read the process memory counters in bytes.

    ``rss`` and ``vms`` come from ``/proc/self/statm`` and are 0 where procfs
    is unavailable. ``maxRss`` is the peak resident set size reported by
    ``getrusage`` (kilobytes on Linux, bytes on macOS).
    """
    rss = vms = 0
    if _STATM_PATH.exists():
        pages = _STATM_PATH.read_text().split()
        page_size = os.sysconf("SC_PAGE_SIZE")
        vms = int(pages[0]) * page_size
        rss = int(pages[1]) * page_size

    max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    if sys.platform != "darwin":
        max_rss *= 1024

    return {"rss": rss, "vms": vms, "maxRss": max_rss}


def read_runtime_info() -> RuntimeInfo:
    """Describe the running interpreter."""
    return RuntimeInfo(
        runtime_version=f"Python {platform.python_version()}",
        platform=sys.platform,
        architecture=platform.machine() or "unknown",
    )


class ProcessIntrospector:
    """
    Produces process snapshots relative to the moment it was created.

    The snapshot timestamp is the creation wall-clock time advanced by the
    monotonic clock, so timestamps never go backwards within one process even
    if the system clock is adjusted.
    """

    def __init__(
        self,
        wall_clock: Callable[[], float] = time.time,
        monotonic: Callable[[], float] = time.monotonic,
        memory_reader: Callable[[], Dict[str, int]] = read_memory_usage,
        pid: Optional[int] = None,
    ):
        self._monotonic = monotonic
        self._memory_reader = memory_reader
        self._pid = pid if pid is not None else os.getpid()
        self._started_wall_ms = int(wall_clock() * 1000)
        self._started_monotonic = monotonic()

    @property
    def pid(self) -> int:
        return self._pid

    def uptime(self) -> float:
        """Seconds elapsed since the introspector was created."""
        return max(0.0, self._monotonic() - self._started_monotonic)

    def snapshot(self) -> ProcessSnapshot:
        """Capture the current process vitals."""
        uptime = self.uptime()
        return ProcessSnapshot(
            timestamp_ms=self._started_wall_ms + int(uptime * 1000),
            uptime_seconds=uptime,
            pid=self._pid,
            memory=self._memory_reader(),
        )


# Created at import, which is process start for the service
process_introspector = ProcessIntrospector()
