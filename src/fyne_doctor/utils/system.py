"""Host platform detection and system information."""

from __future__ import annotations

import platform
from dataclasses import dataclass

import psutil

from ..core.types import Platform
from .subprocess import Outcome, resolve_executable, run_command

UNKNOWN = "Unknown"

_HOST_PLATFORMS = {
    "windows": Platform.WINDOWS,
    "darwin": Platform.MACOS,
    "linux": Platform.LINUX,
}


@dataclass(frozen=True)
class SystemInfo:
    """Summary of the machine the doctor runs on."""

    os: str
    architecture: str
    cpu: str
    memory_gb: float | None

    def rows(self) -> list[tuple[str, str]]:
        memory = f"{self.memory_gb:.2f} GB" if self.memory_gb is not None else UNKNOWN
        return [
            ("OS", self.os),
            ("Architecture", self.architecture),
            ("CPU", self.cpu),
            ("Memory", memory),
        ]


def host_platform(system: str | None = None) -> Platform:
    """Map the running OS (or `system`, a platform.system() value) to a Platform.

    Hosts other than the three desktop families map to Platform.ALL, which
    matches no platform-specific dependency.
    """
    name = (system if system is not None else platform.system()).lower()
    return _HOST_PLATFORMS.get(name, Platform.ALL)


def describe_cpu() -> str:
    """CPU model with its nominal frequency, e.g. 'x86_64 @ 2400MHz'."""
    model = platform.processor() or platform.machine() or UNKNOWN
    try:
        freq = psutil.cpu_freq()
    except (OSError, NotImplementedError):
        freq = None
    if freq and freq.max:
        return f"{model} @ {freq.max:.0f}MHz"
    if freq and freq.current:
        return f"{model} @ {freq.current:.0f}MHz"
    return model


def gather_system_info() -> SystemInfo:
    """Collect OS, architecture, CPU and total memory. Never raises."""
    try:
        memory_gb: float | None = psutil.virtual_memory().total / 1024 / 1024 / 1024
    except OSError:
        memory_gb = None
    return SystemInfo(
        os=platform.system().lower() or UNKNOWN,
        architecture=platform.machine() or UNKNOWN,
        cpu=describe_cpu(),
        memory_gb=memory_gb,
    )


def fyne_version(timeout: float) -> str:
    """Version line of the installed fyne CLI, 'Not installed' or 'Unknown'."""
    if resolve_executable("fyne") is None:
        return "Not installed"
    result = run_command("fyne version", timeout)
    if result.outcome is not Outcome.SUCCESS:
        return UNKNOWN
    return result.output
