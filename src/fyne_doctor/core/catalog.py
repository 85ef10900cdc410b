"""
Dependency catalog for fyne-doctor.

This module defines every tool and library the doctor looks for, grouped the
way the report shows them. The catalog is static data: building it never
touches the system.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .constants import (
    ANDROID_HOME_VAR,
    ANDROID_NDK,
    ANDROID_NDK_HOME_VAR,
    ANDROID_SDK,
    DISPLAY_SERVER,
    ENV_PROBE_MARKER,
    FYNE_CLI,
    FYNE_CROSS,
    GO,
    GPU_ACCELERATION,
    SESSION_TYPE_VAR,
    WAYLAND_ISSUE_URL,
    WAYLAND_SUPPORT,
)
from ..utils.system import host_platform
from .types import Category, Dependency, Platform, Probe, ProbeKind, Severity


def _command(command: str) -> Probe:
    return Probe(ProbeKind.COMMAND_OUTPUT, command)


def _env(variable: str) -> Probe:
    return Probe(ProbeKind.ENV_VAR, f"{ENV_PROBE_MARKER}{variable}")


def _package(name: str) -> Probe:
    return Probe(ProbeKind.PACKAGE_EXISTS, f"pkg-config --exists {name} && echo 'Found'")


def _compound(command: str) -> Probe:
    return Probe(ProbeKind.COMPOUND_SHELL, command)


# =============================================================================
# CROSS-PLATFORM GROUPS
# =============================================================================

def core_dependencies() -> list[Dependency]:
    """Toolkit runtime, packaging CLI and the optional cross-build helper."""
    return [
        Dependency(
            name=GO,
            probe=_command("go version"),
            description="Go programming language (minimum version 1.12)",
            severity=Severity.CRITICAL,
        ),
        Dependency(
            name=FYNE_CLI,
            probe=_command("fyne version"),
            description="Fyne command line tools",
            severity=Severity.CRITICAL,
        ),
        Dependency(
            name=FYNE_CROSS,
            probe=_command("fyne-cross --version"),
            description="Cross-platform build tool for Fyne",
            optional=True,
        ),
    ]


def mobile_dependencies() -> list[Dependency]:
    return [
        Dependency(
            name=ANDROID_SDK,
            probe=_env(ANDROID_HOME_VAR),
            description="Android SDK for mobile development",
            optional=True,
            category=Category.MOBILE,
        ),
        Dependency(
            name=ANDROID_NDK,
            probe=_env(ANDROID_NDK_HOME_VAR),
            description="Android NDK for mobile development",
            optional=True,
            category=Category.MOBILE,
        ),
        Dependency(
            name="Android Studio",
            probe=Probe(ProbeKind.PATH_SEARCH, "which studio || which android-studio"),
            description="Android Studio IDE (recommended for mobile dev)",
            optional=True,
            category=Category.MOBILE,
        ),
        Dependency(
            name="iOS Simulator",
            probe=_command("xcrun simctl list devices"),
            description="iOS Simulator for iOS development",
            optional=True,
            platform=Platform.MACOS,
            category=Category.MOBILE,
        ),
    ]


def web_dependencies() -> list[Dependency]:
    return [
        Dependency(
            name="WebAssembly Support",
            probe=_compound(
                "go version | grep -q 'go1.16' && echo 'Supported' || echo 'Requires Go 1.16+'"
            ),
            description="WebAssembly support for web builds",
            optional=True,
            category=Category.WEB,
        ),
        Dependency(
            name="Node.js",
            probe=_command("node --version"),
            description="Node.js for web development tools",
            optional=True,
            category=Category.WEB,
        ),
    ]


def performance_dependencies() -> list[Dependency]:
    return [
        Dependency(
            name=GPU_ACCELERATION,
            probe=_compound("glxinfo | grep 'direct rendering' || echo 'Not available'"),
            description="GPU acceleration support (Linux)",
            optional=True,
            platform=Platform.LINUX,
            category=Category.PERFORMANCE,
            severity=Severity.WARNING,
        ),
    ]


def compatibility_dependencies() -> list[Dependency]:
    return [
        Dependency(
            name=DISPLAY_SERVER,
            probe=_env(SESSION_TYPE_VAR),
            description="Current display server (X11/Wayland)",
            optional=True,
            platform=Platform.LINUX,
            category=Category.COMPATIBILITY,
        ),
    ]


# =============================================================================
# DESKTOP FAMILY EXTRAS
# =============================================================================

def windows_extras() -> list[Dependency]:
    """MSYS2 / MinGW-w64 C toolchain."""
    return [
        Dependency(
            name="C Compiler (MSYS2)",
            probe=_command("gcc --version"),
            description="C compiler for Windows (MSYS2/MingW-w64 recommended)",
            platform=Platform.WINDOWS,
            severity=Severity.CRITICAL,
        ),
        Dependency(
            name="MSYS2",
            probe=_command("pacman --version"),
            description="MSYS2 package manager",
            platform=Platform.WINDOWS,
            severity=Severity.CRITICAL,
        ),
    ]


def macos_extras() -> list[Dependency]:
    """Xcode command line tools and clang."""
    return [
        Dependency(
            name="Xcode CLI Tools",
            probe=_command("xcode-select -p"),
            description="Xcode command line tools",
            platform=Platform.MACOS,
            severity=Severity.CRITICAL,
        ),
        Dependency(
            name="C Compiler",
            probe=_command("clang --version"),
            description="Clang compiler (comes with Xcode)",
            platform=Platform.MACOS,
            severity=Severity.CRITICAL,
        ),
    ]


def linux_extras() -> list[Dependency]:
    """GCC, pkg-config and the OpenGL/X11/Wayland development libraries."""
    return [
        Dependency(
            name="C Compiler",
            probe=_command("gcc --version"),
            description="GCC compiler",
            platform=Platform.LINUX,
            severity=Severity.CRITICAL,
        ),
        Dependency(
            name="pkg-config",
            probe=_command("pkg-config --version"),
            description="Package configuration tool",
            platform=Platform.LINUX,
            severity=Severity.CRITICAL,
        ),
        Dependency(
            name="Mesa GL",
            probe=_package("gl"),
            description="Mesa OpenGL library",
            platform=Platform.LINUX,
            severity=Severity.CRITICAL,
        ),
        Dependency(
            name="X11 Development",
            probe=_package("x11"),
            description="X11 development libraries",
            platform=Platform.LINUX,
            severity=Severity.CRITICAL,
        ),
        Dependency(
            name=WAYLAND_SUPPORT,
            probe=_package("wayland-client"),
            description="Wayland client library (for Wayland support)",
            optional=True,
            platform=Platform.LINUX,
            category=Category.COMPATIBILITY,
            severity=Severity.WARNING,
            issue_link=WAYLAND_ISSUE_URL,
        ),
    ]


PLATFORM_EXTRAS: dict[Platform, Callable[[], list[Dependency]]] = {
    Platform.WINDOWS: windows_extras,
    Platform.MACOS: macos_extras,
    Platform.LINUX: linux_extras,
}

# Appended after the OS extras, in this order
SHARED_GROUPS: tuple[Callable[[], list[Dependency]], ...] = (
    mobile_dependencies,
    web_dependencies,
    performance_dependencies,
    compatibility_dependencies,
)


# =============================================================================
# CATALOG
# =============================================================================

def build_catalog(host: Platform) -> list[Dependency]:
    """Return the ordered dependency list for `host`.

    Args:
        host: Platform the doctor runs on

    Returns:
        Core entries, then the host's desktop extras (none for unknown
        hosts), then the mobile, web, performance and compatibility groups.
    """
    deps = core_dependencies()
    extras = PLATFORM_EXTRAS.get(host)
    if extras is not None:
        deps.extend(extras())
    for group in SHARED_GROUPS:
        deps.extend(group())
    return deps


def get_dependencies() -> list[Dependency]:
    """Catalog for the machine the doctor runs on."""
    return build_catalog(host_platform())


def filter_categories(deps: Iterable[Dependency], categories: Iterable[Category]) -> list[Dependency]:
    """Keep the dependencies in `categories`, preserving order. Empty keeps all."""
    wanted = set(categories)
    if not wanted:
        return list(deps)
    return [dep for dep in deps if dep.category in wanted]
