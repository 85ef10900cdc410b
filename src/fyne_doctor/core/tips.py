"""Platform-specific installation tips shown when the diagnosis fails."""

from __future__ import annotations

from .types import Platform

FYNE_CLI_INSTALL = "go install fyne.io/fyne/v2/cmd/fyne@latest"
FYNE_CROSS_INSTALL = "go install github.com/fyne-io/fyne-cross@latest"

PLATFORM_TIPS: dict[Platform, list[str]] = {
    Platform.WINDOWS: [
        "Windows:",
        "1. Install Go from https://golang.org/dl/",
        "2. Install MSYS2 from https://www.msys2.org/",
        "3. Open MSYS2 MinGW 64-bit terminal and run:",
        "   pacman -Syu",
        "   pacman -S git mingw-w64-x86_64-toolchain",
        "4. Add C:\\msys64\\mingw64\\bin to your PATH",
        f"5. Install Fyne CLI: {FYNE_CLI_INSTALL}",
    ],
    Platform.MACOS: [
        "macOS:",
        "1. Install Go from https://golang.org/dl/",
        "2. Install Xcode from Mac App Store",
        "3. Install Xcode CLI tools: xcode-select --install",
        f"4. Install Fyne CLI: {FYNE_CLI_INSTALL}",
    ],
    Platform.LINUX: [
        "Linux:",
        "For Debian/Ubuntu:",
        "  sudo apt-get install golang gcc libgl1-mesa-dev xorg-dev pkg-config",
        "",
        "For Fedora:",
        "  sudo dnf install golang gcc libXcursor-devel libXrandr-devel mesa-libGL-devel"
        " libXi-devel libXinerama-devel libXxf86vm-devel",
        "",
        "For Arch Linux:",
        "  sudo pacman -S go xorg-server-devel libxcursor libxrandr libxinerama libxi",
        "",
        f"Then install Fyne CLI: {FYNE_CLI_INSTALL}",
    ],
}

COMMON_TIPS = [
    "For mobile development:",
    "- Android: Install Android Studio and NDK",
    "- iOS: Requires macOS with Xcode and Apple Developer account",
    "",
    "For cross-platform builds:",
    f"  {FYNE_CROSS_INSTALL}",
]


def installation_tips(host: Platform) -> list[str]:
    """Tip lines for `host`, followed by the mobile and cross-build tips."""
    lines = ["Based on your platform, here are the recommended installation steps:", ""]
    platform_lines = PLATFORM_TIPS.get(host)
    if platform_lines:
        lines.extend(platform_lines)
        lines.append("")
    lines.extend(COMMON_TIPS)
    return lines


# Recently reported upstream problems, listed after the issue check
KNOWN_ISSUES = [
    "Mobile web builds: Paste functionality issues (#5916)",
    "Android: NewMultiLineEntry scrolling problems (#5915)",
    "Mobile: Grid container performance issues (#5914)",
    "Wayland: App crashes on some systems (#5908)",
    "X11: Display wake-up crashes (#5899)",
    "Windows: UI position issues after minimize/restore (#5898)",
]
