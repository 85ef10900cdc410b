"""Centralized constants for the application."""

# Probe markers
ENV_PROBE_MARKER = "echo $"

# Versions reported for special statuses
FOUND_VERSION = "Found"
NOT_APPLICABLE_VERSION = "Not applicable"

# Dependency names referenced by the issue rules
GO = "Go"
FYNE_CLI = "Fyne CLI"
FYNE_CROSS = "Fyne-cross"
WAYLAND_SUPPORT = "Wayland Support"
ANDROID_SDK = "Android SDK"
ANDROID_NDK = "Android NDK"
GPU_ACCELERATION = "GPU Acceleration"
DISPLAY_SERVER = "Display Server"

# Environment variables
ANDROID_HOME_VAR = "ANDROID_HOME"
ANDROID_NDK_HOME_VAR = "ANDROID_NDK_HOME"
SESSION_TYPE_VAR = "XDG_SESSION_TYPE"
WAYLAND_SESSION = "wayland"

# Links
WAYLAND_ISSUE_URL = "https://github.com/fyne-io/fyne/issues/5908"
FYNE_ISSUES_URL = "https://github.com/fyne-io/fyne/issues"

# Report layout
ELLIPSIS = "..."
