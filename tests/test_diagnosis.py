from conftest import checked
from fyne_doctor.core.catalog import build_catalog
from fyne_doctor.core.diagnosis import (
    Diagnosis,
    detect_issues,
    diagnose,
    evaluate_readiness,
)
from fyne_doctor.core.types import Category, CheckedDependency, Platform, Status

GPU_WARNING = "GPU acceleration not available - performance may be reduced"
NDK_WARNING = "Android SDK found but NDK missing - mobile builds may fail"
WAYLAND_ISSUE = "Running on Wayland but Wayland support may be incomplete"
GO_WARNING = "Go version < 1.16 - WebAssembly builds not supported"


def gpu_ok() -> CheckedDependency:
    return checked("GPU Acceleration", Status.INSTALLED, "direct rendering: Yes", optional=True,
                   platform=Platform.LINUX, category=Category.PERFORMANCE)


# ------------------------------
# Readiness
# ------------------------------


def test_all_required_installed_is_success():
    deps = [
        checked("Go", Status.INSTALLED, "go version go1.21.5 linux/amd64"),
        checked("Fyne CLI", Status.INSTALLED, "fyne cli version v2.4.1"),
        checked("Fyne-cross", Status.MISSING, optional=True),
    ]
    assert evaluate_readiness(deps) == (True, [])


def test_optional_and_not_applicable_entries_are_ignored():
    deps = [
        checked("Go", Status.INSTALLED, "go1.21.5"),
        checked("Node.js", Status.ERROR, optional=True),
        checked("MSYS2", Status.NOT_APPLICABLE, "Not applicable", platform=Platform.WINDOWS),
    ]
    assert evaluate_readiness(deps) == (True, [])


def test_missing_required_names_keep_order():
    deps = [
        checked("Go", Status.MISSING),
        checked("Fyne CLI", Status.INSTALLED, "v2.4.1"),
        checked("C Compiler", Status.ERROR, platform=Platform.LINUX),
        checked("Mesa GL", Status.MISSING, platform=Platform.LINUX),
    ]
    assert evaluate_readiness(deps) == (False, ["Go", "C Compiler", "Mesa GL"])


def test_empty_run_is_success():
    assert evaluate_readiness([]) == (True, [])


# ------------------------------
# Issue rules
# ------------------------------


def test_wayland_session_without_support_is_an_issue():
    deps = [checked("Wayland Support", Status.MISSING, optional=True, platform=Platform.LINUX), gpu_ok()]
    issues, warnings = detect_issues(deps, Platform.LINUX, {"XDG_SESSION_TYPE": "wayland"})
    assert issues == [WAYLAND_ISSUE]
    assert warnings == []


def test_wayland_session_with_support_is_fine():
    deps = [checked("Wayland Support", Status.INSTALLED, "Found", optional=True), gpu_ok()]
    assert detect_issues(deps, Platform.LINUX, {"XDG_SESSION_TYPE": "wayland"}) == ([], [])


def test_x11_session_has_no_wayland_issue():
    deps = [checked("Wayland Support", Status.MISSING, optional=True), gpu_ok()]
    assert detect_issues(deps, Platform.LINUX, {"XDG_SESSION_TYPE": "x11"}) == ([], [])


def test_sdk_without_ndk_warns():
    deps = [
        checked("Android SDK", Status.INSTALLED, "/opt/android", optional=True),
        checked("Android NDK", Status.MISSING, optional=True),
    ]
    assert detect_issues(deps, Platform.MACOS, {}) == ([], [NDK_WARNING])


def test_sdk_with_ndk_is_fine():
    deps = [
        checked("Android SDK", Status.INSTALLED, "/opt/android", optional=True),
        checked("Android NDK", Status.INSTALLED, "/opt/android/ndk", optional=True),
    ]
    assert detect_issues(deps, Platform.MACOS, {}) == ([], [])


def test_gpu_warning_only_on_linux():
    missing_gpu = [checked("GPU Acceleration", Status.ERROR, optional=True, platform=Platform.LINUX)]
    assert detect_issues(missing_gpu, Platform.LINUX, {}) == ([], [GPU_WARNING])
    assert detect_issues(missing_gpu, Platform.WINDOWS, {}) == ([], [])
    # Not checked in this run at all
    assert detect_issues([], Platform.LINUX, {}) == ([], [])


def test_old_go_warns():
    deps = [checked("Go", Status.INSTALLED, "go version go1.15.2 linux/amd64")]
    assert detect_issues(deps, Platform.MACOS, {}) == ([], [GO_WARNING])


def test_go_rule_is_a_substring_match():
    # Newer releases that do not contain "go1.16" are flagged too
    newer = [checked("Go", Status.INSTALLED, "go version go1.21.5 linux/amd64")]
    assert detect_issues(newer, Platform.MACOS, {}) == ([], [GO_WARNING])

    exact = [checked("Go", Status.INSTALLED, "go version go1.16.3 darwin/arm64")]
    assert detect_issues(exact, Platform.MACOS, {}) == ([], [])


def test_go_rule_skipped_when_go_missing():
    deps = [checked("Go", Status.MISSING)]
    assert detect_issues(deps, Platform.MACOS, {}) == ([], [])


def test_go_rule_minimum_is_configurable():
    deps = [checked("Go", Status.INSTALLED, "go version go1.21.5 linux/amd64")]
    assert detect_issues(deps, Platform.MACOS, {}, min_go_version="go1.21") == ([], [])
    _, warnings = detect_issues(deps, Platform.MACOS, {}, min_go_version="go1.22")
    assert warnings == ["Go version < 1.22 - WebAssembly builds not supported"]


def test_warnings_follow_rule_order():
    deps = [
        checked("Wayland Support", Status.MISSING, optional=True, platform=Platform.LINUX),
        checked("GPU Acceleration", Status.MISSING, optional=True, platform=Platform.LINUX),
        checked("Android SDK", Status.INSTALLED, "/opt/android", optional=True),
        checked("Android NDK", Status.MISSING, optional=True),
        checked("Go", Status.INSTALLED, "go version go1.15 linux/amd64"),
    ]
    issues, warnings = detect_issues(deps, Platform.LINUX, {"XDG_SESSION_TYPE": "wayland"})
    assert issues == [WAYLAND_ISSUE]
    assert warnings == [NDK_WARNING, GPU_WARNING, GO_WARNING]


def test_detection_does_not_mutate_input():
    deps = [checked("Go", Status.MISSING), gpu_ok()]
    before = list(deps)
    diagnose(deps, Platform.LINUX, {})
    assert deps == before


# ------------------------------
# Diagnosis
# ------------------------------


def test_diagnose_bundles_both_verdicts():
    deps = [checked("Go", Status.MISSING), checked("Fyne CLI", Status.INSTALLED, "v2.4.1")]
    diagnosis = diagnose(deps, Platform.MACOS, {})
    assert diagnosis == Diagnosis(success=False, missing=["Go"], issues=[], warnings=[])
    assert diagnosis.to_dict() == {
        "success": False,
        "missing": ["Go"],
        "issues": [],
        "warnings": [],
        "links": {},
    }


def test_unchecked_entries_raise_no_findings():
    # Only the mobile group was checked: Wayland and GPU were never looked at
    deps = [
        checked("Android SDK", Status.MISSING, optional=True, category=Category.MOBILE),
        checked("Android NDK", Status.MISSING, optional=True, category=Category.MOBILE),
    ]
    assert detect_issues(deps, Platform.LINUX, {"XDG_SESSION_TYPE": "wayland"}) == ([], [])


def test_sdk_without_checked_ndk_is_fine():
    deps = [checked("Android SDK", Status.INSTALLED, "/opt/android", optional=True)]
    assert detect_issues(deps, Platform.MACOS, {}) == ([], [])


def test_not_applicable_entries_raise_no_findings():
    deps = [checked("GPU Acceleration", Status.NOT_APPLICABLE, "Not applicable", platform=Platform.LINUX)]
    assert detect_issues(deps, Platform.LINUX, {}) == ([], [])


def test_wayland_finding_carries_the_issue_link():
    wayland = [d for d in build_catalog(Platform.LINUX) if d.name == "Wayland Support"][0]
    deps = [CheckedDependency(wayland, Status.MISSING), gpu_ok()]
    diagnosis = diagnose(deps, Platform.LINUX, {"XDG_SESSION_TYPE": "wayland"})
    assert diagnosis.issues == [WAYLAND_ISSUE]
    assert diagnosis.links == {WAYLAND_ISSUE: "https://github.com/fyne-io/fyne/issues/5908"}
    assert diagnosis.to_dict()["links"] == diagnosis.links
