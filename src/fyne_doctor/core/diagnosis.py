"""
Diagnosis of checked dependencies.

Two independent verdicts are computed from the same checked list: overall
readiness (are all required dependencies installed?) and a small set of
known-issue rules. Neither mutates its input.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field

from ..config import MIN_WASM_GO_VERSION
from .constants import (
    ANDROID_NDK,
    ANDROID_SDK,
    GO,
    GPU_ACCELERATION,
    SESSION_TYPE_VAR,
    WAYLAND_SESSION,
    WAYLAND_SUPPORT,
)
from .types import CheckedDependency, Platform


@dataclass(frozen=True)
class Diagnosis:
    """Readiness verdict plus known-issue findings."""

    success: bool
    missing: list[str] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    # Finding message -> related upstream issue
    links: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "missing": list(self.missing),
            "issues": list(self.issues),
            "warnings": list(self.warnings),
            "links": dict(self.links),
        }


def evaluate_readiness(checked: Sequence[CheckedDependency]) -> tuple[bool, list[str]]:
    """SUCCESS iff every required, applicable dependency is installed.

    Returns:
        Tuple[bool, List[str]]: (success, missing). `missing` lists the
        offending names in catalog order.
    """
    missing = [d.name for d in checked if d.applicable and not d.optional and not d.installed]
    return (len(missing) == 0, missing)


# ------------------------------
# Known-issue rules
# ------------------------------

@dataclass(frozen=True)
class RuleContext:
    """Read-only inputs shared by the issue rules.

    `probed` holds the names that were actually checked on this host. A rule
    about something being absent only fires for names in `probed`, so a
    category filter never turns an unchecked entry into a finding.
    """

    checked: Sequence[CheckedDependency]
    host: Platform
    environ: Mapping[str, str]
    min_go_version: str
    probed: frozenset[str] = frozenset()

    def installed(self, name: str) -> bool:
        return any(d.name == name and d.installed for d in self.checked)

    def missing(self, name: str) -> bool:
        """Checked in this run but not installed."""
        return name in self.probed and not self.installed(name)

    def version_of(self, name: str) -> str:
        for d in self.checked:
            if d.name == name and d.installed:
                return d.version
        return ""

    def link_of(self, name: str) -> str | None:
        for d in self.checked:
            if d.name == name:
                return d.dependency.issue_link
        return None


@dataclass(frozen=True)
class Finding:
    """Message produced by a rule. Issues are problems, the rest are warnings."""

    message: str
    is_issue: bool = False
    link: str | None = None


def wayland_rule(ctx: RuleContext) -> Finding | None:
    if ctx.environ.get(SESSION_TYPE_VAR, "") != WAYLAND_SESSION:
        return None
    if not ctx.missing(WAYLAND_SUPPORT):
        return None
    return Finding(
        "Running on Wayland but Wayland support may be incomplete",
        is_issue=True,
        link=ctx.link_of(WAYLAND_SUPPORT),
    )


def android_ndk_rule(ctx: RuleContext) -> Finding | None:
    if ctx.installed(ANDROID_SDK) and ctx.missing(ANDROID_NDK):
        return Finding("Android SDK found but NDK missing - mobile builds may fail")
    return None


def gpu_rule(ctx: RuleContext) -> Finding | None:
    if ctx.host is Platform.LINUX and ctx.missing(GPU_ACCELERATION):
        return Finding("GPU acceleration not available - performance may be reduced")
    return None


def go_version_rule(ctx: RuleContext) -> Finding | None:
    version = ctx.version_of(GO)
    if version and ctx.min_go_version not in version:
        minimum = ctx.min_go_version.removeprefix("go")
        return Finding(f"Go version < {minimum} - WebAssembly builds not supported")
    return None


# Display order of the findings
RULES: tuple[Callable[[RuleContext], Finding | None], ...] = (
    wayland_rule,
    android_ndk_rule,
    gpu_rule,
    go_version_rule,
)


def find_issues(
    checked: Sequence[CheckedDependency],
    host: Platform,
    environ: Mapping[str, str] | None = None,
    *,
    min_go_version: str = MIN_WASM_GO_VERSION,
) -> list[Finding]:
    """Apply the known-issue rules in display order.

    Args:
        checked: Checked dependencies of this run
        host: Platform the doctor runs on
        environ: Environment to read the session type from (defaults to os.environ)
        min_go_version: Substring the Go version must contain

    Returns:
        The findings of the rules that fired.
    """
    ctx = RuleContext(
        checked=checked,
        host=host,
        environ=environ if environ is not None else os.environ,
        min_go_version=min_go_version,
        probed=frozenset(d.name for d in checked if d.applicable),
    )
    return [finding for finding in (rule(ctx) for rule in RULES) if finding is not None]


def detect_issues(
    checked: Sequence[CheckedDependency],
    host: Platform,
    environ: Mapping[str, str] | None = None,
    *,
    min_go_version: str = MIN_WASM_GO_VERSION,
) -> tuple[list[str], list[str]]:
    """Known-issue messages split into (issues, warnings)."""
    findings = find_issues(checked, host, environ, min_go_version=min_go_version)
    issues = [f.message for f in findings if f.is_issue]
    warnings = [f.message for f in findings if not f.is_issue]
    return issues, warnings


def diagnose(
    checked: Sequence[CheckedDependency],
    host: Platform,
    environ: Mapping[str, str] | None = None,
    *,
    min_go_version: str = MIN_WASM_GO_VERSION,
) -> Diagnosis:
    """Readiness verdict and known-issue findings in one value."""
    success, missing = evaluate_readiness(checked)
    findings = find_issues(checked, host, environ, min_go_version=min_go_version)
    return Diagnosis(
        success=success,
        missing=missing,
        issues=[f.message for f in findings if f.is_issue],
        warnings=[f.message for f in findings if not f.is_issue],
        links={f.message: f.link for f in findings if f.link},
    )
