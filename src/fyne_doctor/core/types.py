"""
Core data types for fyne-doctor.

This module contains the enums and immutable records shared by the catalog,
the checker, the report and the diagnosis.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .constants import ENV_PROBE_MARKER, NOT_APPLICABLE_VERSION


class Platform(str, Enum):
    """Platform a dependency applies to."""

    ALL = "all"
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    ANDROID = "android"
    IOS = "ios"


class Category(str, Enum):
    """Report category. Declaration order is the display order."""

    CORE = "core"
    MOBILE = "mobile"
    WEB = "web"
    PERFORMANCE = "performance"
    COMPATIBILITY = "compatibility"

    @property
    def display_name(self) -> str:
        return _CATEGORY_NAMES[self]


_CATEGORY_NAMES = {
    Category.CORE: "Core Dependencies",
    Category.MOBILE: "Mobile Development",
    Category.WEB: "Web Development",
    Category.PERFORMANCE: "Performance",
    Category.COMPATIBILITY: "Compatibility",
}


class Severity(str, Enum):
    """How serious a missing dependency is. Informational only."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class Status(str, Enum):
    """Outcome of checking one dependency."""

    INSTALLED = "Installed"
    MISSING = "Missing"
    ERROR = "Error"
    NOT_APPLICABLE = "N/A"


class ProbeKind(str, Enum):
    """Detection strategy of a probe."""

    ENV_VAR = "env_var"
    PACKAGE_EXISTS = "package_exists"
    PATH_SEARCH = "path_search"
    COMPOUND_SHELL = "compound_shell"
    COMMAND_OUTPUT = "command_output"


@dataclass(frozen=True)
class Probe:
    """A detection strategy together with its command line."""

    kind: ProbeKind
    command: str

    @property
    def variable(self) -> str:
        """Environment variable name for ENV_VAR probes ("echo $NAME" -> "NAME")."""
        if self.kind is not ProbeKind.ENV_VAR:
            raise ValueError(f"Probe {self.command!r} is not an environment probe")
        return self.command[len(ENV_PROBE_MARKER):].strip()

    @classmethod
    def infer(cls, command: str) -> Probe:
        """Derive the probe kind from raw command text.

        Precedence matters: "pkg-config --exists gl && echo 'Found'" is a
        package probe even though it also contains "&&".
        """
        if command.startswith(ENV_PROBE_MARKER):
            return cls(ProbeKind.ENV_VAR, command)
        if "pkg-config --exists" in command:
            return cls(ProbeKind.PACKAGE_EXISTS, command)
        if command.startswith("which "):
            return cls(ProbeKind.PATH_SEARCH, command)
        if "||" in command or "&&" in command:
            return cls(ProbeKind.COMPOUND_SHELL, command)
        return cls(ProbeKind.COMMAND_OUTPUT, command)


@dataclass(frozen=True)
class Dependency:
    """Static description of one tool or library to look for."""

    name: str
    probe: Probe
    description: str
    optional: bool = False
    platform: Platform = Platform.ALL
    category: Category = Category.CORE
    severity: Severity = Severity.INFO
    issue_link: str | None = None

    def applies_to(self, host: Platform) -> bool:
        """True when this dependency is relevant on `host`."""
        return self.platform is Platform.ALL or self.platform is host


@dataclass(frozen=True)
class CheckedDependency:
    """A dependency together with the result of probing it."""

    dependency: Dependency
    status: Status
    version: str = ""

    @classmethod
    def not_applicable(cls, dependency: Dependency) -> CheckedDependency:
        return cls(dependency, Status.NOT_APPLICABLE, NOT_APPLICABLE_VERSION)

    @property
    def name(self) -> str:
        return self.dependency.name

    @property
    def optional(self) -> bool:
        return self.dependency.optional

    @property
    def category(self) -> Category:
        return self.dependency.category

    @property
    def installed(self) -> bool:
        return self.status is Status.INSTALLED

    @property
    def applicable(self) -> bool:
        return self.status is not Status.NOT_APPLICABLE

    def to_dict(self) -> dict[str, Any]:
        """Plain-JSON view used by the --json output."""
        dep = self.dependency
        return {
            "name": dep.name,
            "command": dep.probe.command,
            "probe": dep.probe.kind.value,
            "optional": dep.optional,
            "platform": dep.platform.value,
            "category": dep.category.value,
            "severity": dep.severity.value,
            "description": dep.description,
            "issue_link": dep.issue_link,
            "status": self.status.value,
            "version": self.version,
        }
