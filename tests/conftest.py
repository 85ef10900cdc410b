from __future__ import annotations

import pytest

from fyne_doctor.core.types import Category, CheckedDependency, Dependency, Platform, Probe, Status
from fyne_doctor.utils.subprocess import CommandResult, Outcome


class FakeRunner:
    """Stands in for run_command; records every call."""

    def __init__(self, results: dict[str, CommandResult] | None = None, default: CommandResult | None = None):
        self.results = results or {}
        self.default = default or CommandResult("", Outcome.SUCCESS, 0)
        self.calls: list[tuple[str, float]] = []

    def __call__(self, command: str, timeout: float) -> CommandResult:
        self.calls.append((command, timeout))
        return self.results.get(command, self.default)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


def checked(
    name: str,
    status: Status,
    version: str = "",
    *,
    optional: bool = False,
    platform: Platform = Platform.ALL,
    category: Category = Category.CORE,
    description: str = "",
) -> CheckedDependency:
    dep = Dependency(
        name=name,
        probe=Probe.infer(f"{name.lower()} --version"),
        description=description or f"{name} description",
        optional=optional,
        platform=platform,
        category=category,
    )
    return CheckedDependency(dep, status, version)
