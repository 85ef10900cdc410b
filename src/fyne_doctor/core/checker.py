"""
Dependency checking for fyne-doctor.

This module turns catalog entries into checked results by running each
entry's probe. Every failure mode (timeout, execution failure, missing
binary, foreign platform) ends up in the result's status; nothing raises.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Mapping

from ..config import DEFAULT_TIMEOUT_SEC
from ..output.logger import SimpleLogger
from ..utils.subprocess import CommandResult, Outcome, resolve_executable, run_command
from .constants import FOUND_VERSION
from .types import CheckedDependency, Category, Dependency, Platform, Probe, ProbeKind, Status

Runner = Callable[[str, float], CommandResult]
Resolver = Callable[[str], "str | None"]


class DependencyChecker:
    """Runs dependency probes for one host.

    Args:
        host: Platform the doctor runs on
        timeout: Limit in seconds for every probe subprocess
        environ: Environment read by env-var probes (defaults to os.environ)
        runner: Command runner, `run_command` unless replaced in tests
        resolver: PATH lookup for simple probes, `resolve_executable` by default
        logger: Receives one debug line per probe
    """

    def __init__(
        self,
        host: Platform,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        *,
        environ: Mapping[str, str] | None = None,
        runner: Runner = run_command,
        resolver: Resolver = resolve_executable,
        logger: SimpleLogger | None = None,
    ):
        self.host = host
        self.timeout = timeout
        self.environ = environ if environ is not None else os.environ
        self.runner = runner
        self.resolver = resolver
        self.logger = logger or SimpleLogger()

    def check(self, dep: Dependency) -> CheckedDependency:
        """Probe `dep` and return its status and detected version."""
        if not dep.applies_to(self.host):
            self.logger.debug(f"{dep.name}: skipped, only for {dep.platform.value}")
            return CheckedDependency.not_applicable(dep)

        status, version = self._probe(dep.probe)
        self.logger.debug(f"{dep.name}: {status.value} ({dep.probe.kind.value}: {dep.probe.command})")
        return CheckedDependency(dep, status, version)

    def check_all(self, deps: Iterable[Dependency]) -> list[CheckedDependency]:
        """Check `deps` one after another, keeping their order."""
        return [self.check(dep) for dep in deps]

    # ------------------------------
    # Probe strategies
    # ------------------------------

    def _probe(self, probe: Probe) -> tuple[Status, str]:
        handlers = {
            ProbeKind.ENV_VAR: self._check_env_var,
            ProbeKind.PACKAGE_EXISTS: self._check_exists,
            ProbeKind.PATH_SEARCH: self._check_exists,
            ProbeKind.COMPOUND_SHELL: self._check_compound,
            ProbeKind.COMMAND_OUTPUT: self._check_command_output,
        }
        return handlers[probe.kind](probe)

    def _run(self, command: str) -> CommandResult:
        result = self.runner(command, self.timeout)
        if result.outcome is Outcome.TIMED_OUT:
            self.logger.debug(f"timed out after {self.timeout}s: {command}")
        return result

    def _check_env_var(self, probe: Probe) -> tuple[Status, str]:
        value = self.environ.get(probe.variable, "")
        if not value:
            return Status.MISSING, ""
        return Status.INSTALLED, value

    def _check_exists(self, probe: Probe) -> tuple[Status, str]:
        """Exit status is the answer: zero means present."""
        result = self._run(probe.command)
        if result.outcome is Outcome.TIMED_OUT:
            return Status.ERROR, ""
        if result.outcome is Outcome.SUCCESS:
            return Status.INSTALLED, FOUND_VERSION
        return Status.MISSING, ""

    def _check_compound(self, probe: Probe) -> tuple[Status, str]:
        result = self._run(probe.command)
        if result.outcome is not Outcome.SUCCESS:
            return Status.ERROR, ""
        if not result.output:
            return Status.MISSING, ""
        return Status.INSTALLED, result.output

    def _check_command_output(self, probe: Probe) -> tuple[Status, str]:
        if self.resolver(probe.command) is None:
            return Status.MISSING, ""
        result = self._run(probe.command)
        if result.outcome is not Outcome.SUCCESS:
            return Status.ERROR, ""
        return Status.INSTALLED, result.output


def check_command(
    command: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_SEC,
    environ: Mapping[str, str] | None = None,
) -> tuple[Status, str]:
    """Check an ad-hoc command line, inferring its probe kind from the text.

    Returns:
        Tuple[Status, str]: (status, version). The command is treated as
        applicable on every platform.
    """
    dep = Dependency(name=command, probe=Probe.infer(command), description=command, category=Category.CORE)
    checker = DependencyChecker(Platform.ALL, timeout, environ=environ)
    result = checker.check(dep)
    return result.status, result.version
