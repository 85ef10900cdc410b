"""
Doctor run orchestration.

One run builds the catalog for the host, applies the category filter, checks
every entry in order and diagnoses the results.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from ..config import DoctorConfig, app_config
from ..output.logger import SimpleLogger
from ..utils.subprocess import run_command
from ..utils.system import SystemInfo, fyne_version, gather_system_info, host_platform
from .catalog import build_catalog, filter_categories
from .checker import DependencyChecker, Runner
from .diagnosis import Diagnosis, diagnose
from .types import CheckedDependency, Platform


@dataclass(frozen=True)
class DoctorRun:
    """Everything one doctor run found."""

    host: Platform
    fyne_version: str
    system: SystemInfo
    checked: list[CheckedDependency]
    diagnosis: Diagnosis


def run_doctor(
    config: DoctorConfig,
    logger: SimpleLogger,
    *,
    host: Platform | None = None,
    environ: Mapping[str, str] | None = None,
    runner: Runner = run_command,
    system_info: Callable[[], SystemInfo] = gather_system_info,
    toolkit_version: Callable[[float], str] = fyne_version,
) -> DoctorRun:
    """Check the development environment.

    Args:
        config: Run configuration (timeout, category filter, ...)
        logger: Progress and debug output
        host: Platform to check for, the running OS by default
        environ: Environment for env-var probes and the session type
        runner: Command runner used by the probes
        system_info: Provider of the system information block
        toolkit_version: Provider of the installed fyne CLI version

    Returns:
        DoctorRun with the checked dependencies in catalog order.
    """
    host = host if host is not None else host_platform()
    environ = environ if environ is not None else os.environ

    deps = filter_categories(build_catalog(host), config.categories)
    logger.debug(f"Host platform: {host.value}; {len(deps)} dependencies to check")

    checker = DependencyChecker(host, config.timeout, environ=environ, runner=runner, logger=logger)
    checked = checker.check_all(deps)

    diagnosis = diagnose(checked, host, environ, min_go_version=app_config.probe.min_wasm_go_version)
    if diagnosis.success:
        logger.debug("All required dependencies are installed")
    else:
        logger.debug(f"Missing required dependencies: {', '.join(diagnosis.missing)}")

    return DoctorRun(
        host=host,
        fyne_version=toolkit_version(config.timeout),
        system=system_info(),
        checked=checked,
        diagnosis=diagnosis,
    )
