"""
Report rendering for fyne-doctor.

Tables are built with Rich and rendered to plain text through an in-memory
console without colour, so the same run always yields the same text.
"""

from __future__ import annotations

import io
import json
from collections.abc import Sequence
from typing import TYPE_CHECKING

from rich import box
from rich.console import Console, RenderableType
from rich.table import Table

from ..config import CONSOLE_WIDTH, DESCRIPTION_WIDTH, VERSION_WIDTH
from ..core.constants import ELLIPSIS, FYNE_ISSUES_URL
from ..core.diagnosis import Diagnosis
from ..core.tips import KNOWN_ISSUES, installation_tips
from ..core.types import Category, CheckedDependency, Platform
from ..utils.system import SystemInfo
from ..utils.version import short_version, truncate

if TYPE_CHECKING:
    from ..core.doctor import DoctorRun


def _to_text(renderables: Sequence[RenderableType], width: int) -> str:
    buf = io.StringIO()
    console = Console(
        file=buf,
        width=width,
        color_system=None,
        force_terminal=False,
        highlight=False,
        emoji=False,
    )
    for renderable in renderables:
        console.print(renderable)
    return buf.getvalue()


def group_by_category(checked: Sequence[CheckedDependency]) -> dict[Category, list[CheckedDependency]]:
    """Applicable entries grouped by category, in display order.

    Categories without applicable entries are left out; catalog order is kept
    inside each group.
    """
    groups: dict[Category, list[CheckedDependency]] = {}
    for category in Category:
        members = [d for d in checked if d.category is category and d.applicable]
        if members:
            groups[category] = members
    return groups


def dependency_table(
    deps: Sequence[CheckedDependency],
    *,
    description_width: int = DESCRIPTION_WIDTH,
    version_width: int = VERSION_WIDTH,
) -> Table:
    """Build the table for one category."""
    table = Table(box=box.SQUARE, show_header=True)
    table.add_column("Dependency", min_width=27, no_wrap=True)
    table.add_column("Optional", min_width=10, no_wrap=True)
    table.add_column("Status", min_width=10, no_wrap=True)
    table.add_column("Version", min_width=version_width, max_width=version_width, no_wrap=True)
    table.add_column("Description", min_width=description_width, no_wrap=True)

    for d in deps:
        table.add_row(
            d.name,
            "*" if d.optional else "",
            d.status.value,
            short_version(d.version, version_width),
            truncate(d.dependency.description, description_width, ELLIPSIS),
        )
    return table


def render_report(
    checked: Sequence[CheckedDependency],
    *,
    description_width: int = DESCRIPTION_WIDTH,
    version_width: int = VERSION_WIDTH,
    width: int = CONSOLE_WIDTH,
) -> str:
    """Render one titled table per non-empty category.

    Args:
        checked: Checked dependencies in catalog order
        description_width: Longer descriptions are cut and end with '...'
        version_width: Width of the version column
        width: Console width used for rendering

    Returns:
        Report text; empty when no applicable dependency was checked.
    """
    parts: list[str] = []
    for category, members in group_by_category(checked).items():
        table = dependency_table(members, description_width=description_width, version_width=version_width)
        parts.append(f"\n## {category.display_name}\n")
        parts.append(_to_text([table], width))
    return "".join(parts)


def render_system_info(info: SystemInfo, width: int = CONSOLE_WIDTH) -> str:
    """Render the '# System' block."""
    table = Table(box=box.SQUARE, show_header=False)
    table.add_column("Key", min_width=12)
    table.add_column("Value")
    for key, value in info.rows():
        table.add_row(key, value)
    return "# System\n" + _to_text([table], width)


def render_diagnosis(diagnosis: Diagnosis, host: Platform) -> str:
    """Render the verdict, tips on failure, the findings and the upstream issue summary."""
    lines = ["", "# Diagnosis"]
    if diagnosis.success:
        lines.append(" SUCCESS  Your system is ready for Fyne development!")
    else:
        lines.append(" FAILURE  Some required dependencies are missing or not properly installed.")
        lines.append(f"Missing dependencies: {', '.join(diagnosis.missing)}")
        lines.append("")
        lines.append("# Installation Tips")
        lines.extend(installation_tips(host))

    lines.append("")
    lines.append("# Common Issues Check")
    if not diagnosis.issues and not diagnosis.warnings:
        lines.append("No common issues detected!")
    if diagnosis.issues:
        lines.append("")
        lines.append("Issues found:")
        for issue in diagnosis.issues:
            lines.append(f"   • {issue}")
            if issue in diagnosis.links:
                lines.append(f"     Related issue: {diagnosis.links[issue]}")
    if diagnosis.warnings:
        lines.append("")
        lines.append("Warnings:")
        lines.extend(f"   • {warning}" for warning in diagnosis.warnings)
    lines.append("")
    lines.append("# GitHub Issues Summary")
    lines.append("Based on recent Fyne GitHub Issues, common problems include:")
    lines.extend(f"• {known}" for known in KNOWN_ISSUES)
    lines.append("")
    lines.append(f"For more details, visit: {FYNE_ISSUES_URL}")
    return "\n".join(lines) + "\n"


def render_text(run: DoctorRun, width: int = CONSOLE_WIDTH) -> str:
    """Full human-readable output of a doctor run."""
    parts = [
        "          Fyne Doctor\n\n",
        f"# Fyne\nVersion | {run.fyne_version}\n\n",
        render_system_info(run.system, width),
        render_report(run.checked, width=width),
        render_diagnosis(run.diagnosis, run.host),
    ]
    return "".join(parts)


def render_json(run: DoctorRun) -> str:
    """JSON document of a doctor run."""
    payload = {
        "fyne_version": run.fyne_version,
        "host": run.host.value,
        "system": dict(run.system.rows()),
        "dependencies": [d.to_dict() for d in run.checked],
        "diagnosis": run.diagnosis.to_dict(),
    }
    return json.dumps(payload, indent=2) + "\n"
