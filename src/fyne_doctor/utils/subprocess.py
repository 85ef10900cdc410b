"""Subprocess and external command utilities."""

from __future__ import annotations

import contextlib
import os
import shlex
import shutil
import signal
import subprocess
from dataclasses import dataclass
from enum import Enum

from ..config import DEFAULT_TIMEOUT_SEC

# Any of these forces the command through the host shell
SHELL_METACHARACTERS = ("&&", "||", "|", ";", "$", "`", ">", "<")

_IS_WINDOWS = os.name == "nt"


class Outcome(str, Enum):
    """How a command run ended."""

    SUCCESS = "success"
    TIMED_OUT = "timed_out"
    EXECUTION_FAILED = "execution_failed"


@dataclass(frozen=True)
class CommandResult:
    """Trimmed combined output of a command and how it ended."""

    output: str
    outcome: Outcome
    returncode: int | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS


def needs_shell(command_line: str) -> bool:
    """Return True if `command_line` relies on shell syntax."""
    return any(token in command_line for token in SHELL_METACHARACTERS)


def resolve_executable(command_line: str) -> str | None:
    """Resolve the first token of `command_line` on PATH.

    Returns:
        Absolute path of the executable, or None when it cannot be found.
    """
    try:
        argv = _split(command_line)
    except ValueError:
        return None
    if not argv:
        return None
    return shutil.which(argv[0])


def run_command(
    command_line: str,
    timeout: float = DEFAULT_TIMEOUT_SEC,
    *,
    shell: bool | None = None,
) -> CommandResult:
    """Run a command line with a hard wall-clock limit.

    The child runs in its own process group. When `timeout` elapses the whole
    group is killed and reaped before returning, so nothing is left behind.

    Args:
        command_line: Command to run
        timeout: Limit in seconds
        shell: Force (True) or forbid (False) the host shell. By default the
            shell is used only when the line contains shell metacharacters;
            otherwise the first token is resolved on PATH and run directly.

    Returns:
        CommandResult. SUCCESS only for exit code 0; a non-zero exit, an
        unresolvable executable or a spawn error is EXECUTION_FAILED.
    """
    use_shell = needs_shell(command_line) if shell is None else shell

    if use_shell:
        args: str | list[str] = command_line
    else:
        try:
            argv = _split(command_line)
        except ValueError as e:
            return CommandResult(f"Cannot parse command: {e}", Outcome.EXECUTION_FAILED)
        if not argv:
            return CommandResult("Empty command", Outcome.EXECUTION_FAILED)
        executable = shutil.which(argv[0])
        if executable is None:
            return CommandResult(f"{argv[0]}: command not found", Outcome.EXECUTION_FAILED)
        args = [executable, *argv[1:]]

    try:
        proc = subprocess.Popen(
            args,
            shell=use_shell,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            **_process_group_kwargs(),
        )
    except OSError as e:
        return CommandResult(str(e), Outcome.EXECUTION_FAILED)

    with proc:
        try:
            output, _ = proc.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            _kill_process_group(proc)
            proc.communicate()
            return CommandResult(
                f"Command timed out after {timeout} seconds",
                Outcome.TIMED_OUT,
                proc.returncode,
            )

    output = (output or "").strip()
    if proc.returncode != 0:
        return CommandResult(output, Outcome.EXECUTION_FAILED, proc.returncode)
    return CommandResult(output, Outcome.SUCCESS, proc.returncode)


def _split(command_line: str) -> list[str]:
    return shlex.split(command_line, posix=not _IS_WINDOWS)


def _process_group_kwargs() -> dict:
    if _IS_WINDOWS:
        return {"creationflags": subprocess.CREATE_NEW_PROCESS_GROUP}
    return {"start_new_session": True}


def _kill_process_group(proc: subprocess.Popen) -> None:
    """Kill `proc` and every process in its group."""
    if _IS_WINDOWS:
        with contextlib.suppress(OSError):
            subprocess.run(
                ["taskkill", "/F", "/T", "/PID", str(proc.pid)],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        with contextlib.suppress(ProcessLookupError):
            proc.kill()
        return
    # start_new_session makes the child its own group leader
    with contextlib.suppress(ProcessLookupError):
        os.killpg(proc.pid, signal.SIGKILL)
