"""Preflight probes: network, docker, git. Each returns a StepResult; nothing here exits."""

from __future__ import annotations

import logging
import platform
import subprocess
from collections.abc import Callable, Sequence

from ..config import Settings
from ..utils.console import success, failure
from ..utils.io import run_subprocess
from .models import DOCKER, Status, StepResult
from .state import EnvironmentState

log = logging.getLogger("hdyssl.preflight")

Runner = Callable[[list[str]], subprocess.CompletedProcess]


def ping_command(host: str, system: str | None = None) -> list[str]:
    # one packet; windows spells the count flag differently
    if (system or platform.system()) == "Windows":
        return ["ping", host, "-n", "1"]
    return ["ping", host, "-c", "1"]


def _probe(cmd: list[str], run: Runner) -> tuple[int | None, str]:
    try:
        res = run(cmd)
    except OSError as exc:
        return None, str(exc)
    return res.returncode, (res.stderr or "").strip()


def check_connectivity(host: str, run: Runner = run_subprocess, system: str | None = None) -> StepResult:
    code, err = _probe(ping_command(host, system), run)
    if code is None:
        failure(f"Ping command failed to execute: {err}")
        return StepResult("connectivity", Status.FATAL, err)
    if code != 0:
        failure(f"Outbound Ping to {host} unsuccessful with exit code {code}")
        return StepResult("connectivity", Status.FATAL, f"exit code {code}")
    success("Check Internet Connectivity")
    return StepResult("connectivity")


def check_docker(run: Runner = run_subprocess) -> StepResult:
    code, err = _probe([DOCKER, "--version"], run)
    if code != 0:
        reason = err or f"exit code {code}"
        failure(
            "Docker check failed, it is either not installed, not running with elevated privileges, "
            f"or the process is currently not running: {reason}"
        )
        return StepResult("docker", Status.FATAL, reason)
    success("Check Docker Setup")
    return StepResult("docker")


def check_git(run: Runner = run_subprocess) -> StepResult:
    code, err = _probe(["git", "--version"], run)
    if code != 0:
        reason = err or f"exit code {code}"
        failure(f"Git check failed, it is either not installed or there is an issue with your PATH: {reason}")
        return StepResult("git", Status.FATAL, reason)
    success("Check Git Setup")
    return StepResult("git")


def default_checks(settings: Settings, run: Runner = run_subprocess) -> list[Callable[[], StepResult]]:
    return [
        lambda: check_connectivity(settings.probe_host, run),
        lambda: check_docker(run),
        lambda: check_git(run),
    ]


def verify_environment(
    settings: Settings,
    checks: Sequence[Callable[[], StepResult]] | None = None,
) -> EnvironmentState:
    """Run the probes in order and stop at the first one that fails."""
    state = EnvironmentState()
    for check in checks if checks is not None else default_checks(settings):
        result = state.record(check())
        if not result.ok:
            log.warning("preflight %s failed: %s", result.step, result.reason)
            break
    return state
