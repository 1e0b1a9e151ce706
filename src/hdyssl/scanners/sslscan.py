"""
sslscan has no published image we trust, so it is built locally from
upstream source the first time it is needed.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Callable

from ..config import Settings
from ..core.models import DOCKER, ScanTool, Status, StepResult
from ..utils.console import success, failure, info
from ..utils.io import run_subprocess

log = logging.getLogger("hdyssl.sslscan")

NAME  = "sslscan"
LABEL = "sslscan"
STEP  = "sslscan-image"


def tool(settings: Settings) -> ScanTool:
    return ScanTool(NAME, LABEL, settings.sslscan_image)


def clone_command(settings: Settings) -> list[str]:
    return ["git", "clone", settings.sslscan_repo, settings.sslscan_clone_dir]


def build_command(settings: Settings) -> list[str]:
    context = settings.sslscan_clone_dir.rstrip("/") + "/"
    return [DOCKER, "build", "-t", settings.sslscan_image, context, "--network", "host"]


def _failed(cmd: list[str], run: Callable[[list[str]], subprocess.CompletedProcess]) -> str | None:
    """Run *cmd*; return an error description, or None on success."""
    try:
        res = run(cmd)
    except OSError as exc:
        return str(exc)
    if res.returncode != 0:
        return (res.stderr or "").strip() or f"exit status {res.returncode}"
    return None


def ensure_image(
    settings: Settings,
    run: Callable[[list[str]], subprocess.CompletedProcess] = run_subprocess,
    remove: Callable[[str], None] = shutil.rmtree,
) -> StepResult:
    """
    Make sure the sslscan image exists, cloning and building it if missing.

    A failed image query is reported but does not trigger a rebuild. Clone and
    build failures are fatal; failing to clean up the clone is not.
    """
    query = [DOCKER, "images", "-q", settings.sslscan_image]
    try:
        res = run(query)
    except OSError as exc:
        res, err = None, str(exc)
    else:
        err = (res.stderr or "").strip() or f"exit status {res.returncode}"

    if res is None or res.returncode != 0:
        failure(f"Issues checking if existing image exists for SSLSCAN: {err}")
        return StepResult(STEP, Status.ADVISORY, err)

    if (res.stdout or "").strip():
        log.info("image %s present", settings.sslscan_image)
        return StepResult(STEP)

    failure(f"Docker image '{settings.sslscan_image}' is missing")
    info("Cloning and building 'sslscan'")

    clone = clone_command(settings)
    err = _failed(clone, run)
    if err is not None:
        failure(
            "Problems with executing Git Clone, attempt manual installation to check for connectivity\n"
            f"\t- {' '.join(clone)}"
        )
        return StepResult(STEP, Status.FATAL, err, " ".join(clone))

    build = build_command(settings)
    err = _failed(build, run)
    if err is not None:
        failure(
            f"Problems with executing Docker Build on the {build[4]} directory, "
            "attempt manual installation to check for connectivity"
        )
        failure(" ".join(build))
        return StepResult(STEP, Status.FATAL, err, " ".join(build))

    # the built image no longer needs the source tree
    try:
        remove(settings.sslscan_clone_dir)
    except OSError as exc:
        failure(
            "Failed to delete & remove the remnants from the git cloned files. "
            f"Do it manually as the folder and its contents are not needed. Error: {exc}"
        )
        log.warning("could not remove %s: %s", settings.sslscan_clone_dir, exc)

    success("Setup for 'sslscan' complete")
    return StepResult(STEP)
