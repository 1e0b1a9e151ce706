"""Fan scans out over targets: one pipeline per target, tools in order within it."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ALL_COMPLETED, ThreadPoolExecutor, wait

from ..config import Settings
from ..scanners import testssl, sslyze, sslscan
from ..utils.console import success
from .models import ScanJob, ScanTool, ToolInvocation
from .runner import run_invocation

log = logging.getLogger("hdyssl.orchestrator")

InvocationRunner = Callable[..., "int | None"]


def build_pipeline(settings: Settings) -> list[ScanTool]:
    return [testssl.tool(settings), sslyze.tool(settings), sslscan.tool(settings)]


def run_pipeline(
    job: ScanJob,
    tools: Sequence[ScanTool],
    *,
    output_dir: str = ".",
    runner: InvocationRunner = run_invocation,
) -> list[int | None]:
    """Run every tool against one target, strictly in order. A failure never stops the next tool."""
    codes: list[int | None] = []
    for scan_tool in tools:
        success(f"Running {scan_tool.label}")
        invocation: ToolInvocation = scan_tool.invocation(job.target)
        try:
            codes.append(runner(invocation, job.output_to_stdout, output_dir=output_dir))
        except Exception:
            log.exception("%s failed for %s", scan_tool.name, job.target)
            codes.append(None)
    return codes


def run_scans(
    targets: Sequence[str],
    tools: Sequence[ScanTool],
    *,
    output_dir: str = ".",
    runner: InvocationRunner = run_invocation,
) -> dict[str, list[int | None]]:
    """
    Scan every target concurrently and wait for all of them.

    Live console output is only used when the whole run has exactly one
    target. Repeated targets are scanned once.
    """
    output_to_stdout = len(targets) == 1

    jobs: list[ScanJob] = []
    seen: set[str] = set()
    for target in targets:
        if target in seen:
            log.warning("duplicate target %r skipped", target)
            continue
        seen.add(target)
        jobs.append(ScanJob(target, output_to_stdout))

    if not jobs:
        log.info("no targets to scan")
        return {}

    results: dict[str, list[int | None]] = {}
    with ThreadPoolExecutor(max_workers=len(jobs), thread_name_prefix="hdyssl-scan") as pool:
        futures = {
            pool.submit(run_pipeline, job, tools, output_dir=output_dir, runner=runner): job
            for job in jobs
        }
        wait(futures, return_when=ALL_COMPLETED)

    for future, job in futures.items():
        try:
            results[job.target] = future.result()
        except Exception:
            log.exception("pipeline for %s crashed", job.target)
            results[job.target] = []
    return results
