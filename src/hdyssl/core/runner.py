"""
Run one scanner invocation and route its combined output.

Output always lands in the per-target, per-tool file (append mode). In
single-target runs it is mirrored to the console as it arrives.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from contextlib import suppress
from typing import BinaryIO

from ..utils.console import console, success, failure
from .models import ToolInvocation

log = logging.getLogger("hdyssl.runner")

CHUNK_SIZE = 4096
MULTI_TARGET_NOTICE = "Running scan across all domains, please wait."


class FileSink:
    """Writes to the output file only."""

    def __init__(self, fh: BinaryIO) -> None:
        self.fh = fh

    def write(self, data: bytes) -> None:
        self.fh.write(data)

    def flush(self) -> None:
        self.fh.flush()

    def close(self) -> None:
        self.fh.close()


class TeeSink(FileSink):
    """Writes to the output file and to a live stream. Closing leaves the stream open."""

    def __init__(self, fh: BinaryIO, stream: BinaryIO | None = None) -> None:
        super().__init__(fh)
        self.stream = stream if stream is not None else sys.stdout.buffer

    def write(self, data: bytes) -> None:
        self.fh.write(data)
        self.stream.write(data)
        self.stream.flush()

    def flush(self) -> None:
        self.fh.flush()
        self.stream.flush()

    def close(self) -> None:
        try:
            with suppress(OSError):
                self.stream.flush()
        finally:
            self.fh.close()


def open_sink(path: str, output_to_stdout: bool, stream: BinaryIO | None = None) -> FileSink:
    fh = open(path, "ab")
    return TeeSink(fh, stream) if output_to_stdout else FileSink(fh)


def _pump(proc: subprocess.Popen, sink: FileSink) -> None:
    assert proc.stdout is not None
    while True:
        chunk = proc.stdout.read1(CHUNK_SIZE)
        if not chunk:
            break
        sink.write(chunk)


def run_invocation(
    invocation: ToolInvocation,
    output_to_stdout: bool,
    *,
    output_dir: str = ".",
    stream: BinaryIO | None = None,
) -> int | None:
    """
    Execute *invocation*, returning its exit code, or None when it never ran.

    Failures are reported on the console and logged; nothing is raised.
    """
    cmd = invocation.command
    cmd_str = " ".join(cmd)
    success(f"Running command: {cmd_str}")
    console.print()

    path = os.path.join(output_dir, invocation.output_file)
    try:
        sink = open_sink(path, output_to_stdout, stream)
    except OSError as exc:
        failure(f"Error opening file: {exc}")
        log.warning("skipping %s for %s: cannot open %s: %s", invocation.tool, invocation.target, path, exc)
        return None

    try:
        if not output_to_stdout:
            success(MULTI_TARGET_NOTICE)
        log.info("exec: %s -> %s", cmd_str, path)
        try:
            proc = subprocess.Popen(cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
        except OSError as exc:
            failure(f"Error running the following command {invocation.executable}: {exc}")
            log.warning("launch failed for %s (%s): %s", invocation.tool, invocation.target, exc)
            return None
        with proc:
            try:
                _pump(proc, sink)
            except OSError as exc:
                # stop the child so it cannot block on a pipe nobody reads
                proc.kill()
                proc.wait()
                failure(f"Error writing output of {cmd_str}: {exc}")
                log.warning("output of %s for %s lost: %s", invocation.tool, invocation.target, exc)
                return None
            code = proc.wait()
    finally:
        sink.close()

    if code != 0:
        failure(f"Error running the following command {cmd_str}: exit status {code}")
        log.warning("%s for %s exited with %d", invocation.tool, invocation.target, code)
    return code
