import subprocess, logging
from collections.abc import Iterator

log = logging.getLogger("hdyssl")


def run_subprocess(cmd: list[str]) -> subprocess.CompletedProcess:
    """Run *cmd* to completion with captured text output. Launch errors (OSError) propagate."""
    log.info("exec: %s", " ".join(cmd))
    res = subprocess.run(cmd, capture_output=True, text=True, check=False)
    if res.returncode != 0:
        log.warning("non‑zero exit (%d) stderr=%s", res.returncode, res.stderr.strip())
    return res


def read_lines(path: str) -> Iterator[str]:
    """
    Yield lines of a UTF-8 text file split on "\n" only. The "\n" and one
    "\r" before it are removed; a lone "\r" stays part of the line.
    """
    with open(path, encoding="utf-8", newline="\n") as fh:
        for line in fh:
            line = line.removesuffix("\n")
            yield line.removesuffix("\r")
