"""hdySSL CLI
-----------------
Entry‑point for the hdySSL tool.
Runs testssl.sh, sslyze and sslscan (all in docker) against one domain or a list.
"""

import logging

import typer

from .config import load_settings
from .core.orchestrator import build_pipeline, run_scans
from .core.preflight import verify_environment
from .core.targets import load_targets
from .errors import TargetListError
from .scanners import sslscan
from .utils.console import console, failure

# ─────────────────────────────────────────────────────────────────────────────
# Globals & singletons
# ─────────────────────────────────────────────────────────────────────────────

app: typer.Typer = typer.Typer(add_completion=False, rich_markup_mode="rich")
log = logging.getLogger("hdyssl")

DEPENDENCY_HELP = (
    "Dependencies not met due to one/all of the following:\n"
    "\t- Ensure Docker and Git are installed\n"
    "\t- Ensure Docker and Git are in $PATH\n"
    "\t- Ensure internet connectivity is working and no issues with DNS or host files"
)

# ─────────────────────────────────────────────────────────────────────────────
# Helper functions
# ─────────────────────────────────────────────────────────────────────────────


def _log_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=_log_level(level),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

# ─────────────────────────────────────────────────────────────────────────────
# Typer command
# ─────────────────────────────────────────────────────────────────────────────


@app.command()
def main(
    domain: str = typer.Option(
        "", "-d", "--domain", help="Provide the domain excluding the protocol (http/s://)."
    ),
    domain_list: str = typer.Option(
        "", "-D", "--domain-list", "--domainList",
        help="Provide the list of domain names excluding the protocol (http/s://).",
    ),
) -> None:
    """
    Automate the SSL/TLS scanning for end of engagements.

    Runs [bold]testssl.sh[/], [bold]sslyze[/] and [bold]sslscan[/] through Docker so the
    latest tool versions are used without installing them locally. Results go to
    [cyan]<tool>.<domain>.txt[/] in the output directory.
    """
    settings = load_settings()
    _setup_logging(settings.log_level)

    try:
        targets = load_targets(domain, domain_list)
    except TargetListError as exc:
        failure(f"Error reading file containing all URLs {exc.path}: {exc.reason}")
        raise typer.Exit(1)

    env = verify_environment(settings)
    if not env.ok:
        log.error("preflight check %s failed: %s", env.failure.step, env.failure.reason)
        console.print(DEPENDENCY_HELP, markup=False)
        raise typer.Exit(1)

    image = sslscan.ensure_image(settings)
    if image.fatal:
        log.error("sslscan image unavailable: %s", image.reason)
        raise typer.Exit(1)

    results = run_scans(targets, build_pipeline(settings), output_dir=settings.output_dir)
    failed = sum(1 for codes in results.values() for code in codes if code != 0)
    if failed:
        log.info("%d scanner invocation(s) did not exit cleanly", failed)


# ─────────────────────────────────────────────────────────────────────────────
# python -m hdyssl.cli entry‑point fallback
# ─────────────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
