import logging

from ..errors import TargetListError
from ..utils.io import read_lines

log = logging.getLogger("hdyssl.targets")


def load_targets(domain: str | None = None, domain_list: str | None = None) -> list[str]:
    """
    Resolve the targets to scan.

    A single domain wins over a list file. List lines are taken verbatim,
    blank lines and duplicates included.
    """
    if domain:
        return [domain]
    if domain_list:
        try:
            targets = list(read_lines(domain_list))
        except (OSError, UnicodeDecodeError) as exc:
            raise TargetListError(domain_list, str(exc)) from exc
        log.info("loaded %d targets from %s", len(targets), domain_list)
        return targets
    return []
