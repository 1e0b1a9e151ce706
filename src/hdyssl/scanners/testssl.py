"""testssl.sh, run from the upstream container image."""

from ..config import Settings
from ..core.models import ScanTool

NAME  = "testssl"
LABEL = "testssl.sh"


def tool(settings: Settings) -> ScanTool:
    return ScanTool(NAME, LABEL, settings.testssl_image)
