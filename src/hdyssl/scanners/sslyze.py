from ..config import Settings
from ..core.models import ScanTool

NAME  = "sslyze"
LABEL = "sslyze"


def tool(settings: Settings) -> ScanTool:
    return ScanTool(NAME, LABEL, settings.sslyze_image)
