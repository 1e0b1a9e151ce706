from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple

DOCKER = "docker"


class Status(Enum):
    OK       = auto()
    ADVISORY = auto()
    FATAL    = auto()


@dataclass(frozen=True)
class StepResult:
    """Outcome of one bootstrap step (preflight probe, image provisioning)."""

    step: str
    status: Status = Status.OK
    reason: str = ""
    hint: str = ""                 # manual recovery command, when there is one

    @property
    def ok(self) -> bool:
        return self.status is Status.OK

    @property
    def fatal(self) -> bool:
        return self.status is Status.FATAL


@dataclass(frozen=True)
class ToolInvocation:
    tool: str
    target: str
    executable: str
    args: Tuple[str, ...] = ()

    @property
    def output_file(self) -> str:
        return output_filename(self.tool, self.target)

    @property
    def command(self) -> list[str]:
        return [self.executable, *self.args]


@dataclass(frozen=True)
class ScanTool:
    name: str                      # file prefix, e.g. "testssl"
    label: str                     # human name, e.g. "testssl.sh"
    image: str
    network: str = "host"

    def invocation(self, target: str) -> ToolInvocation:
        args = ("run", "--rm", "--network", self.network, self.image, target)
        return ToolInvocation(self.name, target, DOCKER, args)


@dataclass(frozen=True)
class ScanJob:
    target: str
    output_to_stdout: bool = False


def output_filename(tool: str, target: str) -> str:
    return f"{tool}.{target}.txt"
