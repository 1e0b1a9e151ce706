"""Exceptions raised by hdySSL library code. Only the CLI turns them into exit codes."""


class HdySSLError(Exception):
    """Base class for hdySSL errors."""


class TargetListError(HdySSLError):
    """The target list file could not be opened or read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
